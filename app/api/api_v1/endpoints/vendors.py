from fastapi import APIRouter, HTTPException, status
from typing import Dict, Any
import logging

from app.core.exceptions import SalonSlotsError, to_http_exception
from app.schemas.availability import WeeklySchedule
from app.services.vendor_service import get_schedule, update_schedule

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/{vendor_id}/schedule", response_model=WeeklySchedule)
async def read_vendor_schedule(vendor_id: str):
    """
    Get a vendor's weekly operating schedule
    """
    try:
        return await get_schedule(vendor_id)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error in read_vendor_schedule: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch schedule"
        )

@router.put("/{vendor_id}/schedule", response_model=Dict[str, Any])
async def replace_vendor_schedule(vendor_id: str, schedule: WeeklySchedule):
    """
    Replace a vendor's weekly operating schedule
    """
    try:
        updated = await update_schedule(vendor_id, schedule)
        return {"message": "Schedule updated successfully", "schedule": updated}
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error in replace_vendor_schedule: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update schedule"
        )
