from fastapi import APIRouter, HTTPException, Query, Path, status
from typing import List
import logging

from app.core.config import settings
from app.core.exceptions import SalonSlotsError, to_http_exception
from app.schemas.availability import AvailabilitySlot
from app.services.availability_service import get_day_availability, get_open_dates

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/{vendor_id}", response_model=List[AvailabilitySlot])
async def get_vendor_day_availability(
    vendor_id: str = Path(..., title="The ID or slug of the vendor"),
    date: str = Query(..., description="Date in YYYY-MM-DD format"),
    duration: int = Query(
        settings.DEFAULT_SERVICE_DURATION_MINUTES,
        description="Requested service duration in minutes"
    )
):
    """
    Get the bookable slot grid of a vendor for one day.
    A day the vendor is closed returns an empty list.
    """
    try:
        slots = await get_day_availability(vendor_id, date, duration)
        return [AvailabilitySlot.from_candidate(slot) for slot in slots]
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error in get_vendor_day_availability: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch availability"
        )

@router.get("/{vendor_id}/dates", response_model=List[int])
async def get_vendor_open_dates(
    vendor_id: str,
    year: int = Query(..., description="Year to check"),
    month: int = Query(..., description="Month to check (1-12)")
):
    """
    Get the days of a month on which a vendor is open
    """
    try:
        return await get_open_dates(vendor_id, year, month)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error in get_vendor_open_dates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch open dates"
        )
