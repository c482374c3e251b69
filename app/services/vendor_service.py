from typing import Dict, Any
import logging

from app.core.exceptions import NotFoundError
from app.db.vendors import update_vendor_schedule
from app.schemas.availability import WeeklySchedule
from app.services.availability_service import get_vendor_schedule

logger = logging.getLogger(__name__)

async def get_schedule(vendor_id: str) -> Dict[str, Any]:
    """
    Get a vendor's weekly schedule in canonical form
    """
    _, schedule = await get_vendor_schedule(vendor_id)
    return schedule.as_dict()

async def update_schedule(vendor_id: str, schedule: WeeklySchedule) -> Dict[str, Any]:
    """
    Replace a vendor's weekly schedule with a validated canonical one
    """
    vendor, _ = await get_vendor_schedule(vendor_id)

    updated = await update_vendor_schedule(vendor["id"], schedule.as_dict())
    if not updated:
        raise NotFoundError("Vendor not found")

    logger.info(f"Updated schedule for vendor {vendor['id']}")
    return schedule.as_dict()
