from typing import Dict, Any, List, Optional
from datetime import datetime
import logging

from pymongo.errors import DuplicateKeyError

from app.core.exceptions import InvalidArgumentError, NotFoundError, SlotConflictError
from app.db.appointments import (
    get_active_appointments_for_day, get_appointment, get_customer_appointments,
    insert_appointment, set_appointment_status
)
from app.schemas.booking import ACTIVE_STATUSES, BookingCreate, BookingStatus
from app.services.availability_service import (
    compute_availability, get_vendor_schedule, normalize_bookings
)
from app.utils.time_utils import parse_date, parse_time_of_day

logger = logging.getLogger(__name__)

async def create_booking(booking_in: BookingCreate, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Create a pending appointment after re-checking the slot against the
    vendor's current availability

    Raises:
        InvalidArgumentError: Past start, or a time that is not on the vendor's slot grid
        NotFoundError: Unknown vendor
        SlotConflictError: The slot is taken
    """
    now = now or datetime.now()
    day = parse_date(booking_in.date)
    start = datetime.combine(day, parse_time_of_day(booking_in.time))

    if start < now:
        raise InvalidArgumentError("Cannot book appointments in the past.")

    vendor, schedule = await get_vendor_schedule(booking_in.vendorId)
    vendor_id = vendor["id"]

    raw_bookings = await get_active_appointments_for_day(vendor_id, day)
    slots = compute_availability(schedule, normalize_bookings(raw_bookings), day, booking_in.duration, now)

    requested = start.strftime("%H:%M")
    slot = next((s for s in slots if s.startTime == requested), None)
    if slot is None:
        raise InvalidArgumentError("Requested time is not a bookable slot for this vendor.")
    if not slot.available:
        raise SlotConflictError("This time slot was just taken. Please try another time.")

    booking_data = booking_in.model_dump()
    booking_data["vendorId"] = vendor_id
    booking_data["date"] = start
    booking_data["time"] = requested
    booking_data["status"] = BookingStatus.PENDING.value
    booking_data["createdAt"] = now

    try:
        booking = await insert_appointment(booking_data)
    except DuplicateKeyError:
        # Lost a race with a concurrent booking for the same start
        raise SlotConflictError("This time slot was just taken. Please try another time.")

    logger.info(f"Created appointment {booking['id']} for vendor {vendor_id} at {start.isoformat()}")
    return booking

async def _change_status(
    vendor_id: str,
    booking_id: str,
    status: BookingStatus,
    from_statuses,
    now: Optional[datetime]
) -> Dict[str, Any]:
    vendor, _ = await get_vendor_schedule(vendor_id)
    vendor_id = vendor["id"]

    booking = await get_appointment(vendor_id, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    if booking["status"] not in from_statuses:
        raise InvalidArgumentError(
            f"Cannot change a {booking['status']} booking to {status.value}."
        )

    try:
        updated = await set_appointment_status(
            vendor_id, booking_id, status.value, from_statuses, now or datetime.now()
        )
    except DuplicateKeyError:
        raise SlotConflictError("This time slot is already taken by another booking.")

    if not updated:
        # Status changed between the read and the update
        raise SlotConflictError("Booking was modified concurrently. Please retry.")
    return updated

async def accept_booking(vendor_id: str, booking_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Confirm a pending appointment
    """
    return await _change_status(
        vendor_id, booking_id, BookingStatus.CONFIRMED, (BookingStatus.PENDING.value,), now
    )

async def cancel_booking(vendor_id: str, booking_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Cancel a pending or confirmed appointment, freeing its slot
    """
    return await _change_status(vendor_id, booking_id, BookingStatus.CANCELLED, ACTIVE_STATUSES, now)

async def get_user_bookings(customer_id: str, skip: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
    """
    Get a customer's appointments across all vendors, newest first
    """
    if not customer_id:
        raise InvalidArgumentError("User ID is required")
    return await get_customer_appointments(customer_id, skip=skip, limit=limit)
