from fastapi import APIRouter, HTTPException, Query, status
from typing import List
import logging

from app.core.exceptions import SalonSlotsError, to_http_exception
from app.schemas.booking import BookingCreate, BookingResponse
from app.services.booking_service import (
    create_booking, accept_booking, cancel_booking, get_user_bookings
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/", response_model=BookingResponse)
async def create_new_booking(booking_in: BookingCreate):
    """
    Book a slot with a vendor. The booking starts out pending.
    """
    try:
        return await create_booking(booking_in)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Booking error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking."
        )

@router.get("/customer/{customer_id}", response_model=List[BookingResponse])
async def list_customer_bookings(
    customer_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100)
):
    """
    Get a customer's bookings across all vendors
    """
    try:
        return await get_user_bookings(customer_id, skip=skip, limit=limit)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching user bookings: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch bookings."
        )

@router.put("/{vendor_id}/{booking_id}/accept", response_model=BookingResponse)
async def accept_vendor_booking(vendor_id: str, booking_id: str):
    """
    Confirm a pending booking
    """
    try:
        return await accept_booking(vendor_id, booking_id)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Accept booking error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to accept booking."
        )

@router.put("/{vendor_id}/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_vendor_booking(vendor_id: str, booking_id: str):
    """
    Cancel a booking
    """
    try:
        return await cancel_booking(vendor_id, booking_id)
    except SalonSlotsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error cancelling booking: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cancel booking"
        )
