from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from app.utils.time_utils import parse_time_of_day

class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DECLINED = "declined"
    COMPLETED = "completed"

# Statuses that block a slot; cancelled/declined bookings free it again
ACTIVE_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)

class BookingCreate(BaseModel):
    vendorId: str
    customerId: str
    customerName: str
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    serviceId: str
    serviceName: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    duration: int = Field(default=60, gt=0)  # Duration in minutes
    price: float = 0

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        if parse_time_of_day(value) is None:
            raise ValueError("time must be in HH:MM format")
        return value

class BookingResponse(BaseModel):
    id: str
    vendorId: str
    customerId: str
    customerName: str
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    serviceId: str
    serviceName: str
    date: datetime
    time: str
    duration: int
    price: float
    status: BookingStatus
    createdAt: datetime
    updatedAt: Optional[datetime] = None
