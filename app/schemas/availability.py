from pydantic import BaseModel, Field, model_validator
from typing import Dict

from app.utils.time_utils import parse_time_of_day

class DaySchedule(BaseModel):
    isOpen: bool = False
    openTime: str = "09:00"  # HH:MM
    closeTime: str = "17:00"  # HH:MM

    @model_validator(mode="after")
    def validate_hours(self) -> "DaySchedule":
        open_at = parse_time_of_day(self.openTime)
        close_at = parse_time_of_day(self.closeTime)
        if open_at is None or close_at is None:
            raise ValueError("openTime and closeTime must be in HH:MM format")
        if self.isOpen and open_at >= close_at:
            raise ValueError("openTime must be before closeTime")
        return self

class WeeklySchedule(BaseModel):
    sunday: DaySchedule = Field(default_factory=DaySchedule)
    monday: DaySchedule = Field(default_factory=DaySchedule)
    tuesday: DaySchedule = Field(default_factory=DaySchedule)
    wednesday: DaySchedule = Field(default_factory=DaySchedule)
    thursday: DaySchedule = Field(default_factory=DaySchedule)
    friday: DaySchedule = Field(default_factory=DaySchedule)
    saturday: DaySchedule = Field(default_factory=DaySchedule)

    def for_day(self, name: str) -> DaySchedule:
        return getattr(self, name)

    def as_dict(self) -> Dict[str, Dict]:
        return self.model_dump()

class ExistingBooking(BaseModel):
    startTime: str  # HH:MM
    durationMinutes: int = 60

class CandidateSlot(BaseModel):
    startTime: str  # HH:MM
    displayTime: str  # e.g. "9:30 AM"
    available: bool

class AvailabilitySlot(BaseModel):
    """Wire shape of a slot returned by the availability endpoint."""
    time: str
    display: str
    available: bool

    @classmethod
    def from_candidate(cls, slot: CandidateSlot) -> "AvailabilitySlot":
        return cls(time=slot.startTime, display=slot.displayTime, available=slot.available)
