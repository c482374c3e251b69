from datetime import date, datetime, time
from typing import Optional

from app.core.exceptions import InvalidArgumentError

# Indexed by day-of-week with 0 = Sunday
DAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

def day_of_week(day: date) -> int:
    """Day-of-week index of a date, 0 = Sunday .. 6 = Saturday."""
    return (day.weekday() + 1) % 7

def day_name(day: date) -> str:
    return DAY_NAMES[day_of_week(day)]

def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises InvalidArgumentError when the value is missing or malformed.
    """
    if not value or not isinstance(value, str):
        raise InvalidArgumentError("Missing date")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidArgumentError(f"Invalid date format: {value}. Use YYYY-MM-DD")

def parse_time_of_day(value) -> Optional[time]:
    """Parse an HH:MM string, returning None if it cannot be parsed."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        return None

def format_time(moment: datetime) -> str:
    return moment.strftime("%H:%M")

def format_display_time(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. '9:30 AM'."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"
