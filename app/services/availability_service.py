"""
Appointment availability for a vendor on a single calendar day.

The calculator (`compute_availability`) is a pure function over a normalized
weekly schedule, the day's active bookings and an injected `now`. The
`get_day_availability` wrapper does the database reads and the normalization
of loosely-shaped schedule and appointment documents before calling it.
"""
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from app.core.config import settings
from app.core.exceptions import InvalidArgumentError, NotFoundError
from app.db.appointments import get_active_appointments_for_day
from app.db.vendors import get_vendor_by_id
from app.schemas.availability import CandidateSlot, DaySchedule, ExistingBooking, WeeklySchedule
from app.utils.time_utils import (
    DAY_NAMES, day_name, format_display_time, format_time, parse_date, parse_time_of_day
)

logger = logging.getLogger(__name__)

SLOT_INTERVAL_MINUTES = 30

# Synonyms found in stored schedule documents, canonical name first
OPEN_TIME_KEYS = ("openTime", "open", "start")
CLOSE_TIME_KEYS = ("closeTime", "close", "end")


def _first_present(raw: Dict[str, Any], keys: Iterable[str]) -> Optional[Any]:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def normalize_day_schedule(raw: Any) -> DaySchedule:
    """
    Build a canonical DaySchedule from a stored day entry.

    A missing entry or a falsy `isOpen` means closed. An open day without
    times gets the default hours. Unparseable or inverted hours close the day.
    """
    if not isinstance(raw, dict) or not raw.get("isOpen"):
        return DaySchedule(isOpen=False)

    open_raw = _first_present(raw, OPEN_TIME_KEYS) or settings.DEFAULT_OPEN_TIME
    close_raw = _first_present(raw, CLOSE_TIME_KEYS) or settings.DEFAULT_CLOSE_TIME
    open_at = parse_time_of_day(open_raw)
    close_at = parse_time_of_day(close_raw)

    if open_at is None or close_at is None or open_at >= close_at:
        logger.warning(f"Ignoring day schedule with invalid hours: {open_raw!r}-{close_raw!r}")
        return DaySchedule(isOpen=False)

    return DaySchedule(
        isOpen=True,
        openTime=open_at.strftime("%H:%M"),
        closeTime=close_at.strftime("%H:%M")
    )


def normalize_schedule(raw_schedule: Any) -> WeeklySchedule:
    """Normalize a stored weekly schedule document, keyed by lowercase day name."""
    if not isinstance(raw_schedule, dict):
        return WeeklySchedule()

    by_day = {str(key).lower(): value for key, value in raw_schedule.items()}
    return WeeklySchedule(**{name: normalize_day_schedule(by_day.get(name)) for name in DAY_NAMES})


def _booking_duration(raw: Dict[str, Any]) -> int:
    value = raw.get("durationMinutes", raw.get("duration"))
    if isinstance(value, bool):
        value = None
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = 0
    # A zero-length booking would never conflict with anything
    if minutes <= 0:
        return settings.DEFAULT_BOOKING_DURATION_MINUTES
    return minutes


def normalize_booking(raw: Dict[str, Any]) -> Optional[ExistingBooking]:
    """
    Convert a stored appointment into an ExistingBooking.

    The start comes from the `date` instant when stored as a datetime,
    otherwise from a `time`/`startTime` string. Returns None when no start
    can be determined.
    """
    start = raw.get("date")
    if isinstance(start, datetime):
        start_time = format_time(start)
    else:
        start_time = None
        for key in ("time", "startTime"):
            parsed = parse_time_of_day(raw.get(key))
            if parsed is not None:
                start_time = parsed.strftime("%H:%M")
                break

    if start_time is None:
        logger.warning(f"Skipping appointment {raw.get('_id')} without a usable start time")
        return None

    return ExistingBooking(startTime=start_time, durationMinutes=_booking_duration(raw))


def normalize_bookings(raw_bookings: Iterable[Dict[str, Any]]) -> List[ExistingBooking]:
    bookings = []
    for raw in raw_bookings:
        booking = normalize_booking(raw)
        if booking is not None:
            bookings.append(booking)
    return bookings


def _booked_intervals(bookings: Iterable[ExistingBooking], day: date) -> List[Tuple[datetime, datetime]]:
    intervals = []
    for booking in bookings:
        start_at = parse_time_of_day(booking.startTime)
        if start_at is None:
            logger.warning(f"Skipping booking with malformed start time: {booking.startTime!r}")
            continue
        duration = booking.durationMinutes
        if duration <= 0:
            duration = settings.DEFAULT_BOOKING_DURATION_MINUTES
        start = datetime.combine(day, start_at)
        intervals.append((start, start + timedelta(minutes=duration)))
    return intervals


def compute_availability(
    schedule: WeeklySchedule,
    bookings: List[ExistingBooking],
    day: date,
    service_duration_minutes: int,
    now: datetime
) -> List[CandidateSlot]:
    """
    Compute the slot grid for one day.

    Candidates start at opening time and advance in 30 minute steps. Generation
    stops at the first candidate whose service would run past closing time.
    A candidate is unavailable when it overlaps a booking (half-open intervals,
    so touching endpoints are fine) or, for today, when it starts before `now`.

    Args:
        schedule: Normalized weekly schedule of the vendor
        bookings: Active bookings of the vendor on `day`
        day: Calendar day to compute
        service_duration_minutes: Length of the requested service
        now: Current local time; an aware value is converted to local time

    Returns:
        Slots in ascending start order, or [] when the vendor is closed
    """
    if isinstance(service_duration_minutes, bool) or not isinstance(service_duration_minutes, int) \
            or service_duration_minutes <= 0:
        raise InvalidArgumentError("Service duration must be a positive number of minutes")

    day_schedule = schedule.for_day(day_name(day))
    if not day_schedule.isOpen:
        return []

    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)

    open_at = datetime.combine(day, parse_time_of_day(day_schedule.openTime))
    close_at = datetime.combine(day, parse_time_of_day(day_schedule.closeTime))
    service_length = timedelta(minutes=service_duration_minutes)
    step = timedelta(minutes=SLOT_INTERVAL_MINUTES)
    booked = _booked_intervals(bookings, day)
    is_today = day == now.date()

    slots: List[CandidateSlot] = []
    candidate = open_at
    while candidate < close_at:
        slot_end = candidate + service_length
        if slot_end > close_at:
            break

        conflict = any(candidate < booking_end and slot_end > booking_start
                       for booking_start, booking_end in booked)
        past = is_today and candidate < now

        slots.append(CandidateSlot(
            startTime=format_time(candidate),
            displayTime=format_display_time(candidate),
            available=not conflict and not past
        ))
        candidate += step

    return slots


async def get_vendor_schedule(vendor_id: str) -> Tuple[Dict[str, Any], WeeklySchedule]:
    """
    Load a vendor and its normalized weekly schedule.

    Raises:
        InvalidArgumentError: vendor_id is empty
        NotFoundError: no such vendor
    """
    if not vendor_id or not vendor_id.strip():
        raise InvalidArgumentError("Missing vendorId")

    vendor = await get_vendor_by_id(vendor_id)
    if not vendor:
        raise NotFoundError("Vendor not found")

    return vendor, normalize_schedule(vendor.get("schedule"))


async def get_day_availability(
    vendor_id: str,
    date_str: str,
    service_duration_minutes: Optional[int] = None,
    now: Optional[datetime] = None
) -> List[CandidateSlot]:
    """
    Fetch a vendor's schedule and the day's active bookings, then compute the
    slot grid for the requested service duration
    """
    day = parse_date(date_str)
    if service_duration_minutes is None:
        service_duration_minutes = settings.DEFAULT_SERVICE_DURATION_MINUTES

    vendor, schedule = await get_vendor_schedule(vendor_id)
    raw_bookings = await get_active_appointments_for_day(vendor["id"], day)

    return compute_availability(
        schedule,
        normalize_bookings(raw_bookings),
        day,
        service_duration_minutes,
        now or datetime.now()
    )


async def get_open_dates(vendor_id: str, year: int, month: int) -> List[int]:
    """
    Get the days of a month on which the vendor is open
    """
    if month < 1 or month > 12:
        raise InvalidArgumentError("Month must be between 1 and 12")
    if year < 1 or year > 9999:
        raise InvalidArgumentError("Invalid year")

    _, schedule = await get_vendor_schedule(vendor_id)

    _, num_days = monthrange(year, month)
    return [
        day for day in range(1, num_days + 1)
        if schedule.for_day(day_name(date(year, month, day))).isOpen
    ]
