import pytest
from datetime import date, datetime, timedelta, timezone

from app.core.exceptions import InvalidArgumentError
from app.schemas.availability import DaySchedule, ExistingBooking, WeeklySchedule
from app.services.availability_service import compute_availability

MONDAY = date(2026, 10, 19)
SUNDAY = date(2026, 10, 18)
# Well before MONDAY so no slot is in the past
EARLIER = datetime(2026, 10, 1, 8, 0)

def open_monday(open_time="09:00", close_time="17:00"):
    return WeeklySchedule(monday=DaySchedule(isOpen=True, openTime=open_time, closeTime=close_time))

def times(slots):
    return [slot.startTime for slot in slots]

def by_time(slots):
    return {slot.startTime: slot for slot in slots}

def minutes(hhmm):
    hours, mins = hhmm.split(":")
    return int(hours) * 60 + int(mins)


def test_closed_day_returns_no_slots():
    schedule = open_monday()
    assert compute_availability(schedule, [], SUNDAY, 30, EARLIER) == []

def test_vendor_closed_all_week_returns_no_slots_any_day():
    schedule = WeeklySchedule()
    for offset in range(7):
        day = MONDAY + timedelta(days=offset)
        assert compute_availability(schedule, [], day, 30, EARLIER) == []

def test_full_open_day_with_hour_service():
    slots = compute_availability(open_monday(), [], MONDAY, 60, EARLIER)

    assert len(slots) == 15
    assert slots[0].startTime == "09:00"
    assert slots[0].available is True
    assert slots[-1].startTime == "16:00"
    assert "16:30" not in times(slots)
    assert all(slot.available for slot in slots)

@pytest.mark.parametrize("duration", [15, 30, 45, 60, 90, 120, 240])
def test_no_slot_runs_past_closing(duration):
    slots = compute_availability(open_monday(), [], MONDAY, duration, EARLIER)

    assert slots
    for slot in slots:
        assert minutes(slot.startTime) + duration <= minutes("17:00")

@pytest.mark.parametrize("duration", [30, 50, 60, 180])
def test_slots_advance_in_thirty_minute_steps(duration):
    slots = compute_availability(open_monday("08:30", "19:00"), [], MONDAY, duration, EARLIER)

    starts = [minutes(slot.startTime) for slot in slots]
    assert starts[0] == minutes("08:30")
    assert all(later - earlier == 30 for earlier, later in zip(starts, starts[1:]))

def test_service_longer_than_open_window_returns_no_slots():
    assert compute_availability(open_monday("09:00", "10:00"), [], MONDAY, 90, EARLIER) == []

def test_booking_blocks_overlapping_slots_but_not_touching_ones():
    bookings = [ExistingBooking(startTime="14:00", durationMinutes=60)]
    slots = by_time(compute_availability(open_monday(), bookings, MONDAY, 30, EARLIER))

    assert slots["13:30"].available is True  # ends exactly at 14:00
    assert slots["14:00"].available is False
    assert slots["14:30"].available is False
    assert slots["15:00"].available is True  # starts exactly at booking end

def test_longer_service_is_blocked_by_a_later_booking():
    bookings = [ExistingBooking(startTime="10:00", durationMinutes=60)]
    slots = by_time(compute_availability(open_monday(), bookings, MONDAY, 60, EARLIER))

    assert slots["09:00"].available is True
    assert slots["09:30"].available is False
    assert slots["10:00"].available is False
    assert slots["10:30"].available is False
    assert slots["11:00"].available is True

def test_unavailable_slots_are_still_listed():
    bookings = [ExistingBooking(startTime="09:00", durationMinutes=480)]
    slots = compute_availability(open_monday(), bookings, MONDAY, 30, EARLIER)

    assert len(slots) == 16
    assert not any(slot.available for slot in slots)

def test_zero_duration_booking_still_blocks_an_hour():
    bookings = [ExistingBooking(startTime="10:00", durationMinutes=0)]
    slots = by_time(compute_availability(open_monday(), bookings, MONDAY, 30, EARLIER))

    assert slots["10:00"].available is False
    assert slots["10:30"].available is False
    assert slots["11:00"].available is True

def test_malformed_booking_start_is_ignored():
    bookings = [ExistingBooking(startTime="ten o'clock", durationMinutes=60)]
    slots = compute_availability(open_monday(), bookings, MONDAY, 30, EARLIER)

    assert all(slot.available for slot in slots)

def test_past_slots_are_masked_on_the_current_day():
    now = datetime(2026, 10, 19, 15, 10)
    slots = compute_availability(open_monday(), [], MONDAY, 30, now)

    for slot in slots:
        if minutes(slot.startTime) < minutes("15:10"):
            assert slot.available is False
        else:
            assert slot.available is True
    assert times(slots)[-1] == "16:30"

def test_slot_starting_exactly_now_is_not_past():
    now = datetime(2026, 10, 19, 11, 0)
    slots = by_time(compute_availability(open_monday(), [], MONDAY, 30, now))

    assert slots["10:30"].available is False
    assert slots["11:00"].available is True

def test_future_day_is_not_masked_by_time_of_day():
    now = datetime(2026, 10, 18, 23, 45)
    slots = compute_availability(open_monday(), [], MONDAY, 30, now)

    assert all(slot.available for slot in slots)

def test_aware_now_is_compared_in_local_time():
    local_now = datetime(2026, 10, 19, 12, 0)
    aware_now = local_now.astimezone(timezone.utc)
    slots = by_time(compute_availability(open_monday(), [], MONDAY, 30, aware_now))

    assert slots["11:30"].available is False
    assert slots["12:00"].available is True

def test_display_times_use_twelve_hour_clock():
    slots = by_time(compute_availability(open_monday("09:00", "14:00"), [], MONDAY, 30, EARLIER))

    assert slots["09:30"].displayTime == "9:30 AM"
    assert slots["12:00"].displayTime == "12:00 PM"
    assert slots["13:30"].displayTime == "1:30 PM"

@pytest.mark.parametrize("duration", [0, -30])
def test_non_positive_service_duration_is_rejected(duration):
    with pytest.raises(InvalidArgumentError):
        compute_availability(open_monday(), [], MONDAY, duration, EARLIER)
