"""Time slot generation for listing availability dates"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ...config import SLOT_DAY_END_HOUR, SLOT_DAY_START_HOUR, SLOT_INTERVAL_MINUTES
from ...shared.validators import parse_iso_date, parse_slot_time


def day_slots(day: date, now: Optional[datetime] = None) -> list[datetime]:
    """All slot start times for a day, skipping those at or before now."""
    cursor = datetime.combine(day, time(hour=SLOT_DAY_START_HOUR))
    day_end = datetime.combine(day, time(hour=SLOT_DAY_END_HOUR))
    step = timedelta(minutes=SLOT_INTERVAL_MINUTES)

    slots = []
    while cursor < day_end:
        if now is None or cursor > now:
            slots.append(cursor)
        cursor += step
    return slots


def generate_slots(availability: Iterable[str], now: datetime) -> list[dict]:
    """
    Expand a listing's availability dates into bookable time slots.

    Args:
        availability: ISO dates (YYYY-MM-DD) offered by the host
        now: Current naive UTC time; past dates and slots are dropped

    Returns:
        [{"date": "2025-06-01", "times": ["09:00", "09:30", ...]}, ...]
        in the host's order, omitting dates with no remaining slots
    """
    result = []
    seen = set()
    for raw in availability or []:
        try:
            day = parse_iso_date(raw)
        except (ValueError, AttributeError):
            continue
        if day in seen or day < now.date():
            continue
        seen.add(day)

        times = [slot.strftime("%H:%M") for slot in day_slots(day, now)]
        if times:
            result.append({"date": day.isoformat(), "times": times})
    return result


def resolve_offered_slot(
    availability: Iterable[str], date_str: Optional[str], time_str: Optional[str], now: datetime
) -> Optional[datetime]:
    """Return the slot datetime if date/time is one of the listing's offered slots."""
    if not date_str or not time_str:
        return None
    try:
        day = parse_iso_date(date_str)
        at = parse_slot_time(time_str)
    except ValueError:
        return None

    offered_days = set()
    for raw in availability or []:
        try:
            offered_days.add(parse_iso_date(raw))
        except (ValueError, AttributeError):
            continue
    if day not in offered_days:
        return None

    candidate = datetime.combine(day, at)
    if candidate in day_slots(day, now):
        return candidate
    return None
