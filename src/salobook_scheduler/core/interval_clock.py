'''
Minute arithmetic over a reference window.
'''
from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from ..common.config import settings


def combine(reference_date: date, time_of_day: time) -> datetime:
    """Anchors a wall-clock time on a date. The result is naive (local)."""
    return datetime.combine(reference_date, time_of_day.replace(tzinfo=None))


def minutes_between(window_start: datetime, moment: datetime) -> int:
    """Whole minutes from window_start to moment, floored."""
    return int((moment - window_start) // timedelta(minutes=1))


def at_offset(window_start: datetime, minutes: int) -> datetime:
    return window_start + timedelta(minutes=minutes)


def to_local_wall_clock(moment: datetime) -> datetime:
    """
    Converts a timestamp to local wall-clock time.

    Time-off blocks and staff availability windows may come back from the
    employee service in UTC while schedules, breaks and booking slots are
    local. Aware datetimes are moved to
    UTC and shifted by the fixed local offset; naive ones are assumed to
    be local already.
    """
    if moment.tzinfo is None:
        return moment
    as_utc = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return as_utc + timedelta(minutes=settings.LOCAL_UTC_OFFSET_MINUTES)


def parse_time_of_day(value: Union[time, datetime, str]) -> time:
    """
    Reduces a time-ish value to its wall-clock part.

    Accepts "HH:MM", "HH:MM:SS" and full ISO strings like
    "2025-07-02T09:00:00Z", where only the clock part is kept.
    """
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        raw = value.strip()
        if "T" in raw:
            raw = raw.split("T", 1)[1]
        # drop fractional seconds and any zone suffix
        raw = raw.split(".")[0].rstrip("Z")
        for sign in ("+", "-"):
            if sign in raw:
                raw = raw.split(sign)[0]
        parts = [int(p) for p in raw.split(":")]
        if len(parts) < 2:
            raise ValueError(f"Cannot parse time of day from '{value}'")
        hours, minutes = parts[0], parts[1]
        seconds = parts[2] if len(parts) > 2 else 0
        return time(hours, minutes, seconds)
    raise ValueError(f"Cannot convert {type(value)} to time")
