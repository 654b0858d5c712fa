from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE, WEEKEND_DAYS
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_iso_datetime(value: str, tz: tzinfo) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are read as wall-clock time in `tz`."""
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid timestamp {value!r}")
    if parsed.tzinfo is None:
        return localize(parsed, tz)
    return parsed


def parse_hhmm(value: str) -> time:
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def now_utc() -> datetime:
    """Current instant (aware, UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def resolve_timezone(name: Optional[str], default: str = DEFAULT_TIMEZONE) -> tzinfo:
    try:
        return pytz.timezone(name or default)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown timezone {name!r}")


def ensure_aware(instant: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return pytz.utc.localize(instant)
    return instant


def localize(naive: datetime, tz: tzinfo) -> datetime:
    # pytz zones need localize() to pick the right offset; fixed-offset zones don't have it.
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def to_local(instant: datetime, tz: tzinfo) -> datetime:
    return ensure_aware(instant).astimezone(tz)


def local_date(instant: datetime, tz: tzinfo) -> date:
    return to_local(instant, tz).date()


def local_time_of_day(instant: datetime, tz: tzinfo) -> time:
    """Wall-clock (hour, minute) of `instant` in `tz`."""
    local = to_local(instant, tz)
    return time(local.hour, local.minute)


def at_local_time(day: date, clock: time, tz: tzinfo) -> datetime:
    return localize(datetime.combine(day, clock), tz)


def format_hhmm(clock: time) -> str:
    return clock.strftime("%H:%M")


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive on both ends."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def to_naive_utc(instant: Optional[datetime]) -> Optional[datetime]:
    """MySQL DATETIME columns hold naive UTC."""
    if instant is None:
        return None
    return ensure_aware(instant).astimezone(pytz.utc).replace(tzinfo=None)


def from_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return pytz.utc.localize(value)
