"""
Time helpers.

All entry timestamps are stored and compared in UTC. Aware datetimes are
converted, naive datetimes are taken to already be UTC.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple, Union


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_storage(dt: datetime) -> datetime:
    """Naive UTC datetime, the representation written to SQLite."""
    return ensure_utc(dt).replace(tzinfo=None)


def to_iso(dt: datetime) -> str:
    """Serialize as UTC ISO 8601 with a 'Z' suffix."""
    return ensure_utc(dt).isoformat().replace('+00:00', 'Z')


def from_iso(value: str) -> datetime:
    """Parse a value written by :func:`to_iso`."""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return ensure_utc(datetime.fromisoformat(value))


def parse_day(value: Union[date, datetime, str]) -> date:
    """Coerce a calendar day given as a date, datetime or 'YYYY-MM-DD'."""
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def day_bounds(day: Union[date, datetime, str]) -> Tuple[datetime, datetime]:
    """Half-open UTC range ``[start, end)`` covering one calendar day."""
    start = datetime.combine(parse_day(day), time.min).replace(tzinfo=timezone.utc)
    return start, start + timedelta(days=1)
