"""Calendar helpers shared by the date-keyed aggregates.

Naive datetimes are taken to be local wall-clock time already; aware
datetimes are converted into the reporting timezone before truncating
to a calendar day.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.errors import ConfigError


def resolve_tz(name: str | None) -> tzinfo | None:
    """Map an IANA zone name to a tzinfo.  ``None`` means system local time."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {name!r}") from exc


def local_day(ts: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ``ts`` in the reporting timezone."""
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(tz).date()


def today(tz: tzinfo | None = None) -> date:
    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def as_day(value: date | datetime | None, tz: tzinfo | None = None) -> date:
    """Normalise an optional 'today' argument to a date."""
    if value is None:
        return today(tz)
    if isinstance(value, datetime):
        return local_day(value, tz)
    return value


def sort_timestamp(ts: datetime) -> float:
    """Epoch seconds usable to order naive and aware datetimes together."""
    try:
        return ts.timestamp()
    except (OverflowError, OSError, ValueError):
        # Dates the platform clock cannot represent; order them as UTC
        naive = ts.replace(tzinfo=None) - (ts.utcoffset() or timedelta(0))
        return (naive - _EPOCH).total_seconds()


_EPOCH = datetime(1970, 1, 1)
