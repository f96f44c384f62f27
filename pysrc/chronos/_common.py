from datetime import (
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
)
from functools import lru_cache

UTC = _timezone.utc
EPOCH = _datetime(1970, 1, 1, tzinfo=UTC)
ONE_MILLI = _timedelta(milliseconds=1)
Millis = int  # 0-999


# Parsed offsets are nearly always whole hours, so caching avoids
# creating lots of identical tzinfo objects.
@lru_cache
def mk_fixed_tzinfo(secs: int, /) -> _timezone:
    return _timezone(_timedelta(seconds=secs))


def check_utc_bounds(dt: _datetime) -> _datetime:
    try:
        dt.astimezone(UTC)
    except (OverflowError, ValueError):
        raise ValueError("Instant out of range")
    return dt


def to_utc_millis(dt: _datetime) -> _datetime:
    """Convert an aware datetime to UTC, dropping sub-millisecond precision.
    The result is always a plain ``datetime`` (no subclasses)."""
    d = check_utc_bounds(dt).astimezone(UTC)
    return _datetime(
        d.year,
        d.month,
        d.day,
        d.hour,
        d.minute,
        d.second,
        d.microsecond // 1_000 * 1_000,
        UTC,
    )
