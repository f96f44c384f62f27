"""Parsing of date/time strings into UTC datetimes.

Supported are the common ISO 8601 calendar formats (with or without
time and UTC offset) and RFC 2822. Everything resolves to an aware
``datetime`` in UTC with millisecond precision.
"""

from datetime import (
    date as _date,
    datetime as _datetime,
    time as _time,
    timedelta as _timedelta,
    timezone as _timezone,
    tzinfo as _tzinfo,
)
from typing import NoReturn

from ._common import UTC, Millis, mk_fixed_tzinfo, to_utc_millis

__all__ = ["datetime_from_string", "datetime_from_iso", "parse_rfc2822"]


def _parse_err(s: str) -> NoReturn:
    raise ValueError(f"Invalid format: {s!r}") from None


def _parse_millis(s: str) -> Millis:
    # More digits are allowed, but anything below a millisecond is dropped
    if not 0 < len(s) <= 9 or not s.isdigit():
        raise ValueError("Invalid decimals")
    return int(s[:3].ljust(3, "0"))


def _split_nextchar(
    s: str, chars: str, start: int = 0, end: int = -1
) -> tuple[str, str | None, str]:
    for c in chars:
        if (idx := s.find(c, start, end)) != -1:
            return (s[:idx], c, s[idx + 1 :])
    return (s, None, "")


_is_sep = " Tt".__contains__


def datetime_from_string(s: str) -> _datetime:
    """Parse any supported format. Raises ValueError on failure."""
    stripped = s.strip()
    if not stripped or not stripped.isascii():
        _parse_err(s)
    for parser in (datetime_from_iso, parse_rfc2822):
        try:
            return to_utc_millis(parser(stripped))
        except ValueError:
            continue
    _parse_err(s)


def datetime_from_iso(s: str) -> _datetime:
    # Week dates (2024-W05) and ordinal dates are not supported
    if len(s) < 4 or "W" in s or not s.isascii():
        _parse_err(s)

    try:
        if len(s) == 4:  # YYYY
            return _datetime(_parse_int(s), 1, 1, tzinfo=UTC)
        elif len(s) == 7 and s[4] == "-":  # YYYY-MM
            return _datetime(
                _parse_int(s[:4]), _parse_int(s[5:]), 1, tzinfo=UTC
            )
        elif len(s) in (8, 10):  # date only
            return _datetime.combine(date_from_iso(s), _time(), UTC)
        elif len(s) > 10 and _is_sep(s[10]):  # date in extended format
            rest, date = s[11:], date_from_iso(s[:10])
        elif len(s) > 8 and _is_sep(s[8]):  # date in basic format
            rest, date = s[9:], date_from_iso(s[:8])
        else:
            _parse_err(s)
        time, tzinfo = _time_offset_from_iso(rest)
    except ValueError:
        _parse_err(s)

    return _datetime.combine(date, time, tzinfo)


def date_from_iso(s: str) -> _date:
    if len(s) == 10 and s[4] == "-" and s[7] == "-":
        year, month, day = s[:4], s[5:7], s[8:]
    elif len(s) == 8:
        year, month, day = s[:4], s[4:6], s[6:]
    else:
        raise ValueError("Invalid date format")
    return _date(_parse_int(year), _parse_int(month), _parse_int(day))


def _parse_int(s: str) -> int:
    # int() would also accept signs, underscores and whitespace
    if not (s.isdigit() and s.isascii()):
        raise ValueError(f"Invalid digits: {s!r}")
    return int(s)


def _offset_from_iso(s: str) -> int:
    minutes = 0
    seconds = 0
    if len(s) == 5 and s[2] == ":" and s[3] < "6":  # most common: HH:MM
        hours = _parse_int(s[:2])
        minutes = _parse_int(s[3:])
    elif len(s) == 4 and s[2] < "6":  # HHMM
        hours = _parse_int(s[:2])
        minutes = _parse_int(s[2:])
    elif len(s) == 2:  # HH
        hours = _parse_int(s)
    elif (
        len(s) == 8
        and s[2] == ":"
        and s[5] == ":"
        and s[3] < "6"
        and s[6] < "6"
    ):  # HH:MM:SS
        hours = _parse_int(s[:2])
        minutes = _parse_int(s[3:5])
        seconds = _parse_int(s[6:])
    else:
        raise ValueError("Invalid offset format")
    if hours > 23:
        raise ValueError("Offset out of range")
    return hours * 3600 + minutes * 60 + seconds


def _time_offset_from_iso(s: str) -> tuple[_time, _tzinfo]:
    tzinfo: _tzinfo
    if s.endswith(("Z", "z")):
        s_time = s[:-1]
        tzinfo = UTC
    else:
        s_time, sign, s_offset = _split_nextchar(s, "+-")
        if sign is None:
            # No offset: the time is taken to be UTC
            tzinfo = UTC
        else:
            offset_secs = _offset_from_iso(s_offset)
            tzinfo = mk_fixed_tzinfo(
                -offset_secs if sign == "-" else offset_secs
            )
    return _time_from_iso(s_time), tzinfo


def _time_from_iso(s_orig: str) -> _time:
    s, sep, fraction = _split_nextchar(s_orig, ".,", 4, 9)
    millis = _parse_millis(fraction) if sep else 0
    if sep and len(s) not in (6, 8):
        # a fraction is only allowed on the seconds
        raise ValueError("Invalid time format")
    return _time_from_iso_nofrac(s).replace(microsecond=millis * 1_000)


def _time_from_iso_nofrac(s: str) -> _time:
    if len(s) == 5 and s[2] == ":":  # HH:MM
        hour, minute, second = s[:2], s[3:], "0"
    elif len(s) == 8 and s[2] == ":" and s[5] == ":":  # HH:MM:SS
        hour, minute, second = s[:2], s[3:5], s[6:]
    elif len(s) == 4:  # HHMM
        hour, minute, second = s[:2], s[2:], "0"
    elif len(s) == 6:  # HHMMSS
        hour, minute, second = s[:2], s[2:4], s[4:]
    else:
        raise ValueError("Invalid time format")
    return _time(_parse_int(hour), _parse_int(minute), _parse_int(second))


_RFC2822_WEEKDAY_TO_ISO = {
    "mon": 1,
    "tue": 2,
    "wed": 3,
    "thu": 4,
    "fri": 5,
    "sat": 6,
    "sun": 7,
}

_RFC2822_MONTH_NAMES = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_RFC2822_ZONES = {
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
}


def parse_rfc2822(s: str) -> _datetime:
    """Parse e.g. ``Sat, 15 Aug 2020 23:12:00 GMT``.
    The weekday is optional, but must match the date if given."""
    if not s.isascii():
        _parse_err(s)

    # Split off the weekday, accepting any whitespace around the comma
    head, comma, tail = s.partition(",")
    if comma:
        weekday_raw = head.strip().lower()
        if weekday_raw not in _RFC2822_WEEKDAY_TO_ISO:
            _parse_err(s)
        iso_weekday: int | None = _RFC2822_WEEKDAY_TO_ISO[weekday_raw]
        parts = tail.split()
    else:
        iso_weekday = None
        parts = s.split()

    # Parse the date
    try:
        day_raw, month_raw, year_raw, *parts = parts
        if len(day_raw) > 2:
            _parse_err(s)
        day = _parse_int(day_raw)
        month = _RFC2822_MONTH_NAMES[month_raw.lower()]
        year = _parse_int(year_raw)
        if len(year_raw) == 2:
            year += 2000 if year < 50 else 1900
        elif len(year_raw) == 3:
            year += 1900
        elif len(year_raw) != 4:
            _parse_err(s)
        date = _date(year, month, day)
    except (ValueError, KeyError):
        _parse_err(s)

    if iso_weekday and iso_weekday != date.isoweekday():
        _parse_err(s)

    # Parse the time, whose components may be separated by whitespace
    try:
        *time_parts, offset_raw = parts
        time_raw = "".join(time_parts)
        if len(time_raw) == 5 and time_raw[2] == ":":
            time = _time(_parse_int(time_raw[:2]), _parse_int(time_raw[3:]))
        elif len(time_raw) == 8 and time_raw[2] == ":" and time_raw[5] == ":":
            time = _time(
                _parse_int(time_raw[:2]),
                _parse_int(time_raw[3:5]),
                _parse_int(time_raw[6:]),
            )
        else:
            _parse_err(s)
    except ValueError:
        _parse_err(s)

    # Parse the offset
    if offset_raw.startswith(("+", "-")) and len(offset_raw) == 5:
        try:
            offset = _timedelta(
                hours=_parse_int(offset_raw[1:3]),
                minutes=_parse_int(offset_raw[3:5]),
            )
            tzinfo = _timezone(-offset if offset_raw[0] == "-" else offset)
        except ValueError:
            _parse_err(s)
    elif offset_raw.isalpha():
        # Unknown zone names are treated as UTC, as RFC 2822 prescribes
        tzinfo = mk_fixed_tzinfo(
            _RFC2822_ZONES.get(offset_raw.upper(), 0) * 3600
        )
    else:
        _parse_err(s)

    return _datetime.combine(date, time, tzinfo)
