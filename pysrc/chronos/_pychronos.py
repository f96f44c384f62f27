# The MIT License (MIT)
#
# Copyright (c) Andre Martins
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - All calendar math happens on the UTC fields of a standard library
#   ``datetime``. It is never converted to the system timezone.
# - Values are immutable. Every "mutating" method returns a new instance,
#   so chained calls never affect a value held elsewhere.
# - Month lengths come exclusively from ``_math.days_in_month``.
from __future__ import annotations

__version__ = "1.0.0"

import enum
import logging
from dataclasses import dataclass
from datetime import (
    date as _date,
    datetime as _datetime,
    time as _time,
    timedelta as _timedelta,
)
from math import isfinite
from struct import pack, unpack
from time import time_ns
from typing import (
    TYPE_CHECKING,
    ClassVar,
    Literal,
    Union,
    no_type_check,
    overload,
)

from . import _math
from ._common import EPOCH, ONE_MILLI, UTC, to_utc_millis
from ._parse import datetime_from_string

__all__ = [
    # Core type
    "CalendarInstant",
    "DateDifference",
    "TimeUnit",
    "Weekday",
    # Exceptions
    "InvalidDateError",
    # Module-level helpers
    "now",
    "create",
    "parse",
    "get_utc_now",
    "get_boundary",
    "calculate_diff",
    # Constants
    "VERSION",
    "SUPPORTED_UNITS",
]

logger = logging.getLogger(__name__)


class InvalidDateError(ValueError):
    """The input can't be resolved to a valid calendar instant"""


class TimeUnit(enum.Enum):
    """Granularity for :meth:`~CalendarInstant.add` and
    :meth:`~CalendarInstant.subtract`.

    Wherever a unit is expected, the plain string value
    (e.g. ``"months"``) is accepted as well.
    """

    YEARS = "years"
    MONTHS = "months"
    WEEKS = "weeks"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"


class Weekday(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


# Weeks run from Sunday to Saturday
WEEK_START = Weekday.SUNDAY

ComparisonResult = Literal[-1, 0, 1]
BoundaryUnit = Literal["day", "week", "month", "year"]
BoundaryType = Literal["start", "end"]
DatabaseFormat = Literal["iso", "date", "datetime"]
InstantInput = Union["CalendarInstant", _datetime, _date, int, float, str]

SUPPORTED_UNITS: list[str] = [u.value for u in TimeUnit]

_object_new = object.__new__
_MS_PER_SECOND = 1_000
_SECONDS_PER_MINUTE = 60
_MINUTES_PER_HOUR = 60
_HOURS_PER_DAY = 24
# Not a calendar month: diff() reports leftover days modulo this constant
_DAYS_PER_DIFF_MONTH = 30


@dataclass(frozen=True)
class DateDifference:
    """The difference between two instants, broken down into units.

    ``years`` and ``months`` are derived from the calendar fields only
    (the day of the month is ignored), while the other fields are
    derived from the elapsed milliseconds. ``days`` is reported
    modulo 30, which is an approximation and not calendar-aware.
    Summing the fields therefore does not necessarily reproduce
    ``total``, which is always the exact number of milliseconds.

    Example
    -------
    >>> d = calculate_diff("2024-01-01", "2024-02-04")
    >>> d  # doctest: +NORMALIZE_WHITESPACE
    DateDifference(years=0, months=1, days=4, hours=0, minutes=0,
                   seconds=0, milliseconds=0, total=2937600000)
    """

    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int
    milliseconds: int
    total: int


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


if TYPE_CHECKING:
    from typing import final
else:

    def final(cls):

        def init_subclass_not_allowed(cls, **kwargs):  # pragma: no cover
            raise TypeError("Subclassing not allowed")

        cls.__init_subclass__ = init_subclass_not_allowed
        return cls


def _as_unit(unit: TimeUnit | str) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError:
        raise ValueError(f"Invalid unit: {unit!r}") from None


def _out_of_range() -> InvalidDateError:
    return InvalidDateError("Instant out of range")


@final
class CalendarInstant(_ImmutableBase):
    """An instant in time with millisecond precision, viewed through
    its UTC calendar fields.

    Instances are immutable: arithmetic and boundary methods return
    a new instance, which allows chaining.

    Example
    -------
    >>> from chronos import CalendarInstant
    >>> d = CalendarInstant.create("2024-01-31T12:00:00Z")
    >>> d.add_months(1)
    CalendarInstant(2024-02-29 12:00:00.000Z)
    >>> d.add_months(1).end_of_month().format_br(include_time=True)
    '29/02/2024 23:59'
    """

    __slots__ = ("_py_dt",)

    _py_dt: _datetime

    MIN: ClassVar[CalendarInstant]
    """The earliest representable instant"""
    MAX: ClassVar[CalendarInstant]
    """The latest representable instant"""

    def __init__(self) -> None:
        raise TypeError(
            "CalendarInstant instances cannot be created through the "
            "constructor. Use `CalendarInstant.create` or "
            "`CalendarInstant.now` instead."
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def now(cls) -> CalendarInstant:
        """The current time, truncated to milliseconds"""
        return cls.from_timestamp_millis(time_ns() // 1_000_000)

    @classmethod
    def create(cls, value: InstantInput | None = None, /) -> CalendarInstant:
        """Create an instant from any supported input:

        - ``None``: the current time
        - a :class:`CalendarInstant`: returned as-is
        - an aware :class:`~datetime.datetime`: converted to UTC
        - a :class:`~datetime.date`: midnight UTC on that date
        - an ``int`` or ``float``: milliseconds since the Unix epoch
        - a ``str``: parsed strictly, see :meth:`parse`

        Raises
        ------
        InvalidDateError
            If the value doesn't correspond to a valid instant.
        TypeError
            If the type of the value isn't supported.
        """
        if value is None:
            return cls.now()
        elif isinstance(value, CalendarInstant):
            return value
        elif isinstance(value, _datetime):
            return cls.from_py_datetime(value)
        elif isinstance(value, _date):
            return cls._from_py_unchecked(
                _datetime.combine(value, _time(), UTC)
            )
        elif isinstance(value, bool):
            raise TypeError("Cannot create CalendarInstant from a bool")
        elif isinstance(value, int):
            return cls.from_timestamp_millis(value)
        elif isinstance(value, float):
            if not isfinite(value):
                raise InvalidDateError(f"Invalid timestamp: {value!r}")
            return cls.from_timestamp_millis(int(value))
        elif isinstance(value, str):
            return cls.parse(value)
        raise TypeError(
            f"Cannot create CalendarInstant from {type(value).__name__}"
        )

    @overload
    @classmethod
    def parse(
        cls, s: str, /, *, strict: Literal[True] = ...
    ) -> CalendarInstant: ...

    @overload
    @classmethod
    def parse(cls, s: str, /, *, strict: bool) -> CalendarInstant | None: ...

    @classmethod
    def parse(
        cls, s: str, /, *, strict: bool = True
    ) -> CalendarInstant | None:
        """Parse an ISO 8601 or RFC 2822 string.

        Strings without an offset are taken to be in UTC.
        With ``strict=False``, an unparseable string gives ``None``
        instead of raising :class:`InvalidDateError`.

        Example
        -------
        >>> CalendarInstant.parse("2024-02-04")
        CalendarInstant(2024-02-04 00:00:00.000Z)
        >>> CalendarInstant.parse("2024-02-04T14:00+02:00")
        CalendarInstant(2024-02-04 12:00:00.000Z)
        >>> CalendarInstant.parse("not-a-date", strict=False) is None
        True
        """
        if not isinstance(s, str):
            raise TypeError("parse() requires a string")
        try:
            py_dt = datetime_from_string(s)
        except ValueError as e:
            if strict:
                raise InvalidDateError(str(e)) from None
            logger.debug("Could not parse %r as a date, returning None", s)
            return None
        return cls._from_py_unchecked(py_dt)

    @classmethod
    def from_utc(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        millisecond: int = 0,
    ) -> CalendarInstant:
        """Create an instant from UTC calendar fields.
        Note that ``month`` is 1-based, as in the standard library."""
        if not 0 <= millisecond < 1_000:
            raise InvalidDateError(f"millisecond out of range: {millisecond}")
        try:
            py_dt = _datetime(
                year,
                month,
                day,
                hour,
                minute,
                second,
                millisecond * 1_000,
                UTC,
            )
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(str(e)) from None
        return cls._from_py_unchecked(py_dt)

    @classmethod
    def from_timestamp_millis(cls, i: int, /) -> CalendarInstant:
        """Create an instant from a UNIX timestamp in milliseconds.

        The inverse of :meth:`timestamp_millis`.
        """
        if not isinstance(i, int) or isinstance(i, bool):
            raise TypeError("method requires an integer")
        try:
            return cls._from_py_unchecked(EPOCH + _timedelta(milliseconds=i))
        except OverflowError:
            raise _out_of_range() from None

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> CalendarInstant:
        """Create an instant from an aware standard library ``datetime``.
        Anything below millisecond precision is dropped.
        """
        if d.tzinfo is None or d.utcoffset() is None:
            raise InvalidDateError(
                "Cannot create CalendarInstant from a naive datetime"
            )
        try:
            return cls._from_py_unchecked(to_utc_millis(d))
        except ValueError:
            raise _out_of_range() from None

    @classmethod
    def _from_py_unchecked(cls, d: _datetime, /) -> CalendarInstant:
        assert not d.microsecond % 1_000, "sub-millisecond precision"
        self = _object_new(cls)
        self._py_dt = d
        return self

    # ------------------------------------------------------------------
    # Fields and conversions
    # ------------------------------------------------------------------

    @property
    def year(self) -> int:
        return self._py_dt.year

    @property
    def month(self) -> int:
        """The month of the year, from 1 (January) to 12 (December)"""
        return self._py_dt.month

    @property
    def day(self) -> int:
        return self._py_dt.day

    @property
    def hour(self) -> int:
        return self._py_dt.hour

    @property
    def minute(self) -> int:
        return self._py_dt.minute

    @property
    def second(self) -> int:
        return self._py_dt.second

    @property
    def millisecond(self) -> int:
        return self._py_dt.microsecond // 1_000

    @property
    def epoch_millis(self) -> int:
        """Milliseconds since the Unix epoch,
        same as :meth:`timestamp_millis`"""
        return self.timestamp_millis()

    def timestamp_millis(self) -> int:
        """The UNIX timestamp in milliseconds.

        Example
        -------
        >>> CalendarInstant.from_utc(1970, 1, 1, second=1).timestamp_millis()
        1000
        """
        return (self._py_dt - EPOCH) // ONE_MILLI

    def day_of_week(self) -> Weekday:
        """The day of the week (in UTC)

        Example
        -------
        >>> CalendarInstant.from_utc(2024, 2, 4).day_of_week()
        <Weekday.SUNDAY: 7>
        """
        return Weekday(self._py_dt.isoweekday())

    def py_datetime(self) -> _datetime:
        """Convert to an aware standard library ``datetime`` in UTC"""
        return self._py_dt

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, amount: int, unit: TimeUnit | str) -> CalendarInstant:
        """Add an amount of the given unit. Negative amounts go back in time.

        Adding months or years keeps the day of the month if it exists
        in the target month, and clamps it to the last day otherwise.
        The time of day is never changed by it.

        Example
        -------
        >>> d = CalendarInstant.create("2024-01-31")
        >>> d.add(1, "months")
        CalendarInstant(2024-02-29 00:00:00.000Z)
        >>> d.add(-13, TimeUnit.MONTHS)
        CalendarInstant(2022-12-31 00:00:00.000Z)

        Raises
        ------
        InvalidDateError
            If the result is outside the supported range.
        """
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError(f"amount must be an integer, got {amount!r}")
        unit = _as_unit(unit)
        d = self._py_dt
        try:
            if unit is TimeUnit.YEARS:
                shifted = _datetime.combine(
                    _math.add_years(d.date(), amount), d.timetz()
                )
            elif unit is TimeUnit.MONTHS:
                shifted = _datetime.combine(
                    _math.add_months(d.date(), amount), d.timetz()
                )
            else:
                # weeks, days, hours, minutes, seconds are exact durations
                shifted = d + _timedelta(**{unit.value: amount})
        except (ValueError, OverflowError):
            raise _out_of_range() from None
        return self._from_py_unchecked(shifted)

    def subtract(self, amount: int, unit: TimeUnit | str) -> CalendarInstant:
        """Inverse of :meth:`add`: ``d.subtract(n, u) == d.add(-n, u)``"""
        return self.add(-amount, unit)

    def add_years(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.YEARS)

    def add_months(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.MONTHS)

    def add_weeks(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.WEEKS)

    def add_days(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.DAYS)

    def add_hours(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.HOURS)

    def add_minutes(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.MINUTES)

    def add_seconds(self, amount: int) -> CalendarInstant:
        return self.add(amount, TimeUnit.SECONDS)

    def sub_years(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.YEARS)

    def sub_months(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.MONTHS)

    def sub_weeks(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.WEEKS)

    def sub_days(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.DAYS)

    def sub_hours(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.HOURS)

    def sub_minutes(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.MINUTES)

    def sub_seconds(self, amount: int) -> CalendarInstant:
        return self.add(-amount, TimeUnit.SECONDS)

    # ------------------------------------------------------------------
    # Boundaries
    # ------------------------------------------------------------------

    def get_boundary(
        self, unit: BoundaryUnit, type: BoundaryType
    ) -> CalendarInstant:
        """Snap to the start or end of the day, week, month or year
        containing this instant.

        Example
        -------
        >>> d = CalendarInstant.create("2024-02-14T08:30:00Z")
        >>> d.get_boundary("month", "end")
        CalendarInstant(2024-02-29 23:59:59.999Z)
        >>> d.get_boundary("week", "start")
        CalendarInstant(2024-02-11 00:00:00.000Z)
        """
        if type not in ("start", "end"):
            raise ValueError(f"Invalid boundary type: {type!r}")
        start = type == "start"
        if unit == "day":
            return self.start_of_day() if start else self.end_of_day()
        elif unit == "week":
            dow = _math.days_into_week(self._py_dt, WEEK_START.value)
            moved = self.add_days(-dow if start else 6 - dow)
            return moved.start_of_day() if start else moved.end_of_day()
        elif unit == "month":
            return self.start_of_month() if start else self.end_of_month()
        elif unit == "year":
            return self.start_of_year() if start else self.end_of_year()
        raise ValueError(f"Invalid boundary unit: {unit!r}")

    def start_of_day(self) -> CalendarInstant:
        """Midnight (00:00:00.000) on the same date"""
        return self._from_py_unchecked(
            self._py_dt.replace(hour=0, minute=0, second=0, microsecond=0)
        )

    def end_of_day(self) -> CalendarInstant:
        """The last millisecond (23:59:59.999) of the same date"""
        return self._from_py_unchecked(
            self._py_dt.replace(
                hour=23, minute=59, second=59, microsecond=999_000
            )
        )

    def start_of_week(self) -> CalendarInstant:
        """Start of the preceding (or current) Sunday"""
        return self.sub_days(
            _math.days_into_week(self._py_dt, WEEK_START.value)
        ).start_of_day()

    def end_of_week(self) -> CalendarInstant:
        """End of the following (or current) Saturday"""
        return self.add_days(
            6 - _math.days_into_week(self._py_dt, WEEK_START.value)
        ).end_of_day()

    def start_of_month(self) -> CalendarInstant:
        return self._from_py_unchecked(
            self._py_dt.replace(day=1)
        ).start_of_day()

    def end_of_month(self) -> CalendarInstant:
        d = self._py_dt
        return self._from_py_unchecked(
            d.replace(day=_math.days_in_month(d.year, d.month))
        ).end_of_day()

    def start_of_year(self) -> CalendarInstant:
        return self._from_py_unchecked(
            self._py_dt.replace(month=1, day=1)
        ).start_of_day()

    def end_of_year(self) -> CalendarInstant:
        d = self._py_dt
        return self._from_py_unchecked(
            d.replace(month=12, day=_math.days_in_month(d.year, 12))
        ).end_of_day()

    # ------------------------------------------------------------------
    # Comparison and difference
    # ------------------------------------------------------------------

    def compare_to(self, other: InstantInput, /) -> ComparisonResult:
        """-1, 0 or 1 if this instant is before, equal to, or after
        the other one. Only exact millisecond equality counts as equal.

        ``other`` may be anything accepted by :meth:`create`.
        """
        delta = self.epoch_millis - _coerce(other).epoch_millis
        if delta < 0:
            return -1
        elif delta > 0:
            return 1
        return 0

    def diff(self, other: InstantInput, /) -> DateDifference:
        """The (unsigned) difference with another instant.

        See :class:`DateDifference` for how the fields are computed.
        ``other`` may be anything accepted by :meth:`create`.

        Example
        -------
        >>> a = CalendarInstant.create("2024-03-01T01:00:00Z")
        >>> a.diff("2024-02-29T00:00:00Z")  # doctest: +NORMALIZE_WHITESPACE
        DateDifference(years=0, months=1, days=1, hours=1, minutes=0,
                       seconds=0, milliseconds=0, total=90000000)
        """
        other_inst = _coerce(other)
        total = abs(self.epoch_millis - other_inst.epoch_millis)
        seconds, milliseconds = divmod(total, _MS_PER_SECOND)
        minutes, seconds = divmod(seconds, _SECONDS_PER_MINUTE)
        hours, minutes = divmod(minutes, _MINUTES_PER_HOUR)
        days, hours = divmod(hours, _HOURS_PER_DAY)
        years, months = divmod(
            abs(_math.months_between(self._py_dt, other_inst._py_dt)), 12
        )
        return DateDifference(
            years=years,
            months=months,
            days=days % _DAYS_PER_DIFF_MONTH,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            milliseconds=milliseconds,
            total=total,
        )

    def __eq__(self, other: object) -> bool:
        """Check if two instants represent the same moment in time

        Example
        -------
        >>> CalendarInstant.create("2024-02-04T12:00Z") == (
        ...     CalendarInstant.create("2024-02-04T14:00+02:00")
        ... )
        True
        """
        if not isinstance(other, CalendarInstant):
            return NotImplemented
        return self._py_dt == other._py_dt

    def __hash__(self) -> int:
        return hash(self._py_dt)

    def __lt__(self, other: CalendarInstant) -> bool:
        if not isinstance(other, CalendarInstant):
            return NotImplemented
        return self._py_dt < other._py_dt

    def __le__(self, other: CalendarInstant) -> bool:
        if not isinstance(other, CalendarInstant):
            return NotImplemented
        return self._py_dt <= other._py_dt

    def __gt__(self, other: CalendarInstant) -> bool:
        if not isinstance(other, CalendarInstant):
            return NotImplemented
        return self._py_dt > other._py_dt

    def __ge__(self, other: CalendarInstant) -> bool:
        if not isinstance(other, CalendarInstant):
            return NotImplemented
        return self._py_dt >= other._py_dt

    # ------------------------------------------------------------------
    # State relative to the current time
    # ------------------------------------------------------------------

    def is_future(self) -> bool:
        return self > CalendarInstant.now()

    def is_past(self) -> bool:
        return self < CalendarInstant.now()

    def is_today(self) -> bool:
        """Whether this instant falls on the current UTC date"""
        return self._py_dt.date() == CalendarInstant.now()._py_dt.date()

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_br(self, include_time: bool = False) -> str:
        """Brazilian format ``DD/MM/YYYY`` (``DD/MM/YYYY HH:mm`` with time)"""
        d = self._py_dt
        date = f"{d.day:02d}/{d.month:02d}/{d.year:04d}"
        return f"{date} {d.hour:02d}:{d.minute:02d}" if include_time else date

    def format_us(self, include_time: bool = False) -> str:
        """US format ``MM/DD/YYYY`` (``MM/DD/YYYY HH:mm`` with time)"""
        d = self._py_dt
        date = f"{d.month:02d}/{d.day:02d}/{d.year:04d}"
        return f"{date} {d.hour:02d}:{d.minute:02d}" if include_time else date

    def format(
        self, *, include_time: bool = False, include_seconds: bool = False
    ) -> str:
        """Format as ``YYYY-MM-DD``, optionally followed by ``HH:mm``,
        or ``HH:mm:ss`` if ``include_seconds`` is also set.
        ``include_seconds`` has no effect without ``include_time``.
        """
        if not include_time:
            return self.to_date()
        elif include_seconds:
            return self.to_date_time()
        return self._py_dt.isoformat(sep=" ", timespec="minutes")[:-6]

    def to_database(self) -> str:
        """The full ISO 8601 format ``YYYY-MM-DDTHH:mm:ss.sssZ``

        Example
        -------
        >>> CalendarInstant.from_utc(2024, 2, 4, 12).to_database()
        '2024-02-04T12:00:00.000Z'
        """
        return self._py_dt.isoformat(timespec="milliseconds")[:-6] + "Z"

    def to_date(self) -> str:
        """The date part as ``YYYY-MM-DD``"""
        return self._py_dt.date().isoformat()

    def to_date_time(self) -> str:
        """The date and time as ``YYYY-MM-DD HH:mm:ss``"""
        return self._py_dt.isoformat(sep=" ", timespec="seconds")[:-6]

    def format_database(self, kind: DatabaseFormat = "iso") -> str:
        """Format for storage: ``"iso"`` (:meth:`to_database`),
        ``"date"`` (:meth:`to_date`) or ``"datetime"`` (:meth:`to_date_time`)
        """
        if kind == "iso":
            return self.to_database()
        elif kind == "date":
            return self.to_date()
        elif kind == "datetime":
            return self.to_date_time()
        raise ValueError(f"Invalid database format: {kind!r}")

    def __str__(self) -> str:
        return self.to_database()

    def __repr__(self) -> str:
        return (
            "CalendarInstant("
            f"{self._py_dt.isoformat(sep=' ', timespec='milliseconds')[:-6]}Z)"
        )

    # a custom pickle implementation with a smaller payload
    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_inst, (pack("<q", self.epoch_millis),))


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
def _unpkl_inst(data: bytes) -> CalendarInstant:
    (millis,) = unpack("<q", data)
    return CalendarInstant._from_py_unchecked(
        EPOCH + _timedelta(milliseconds=millis)
    )


CalendarInstant.MIN = CalendarInstant._from_py_unchecked(
    _datetime.min.replace(tzinfo=UTC)
)
CalendarInstant.MAX = CalendarInstant._from_py_unchecked(
    _datetime.max.replace(microsecond=999_000, tzinfo=UTC)
)


def _coerce(value: InstantInput) -> CalendarInstant:
    # Unlike create(), a missing value is an error here
    if value is None:
        raise TypeError("Cannot compare with None")
    return CalendarInstant.create(value)


def now() -> CalendarInstant:
    """The current instant. Alias for :meth:`CalendarInstant.now`"""
    return CalendarInstant.now()


def create(value: InstantInput | None = None, /) -> CalendarInstant:
    """Alias for :meth:`CalendarInstant.create`

    Example
    -------
    >>> create("2024-02-04")
    CalendarInstant(2024-02-04 00:00:00.000Z)
    >>> create(1706976000000)
    CalendarInstant(2024-02-03 16:00:00.000Z)
    """
    return CalendarInstant.create(value)


@overload
def parse(s: str, /, *, strict: Literal[True] = ...) -> CalendarInstant: ...


@overload
def parse(s: str, /, *, strict: bool) -> CalendarInstant | None: ...


def parse(s: str, /, *, strict: bool = True) -> CalendarInstant | None:
    """Alias for :meth:`CalendarInstant.parse`"""
    return CalendarInstant.parse(s, strict=strict)


def get_utc_now() -> str:
    """The current time in the ISO format used for database storage

    Example
    -------
    >>> from chronos import patch_current_time
    >>> feb4 = CalendarInstant.from_utc(2024, 2, 4, 12)
    >>> with patch_current_time(feb4, keep_ticking=False):
    ...     get_utc_now()
    '2024-02-04T12:00:00.000Z'
    """
    return CalendarInstant.now().to_database()


def get_boundary(unit: BoundaryUnit, type: BoundaryType) -> CalendarInstant:
    """A boundary of the current day, week, month or year

    Example
    -------
    >>> from chronos import patch_current_time
    >>> feb4 = CalendarInstant.from_utc(2024, 2, 4, 12)
    >>> with patch_current_time(feb4, keep_ticking=False):
    ...     get_boundary("month", "start")
    CalendarInstant(2024-02-01 00:00:00.000Z)
    """
    return CalendarInstant.now().get_boundary(unit, type)


def calculate_diff(a: InstantInput, b: InstantInput, /) -> DateDifference:
    """The difference between two instants of any supported input type"""
    return _coerce(a).diff(b)


VERSION = __version__


# We expose the public members in the root of the module.
# For clarity, we remove the "_pychronos" part from the names,
# since this is an implementation detail.
for name in __all__:
    member = locals()[name]
    if getattr(member, "__module__", None) == __name__:  # pragma: no branch
        member.__module__ = "chronos"

# clear up loop variables so they don't leak into the namespace
del name
del member

_unpkl_inst.__module__ = "chronos"

# disable further subclassing
final(_ImmutableBase)


def _patch_time_frozen(inst: CalendarInstant) -> None:
    global time_ns

    def time_ns() -> int:
        return inst.epoch_millis * 1_000_000

    logger.debug("Current time frozen at %s", inst)


def _patch_time_keep_ticking(inst: CalendarInstant) -> None:
    global time_ns

    _patched_at = time_ns()
    _time_ns = time_ns

    def time_ns() -> int:
        return inst.epoch_millis * 1_000_000 + _time_ns() - _patched_at

    logger.debug("Current time moved to %s", inst)


def _unpatch_time() -> None:
    global time_ns

    from time import time_ns

    logger.debug("Current time unpatched")
