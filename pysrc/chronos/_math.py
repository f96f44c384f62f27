"""Calendar-length facts and month/year shifting.

All month lengths used anywhere in the library come from
:func:`days_in_month`, so shifting and boundary snapping can never disagree.
"""

from datetime import date as _date


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return _MONTHDAYS[month] + (month == 2 and is_leap(year))


def add_months(d: _date, months: int) -> _date:
    """Shift a date by a number of months, clamping the day to the
    last day of the target month (Jan 31 + 1 month = Feb 28/29).

    Raises ValueError if the result falls outside the supported years.
    """
    # Floored division keeps the month in 0..11 for negative shifts,
    # e.g. index -1 becomes December of the previous year.
    year_delta, month0 = divmod(d.month - 1 + months, 12)
    # Move while on the first of the month, so the shift itself can't
    # produce an invalid day.
    first = _date(d.year + year_delta, month0 + 1, 1)
    return first.replace(
        day=min(d.day, days_in_month(first.year, first.month))
    )


def add_years(d: _date, years: int) -> _date:
    """Shift a date by a number of years, clamping Feb 29 to Feb 28
    in non-leap target years."""
    first = d.replace(day=1).replace(year=d.year + years)
    return first.replace(day=min(d.day, days_in_month(first.year, d.month)))


def months_between(a: _date, b: _date) -> int:
    """Signed difference of the (year, month) fields, ignoring the day."""
    return (a.year - b.year) * 12 + (a.month - b.month)


def days_into_week(d: _date, week_start: int) -> int:
    """Days elapsed since the start of the week, from 0 to 6.
    ``week_start`` is an ISO weekday number (Monday=1, Sunday=7)."""
    return (d.isoweekday() - week_start) % 7
