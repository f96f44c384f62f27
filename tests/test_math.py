from datetime import date, timedelta

import pytest
from hypothesis import given
from hypothesis.strategies import dates, integers

from chronos._math import (
    add_months,
    add_years,
    days_in_month,
    days_into_week,
    is_leap,
    months_between,
)


@pytest.mark.parametrize(
    "year, expected",
    [
        (2024, True),
        (2023, False),
        (2000, True),
        (1900, False),
        (2100, False),
        (2400, True),
        (4, True),
        (1, False),
    ],
)
def test_is_leap(year, expected):
    assert is_leap(year) is expected


class TestDaysInMonth:

    @pytest.mark.parametrize(
        "month, expected",
        [
            (1, 31),
            (2, 28),
            (3, 31),
            (4, 30),
            (5, 31),
            (6, 30),
            (7, 31),
            (8, 31),
            (9, 30),
            (10, 31),
            (11, 30),
            (12, 31),
        ],
    )
    def test_common_year(self, month, expected):
        assert days_in_month(2023, month) == expected

    @pytest.mark.parametrize(
        "month, expected",
        [
            (1, 31),
            (2, 29),
            (3, 31),
            (4, 30),
            (5, 31),
            (6, 30),
            (7, 31),
            (8, 31),
            (9, 30),
            (10, 31),
            (11, 30),
            (12, 31),
        ],
    )
    def test_leap_year(self, month, expected):
        assert days_in_month(2024, month) == expected

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError, match="month"):
            days_in_month(2024, month)

    @given(integers(1, 9998), integers(1, 12))
    def test_agrees_with_stdlib(self, year, month):
        last = date(year, month, days_in_month(year, month))
        assert (last + timedelta(days=1)).day == 1


class TestAddMonths:

    @pytest.mark.parametrize(
        "d, months, expected",
        [
            (date(2024, 2, 4), 1, date(2024, 3, 4)),
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2023, 1, 31), 1, date(2023, 2, 28)),
            (date(2024, 3, 31), 1, date(2024, 4, 30)),
            (date(2024, 3, 31), -1, date(2024, 2, 29)),
            (date(2024, 12, 15), 2, date(2025, 2, 15)),
            (date(2024, 1, 15), -2, date(2023, 11, 15)),
            (date(2024, 1, 1), -1, date(2023, 12, 1)),
            (date(2024, 1, 1), -12, date(2023, 1, 1)),
            (date(2024, 1, 1), -13, date(2022, 12, 1)),
            (date(2024, 1, 1), -24, date(2022, 1, 1)),
            (date(2024, 1, 1), -25, date(2021, 12, 1)),
            (date(2024, 1, 1), 25, date(2026, 2, 1)),
            (date(2024, 1, 1), 48, date(2028, 1, 1)),
            (date(2021, 1, 31), 37, date(2024, 2, 29)),
            (date(2024, 5, 31), 0, date(2024, 5, 31)),
        ],
    )
    def test_valid(self, d, months, expected):
        assert add_months(d, months) == expected

    @pytest.mark.parametrize(
        "d, months",
        [
            (date(9999, 12, 1), 1),
            (date(1, 1, 31), -1),
            (date(2024, 1, 1), 10_000 * 12),
        ],
    )
    def test_out_of_range(self, d, months):
        with pytest.raises(ValueError):
            add_months(d, months)

    @given(dates(date(1000, 1, 1), date(8000, 12, 31)), integers(-9000, 9000))
    def test_never_overflows_into_next_month(self, d, months):
        result = add_months(d, months)
        assert months_between(date(result.year, result.month, 1), d) == months
        assert result.day == min(
            d.day, days_in_month(result.year, result.month)
        )


class TestAddYears:

    @pytest.mark.parametrize(
        "d, years, expected",
        [
            (date(2024, 2, 4), 1, date(2025, 2, 4)),
            (date(2024, 2, 4), -1, date(2023, 2, 4)),
            (date(2024, 2, 29), 1, date(2025, 2, 28)),
            (date(2024, 2, 29), -1, date(2023, 2, 28)),
            (date(2024, 2, 29), 4, date(2028, 2, 29)),
            (date(2024, 2, 29), 76, date(2100, 2, 28)),
            (date(2023, 12, 31), 1, date(2024, 12, 31)),
        ],
    )
    def test_valid(self, d, years, expected):
        assert add_years(d, years) == expected

    @pytest.mark.parametrize(
        "d, years",
        [
            (date(9999, 1, 1), 1),
            (date(1, 12, 31), -1),
        ],
    )
    def test_out_of_range(self, d, years):
        with pytest.raises(ValueError):
            add_years(d, years)


def test_months_between():
    assert months_between(date(2024, 2, 4), date(2024, 1, 31)) == 1
    assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == -1
    assert months_between(date(2024, 2, 4), date(2020, 1, 15)) == 49
    assert months_between(date(2024, 2, 4), date(2024, 2, 29)) == 0


@pytest.mark.parametrize(
    "d, week_start, expected",
    [
        (date(2024, 2, 4), 7, 0),  # Sunday
        (date(2024, 2, 5), 7, 1),
        (date(2024, 2, 10), 7, 6),  # Saturday
        (date(2024, 2, 4), 1, 6),
        (date(2024, 2, 5), 1, 0),  # Monday
    ],
)
def test_days_into_week(d, week_start, expected):
    assert days_into_week(d, week_start) == expected
