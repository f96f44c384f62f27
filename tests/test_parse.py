from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis.strategies import text

from chronos._parse import datetime_from_string

UTC = timezone.utc


class TestDatetimeFromString:

    @pytest.mark.parametrize(
        "s, expected",
        [
            # dates
            ("2024-02-04", datetime(2024, 2, 4, tzinfo=UTC)),
            ("20240204", datetime(2024, 2, 4, tzinfo=UTC)),
            ("2024-02", datetime(2024, 2, 1, tzinfo=UTC)),
            ("2024", datetime(2024, 1, 1, tzinfo=UTC)),
            ("0001-01-01", datetime(1, 1, 1, tzinfo=UTC)),
            ("  2024-02-04\n", datetime(2024, 2, 4, tzinfo=UTC)),
            # date-times in UTC
            (
                "2024-02-04T12:00:00.000Z",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            ("2024-02-04T12:00:00Z", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("2024-02-04t12:00:00z", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("2024-02-04 12:00", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("2024-02-04T12:30", datetime(2024, 2, 4, 12, 30, tzinfo=UTC)),
            ("20240204T120000Z", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("20240204 1230", datetime(2024, 2, 4, 12, 30, tzinfo=UTC)),
            # fractions are truncated to milliseconds
            (
                "2024-02-04T12:00:00.123456789Z",
                datetime(2024, 2, 4, 12, 0, 0, 123_000, tzinfo=UTC),
            ),
            (
                "2024-02-04T12:00:00,5Z",
                datetime(2024, 2, 4, 12, 0, 0, 500_000, tzinfo=UTC),
            ),
            (
                "2024-02-04T12:00:00.9999",
                datetime(2024, 2, 4, 12, 0, 0, 999_000, tzinfo=UTC),
            ),
            # offsets are converted to UTC
            (
                "2024-02-04T14:00:00+02:00",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            ("2024-02-04T07:00-0500", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("2024-02-04T14:00+02", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            (
                "2024-02-04T12:00:30+00:00:30",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            (
                "2024-02-04T00:30:00+01:00",
                datetime(2024, 2, 3, 23, 30, tzinfo=UTC),
            ),
            # RFC 2822
            (
                "Sun, 04 Feb 2024 12:00:00 GMT",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            (
                "4 Feb 2024 13:00:00 +0100",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            (
                "Sun, 04 Feb 2024 07:00 EST",
                datetime(2024, 2, 4, 12, tzinfo=UTC),
            ),
            ("sun,04 feb 24 12:00 UT", datetime(2024, 2, 4, 12, tzinfo=UTC)),
            ("04 Feb 2024 12:00:00 XYZ", datetime(2024, 2, 4, 12, tzinfo=UTC)),
        ],
    )
    def test_valid(self, s, expected):
        result = datetime_from_string(s)
        assert result == expected
        assert result.tzinfo is UTC

    @pytest.mark.parametrize(
        "s",
        [
            "",
            "   ",
            "not-a-date",
            "invalid-date",
            "2024-02-30",
            "2024-13-01",
            "2024-00-10",
            "0000-01-01",
            "2024-2-4",
            "2024/02/04",
            "+2024-02-04",
            "2024-W05-1",
            "2024-035",
            "1706976000000",
            "2024-02-04T",
            "2024-02-04T12",
            "2024-02-04T25:00",
            "2024-02-04T12:60",
            "2024-02-04T12:00:00:00",
            "2024-02-04T12:00.5",
            "2024-02-04T12:00:00.Z",
            "2024-02-04T12:00:00.1234567890Z",
            "2024-02-04T12:00+24:00",
            "2024-02-04T12:00+05:60",
            "2024-02-04T12:00+5",
            "2024-02-04T12:00:00 Z",
            "２０２４-02-04",
            "2024-02-04T12:00:00\u200bZ",
            # out of range once converted to UTC
            "0001-01-01T00:00:00+01:00",
            "9999-12-31T23:00:00-01:00",
            # RFC 2822 with a mismatching weekday
            "Mon, 04 Feb 2024 12:00:00 GMT",
            "Sun, 04 Foo 2024 12:00:00 GMT",
            "Sun, 04 Feb 2024 GMT",
            "Sun, 04 Feb 2024 12:00:00 +01",
            "February 4, 2024",
            "yesterday",
            # hour 24, and RFC 2822 without a zone or a time
            "2024-02-04T24:00:00Z",
            "04 Feb 2024 12:00",
            "Sun, 04 Feb 2024",
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(ValueError, match="Invalid format"):
            datetime_from_string(s)

    @given(text())
    def test_fuzzing(self, s):
        try:
            result = datetime_from_string(s)
        except ValueError as e:
            assert "Invalid format" in str(e)
        else:
            assert result.tzinfo is UTC
            assert result.microsecond % 1_000 == 0
