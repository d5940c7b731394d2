"""
Tests for HTTP date formatting.
"""

from datetime import date, datetime, timedelta, timezone
import locale

import pytest

from embedded_servers.exceptions import ValidationError
from embedded_servers.utils.dates import format_http_date, to_utc


class TestFormatHttpDate:
    """Test format_http_date."""

    @pytest.mark.parametrize(
        "date, expected",
        [
            (datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc), "Wed, 21 Oct 2015 07:28:00 GMT"),
            (datetime(2015, 10, 21, 7, 28), "Wed, 21 Oct 2015 07:28:00 GMT"),
            (datetime(1994, 11, 6, 8, 49, 37, 123456), "Sun, 06 Nov 1994 08:49:37 GMT"),
            (datetime(2000, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=-5))), "Sat, 01 Jan 2000 05:00:00 GMT"),
            (0, "Thu, 01 Jan 1970 00:00:00 GMT"),
            (1445412480.75, "Wed, 21 Oct 2015 07:28:00 GMT"),
        ],
    )
    def test_format(self, date, expected):
        assert format_http_date(date) == expected

    def test_does_not_depend_on_locale(self):
        """Day and month names stay in English under another locale."""
        previous = locale.setlocale(locale.LC_TIME)
        try:
            try:
                locale.setlocale(locale.LC_TIME, "fr_FR.UTF-8")
            except locale.Error:
                pytest.skip("fr_FR locale not available")
            assert format_http_date(datetime(2015, 10, 21, 7, 28)) == "Wed, 21 Oct 2015 07:28:00 GMT"
        finally:
            locale.setlocale(locale.LC_TIME, previous)


class TestToUtc:
    """Test to_utc."""

    def test_naive_is_utc(self):
        assert to_utc(datetime(2020, 1, 1)).tzinfo is timezone.utc

    def test_aware_is_converted(self):
        date = to_utc(datetime(2020, 1, 1, 2, tzinfo=timezone(timedelta(hours=2))))

        assert date == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert date.hour == 0

    @pytest.mark.parametrize("value", [date(2020, 1, 1), "2020-01-01", True, None])
    def test_rejects_other_types(self, value):
        with pytest.raises(ValidationError, match="Expected a datetime"):
            to_utc(value)
