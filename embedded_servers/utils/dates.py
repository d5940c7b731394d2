"""
Date formatting for conditional request headers.
"""

from datetime import datetime, timezone
from email.utils import format_datetime

from embedded_servers.exceptions import ValidationError

# Pattern of HTTP dates, e.g. "Wed, 21 Oct 2015 07:28:00 GMT"
HTTP_DATE_PATTERN = "EEE, dd MMM yyyy HH:mm:ss zzz"


def to_utc(date: datetime | float | int) -> datetime:
    """Convert a datetime or a POSIX timestamp to an aware UTC datetime.

    Naive datetimes are taken as UTC.

    Raises:
        ValidationError: If date is neither a datetime nor a number
    """
    if isinstance(date, datetime):
        if date.tzinfo is None:
            return date.replace(tzinfo=timezone.utc)
        return date.astimezone(timezone.utc)
    if isinstance(date, bool) or not isinstance(date, (int, float)):
        raise ValidationError(f"Expected a datetime or a POSIX timestamp, got {date!r}")
    return datetime.fromtimestamp(date, tz=timezone.utc)


def format_http_date(date: datetime | float | int) -> str:
    """Format a date using the HTTP date pattern, in GMT.

    Day and month names are always English, whatever the current locale.

    Args:
        date: Datetime (naive values are taken as UTC) or POSIX timestamp

    Returns:
        Formatted date, e.g. "Wed, 21 Oct 2015 07:28:00 GMT"
    """
    return format_datetime(to_utc(date).replace(microsecond=0), usegmt=True)
