"""Timezone utilities.

All instants are handled in UTC internally. Naive datetimes are assumed to
already be UTC; conversion to a named zone happens only at presentation
boundaries (display helpers) or when interpreting a caller's local date and
time.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import ValidationError


def get_zone(tz: Optional[str] = None):
    """Resolve a timezone name into a tzinfo; None or 'UTC' give timezone.utc.

    Raises:
        ValidationError: If the name is not a known IANA timezone
    """
    if tz is None or tz == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {tz}", errors={'timezone': tz}, original_error=e) from e


def to_utc(dt: datetime) -> datetime:
    """Normalize a datetime to an aware UTC instant.

    Naive datetimes are assumed to already be in UTC.

    Examples:
        >>> to_utc(datetime(2024, 7, 1, 9, 0, tzinfo=ZoneInfo('Europe/Paris')))
        datetime.datetime(2024, 7, 1, 7, 0, tzinfo=datetime.timezone.utc)
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def ensure_timezone_aware(dt: datetime, assumed_tz: Optional[str] = "UTC") -> datetime:
    """Attach a zone to a naive datetime, keeping its wall-clock reading.

    Aware datetimes are returned unchanged.

    Examples:
        >>> ensure_timezone_aware(datetime(2024, 1, 1, 10, 0), "America/New_York")
        # -> 2024-01-01 10:00:00-05:00
    """
    if dt is None:
        return None

    if dt.tzinfo is not None:
        return dt

    return dt.replace(tzinfo=get_zone(assumed_tz))


def to_user_timezone(dt: datetime, user_tz: Optional[str] = None) -> datetime:
    """Convert a UTC datetime to the user's timezone for display.

    Returns the datetime unchanged when ``user_tz`` is None.
    """
    if dt is None or user_tz is None:
        return dt

    return to_utc(dt).astimezone(get_zone(user_tz))


def utcnow() -> datetime:
    """Current instant, aware, in UTC."""
    return datetime.now(timezone.utc)
