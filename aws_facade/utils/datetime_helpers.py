"""
Date and time helpers used around bookings and reminders.

Timezone discipline: instants are UTC internally. A named timezone is only
applied when rendering for display or when interpreting a caller's local
date + time.

Only ``combine_iso_date_and_time`` (and ``to_iso_timestamp``, which it
relies on) raise on malformed input. The remaining helpers degrade to a
neutral value: 0 for durations, ``INVALID_DATE`` / ``INVALID_TIME`` for
rendered strings.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Tuple

from ..exceptions import DateTimeFormatError
from .serialization import parse_iso_datetime, to_iso_timestamp
from .timezone import get_zone, to_user_timezone, utcnow

INVALID_DATE = "Invalid Date"
INVALID_TIME = "Invalid Time"

WEEKEND = "Weekend"
WEEKDAY = "Weekday"

# Friday, Saturday, Sunday (date.weekday() numbering)
WEEKEND_DAYS = frozenset({4, 5, 6})

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_STRICT_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
_CLOCK_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")
_INTEGER_RE = re.compile(r"\d+")

_MINUTES_PER_DAY = 24 * 60


def _parse_clock(hhmm: Any) -> Optional[Tuple[int, int]]:
    if not isinstance(hhmm, str):
        return None
    match = _CLOCK_RE.match(hhmm.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def _parse_calendar_date(value: Any) -> Optional[date]:
    if not isinstance(value, str):
        return None
    match = _DATE_RE.match(value.strip())
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def shift_hour_backward(hhmm: str) -> str:
    """Subtract one hour from a 24-hour ``HH:MM`` time, wrapping at midnight.

    >>> shift_hour_backward("00:15")
    '23:15'
    """
    clock = _parse_clock(hhmm)
    if clock is None:
        return INVALID_TIME
    hours, minutes = clock
    return f"{(hours - 1) % 24:02d}:{minutes:02d}"


def classify_day(date_str: str) -> str:
    """Return ``"Weekend"`` or ``"Weekday"`` for a ``YYYY-MM-DD`` calendar date.

    Friday counts as weekend. The classification is purely calendar-based,
    no timezone is involved.
    """
    day = _parse_calendar_date(date_str)
    if day is None:
        return INVALID_DATE
    return WEEKEND if day.weekday() in WEEKEND_DAYS else WEEKDAY


def is_weekend(date_str: str) -> bool:
    return classify_day(date_str) == WEEKEND


def get_future_date(days: int, tz: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """Calendar date ``days`` days after today.

    Args:
        days: Offset in days (negative values go back in time)
        tz: Timezone whose "today" is used (UTC if None)
        now: Reference instant, mainly for tests (current time if None)
    """
    reference = to_user_timezone(now or utcnow(), tz or "UTC")
    return (reference + timedelta(days=days)).date()


def extract_hours(text: Any) -> int:
    """First integer found in a free-text duration, or 0.

    >>> extract_hours("about 3 hours")
    3
    """
    if text is None:
        return 0
    match = _INTEGER_RE.search(str(text))
    return int(match.group(0)) if match else 0


def add_duration(value: str, hours: Any) -> str:
    """Add a (possibly fractional) number of hours to a time or timestamp.

    An ``HH:MM`` input returns ``HH:MM`` on a 24-hour clock, wrapping past
    midnight. Any other input is read as an ISO-8601 timestamp and the
    result is returned in the fixed ISO format.
    """
    try:
        delta_hours = float(hours)
    except (TypeError, ValueError):
        return INVALID_DATE

    clock = _parse_clock(value)
    if clock is not None:
        total = clock[0] * 60 + clock[1] + round(delta_hours * 60)
        total %= _MINUTES_PER_DAY
        return f"{total // 60:02d}:{total % 60:02d}"

    try:
        start = parse_iso_datetime(value)
        return to_iso_timestamp(start + timedelta(hours=delta_hours))
    except (DateTimeFormatError, OverflowError):
        return INVALID_DATE


def convert_24_to_12(hhmm: str) -> str:
    """Convert 24-hour time to 12-hour time with an AM/PM suffix.

    >>> convert_24_to_12("00:00")
    '12:00 AM'
    >>> convert_24_to_12("13:05")
    '1:05 PM'
    """
    clock = _parse_clock(hhmm)
    if clock is None:
        return INVALID_TIME
    hours, minutes = clock
    suffix = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"


def _to_display_zone(iso_timestamp: str, tz: Optional[str]) -> Optional[datetime]:
    try:
        return to_user_timezone(parse_iso_datetime(iso_timestamp), tz or "UTC")
    except DateTimeFormatError:
        return None


def to_display_date(iso_timestamp: str, tz: Optional[str] = None) -> str:
    """Render a timestamp as e.g. ``Friday, March 1, 2024`` in ``tz``."""
    dt = _to_display_zone(iso_timestamp, tz)
    if dt is None:
        return INVALID_DATE
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def to_display_time(iso_timestamp: str, tz: Optional[str] = None) -> str:
    """Render a timestamp as e.g. ``2:30 PM`` in ``tz``."""
    dt = _to_display_zone(iso_timestamp, tz)
    if dt is None:
        return INVALID_DATE
    return convert_24_to_12(f"{dt:%H:%M}")


def to_display_datetime(iso_timestamp: str, tz: Optional[str] = None) -> Tuple[str, str]:
    """Both display strings for one timestamp: ``(date, time)``."""
    return to_display_date(iso_timestamp, tz), to_display_time(iso_timestamp, tz)


def combine_iso_date_and_time(date_str: str, time_str: str, tz: Optional[str] = None) -> str:
    """Combine ``YYYY-MM-DD`` and ``HH:MM[:SS]`` into one ISO-8601 UTC instant.

    Args:
        date_str: Calendar date, zero-padded
        time_str: Wall-clock time, zero-padded
        tz: Timezone the date and time are expressed in (UTC if None)

    Returns:
        Fixed-format UTC timestamp, e.g. ``2024-03-01T14:30:00.000Z``

    Raises:
        DateTimeFormatError: If either part is malformed or not a real date/time

    Example:
        >>> combine_iso_date_and_time("2024-03-01", "14:30")
        '2024-03-01T14:30:00.000Z'
    """
    date_match = _DATE_RE.match(date_str) if isinstance(date_str, str) else None
    if not date_match:
        raise DateTimeFormatError(date_str, "YYYY-MM-DD")

    time_match = _STRICT_TIME_RE.match(time_str) if isinstance(time_str, str) else None
    if not time_match:
        raise DateTimeFormatError(time_str, "HH:MM or HH:MM:SS")

    year, month, day = (int(part) for part in date_match.groups())
    hours, minutes = int(time_match.group(1)), int(time_match.group(2))
    seconds = int(time_match.group(3) or 0)

    try:
        local = datetime(year, month, day, hours, minutes, seconds, tzinfo=get_zone(tz))
    except ValueError as e:
        raise DateTimeFormatError(f"{date_str} {time_str}", "a valid calendar date and 24-hour time", e) from e

    return to_iso_timestamp(local)
