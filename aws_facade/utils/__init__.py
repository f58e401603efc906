"""
Pure helpers: payload serialization, timezone conversion, date/time
formatting and text utilities. Nothing here talks to AWS.
"""

from .serialization import (
    ISO_TIMESTAMP_FORMAT,
    encode_flat_records_as_query_string,
    parse_iso_datetime,
    sanitize,
    to_iso_timestamp,
    to_json,
)
from .timezone import (
    ensure_timezone_aware,
    get_zone,
    to_user_timezone,
    to_utc,
    utcnow,
)
from .datetime_helpers import (
    INVALID_DATE,
    INVALID_TIME,
    WEEKDAY,
    WEEKEND,
    add_duration,
    classify_day,
    combine_iso_date_and_time,
    convert_24_to_12,
    extract_hours,
    get_future_date,
    is_weekend,
    shift_hour_backward,
    to_display_date,
    to_display_datetime,
    to_display_time,
)
from .text import (
    RESERVED_KEYWORDS,
    camelize,
    is_empty,
    is_reserved_keyword,
)

__all__ = [
    # Serialization
    "ISO_TIMESTAMP_FORMAT",
    "encode_flat_records_as_query_string",
    "parse_iso_datetime",
    "sanitize",
    "to_iso_timestamp",
    "to_json",

    # Timezone
    "ensure_timezone_aware",
    "get_zone",
    "to_user_timezone",
    "to_utc",
    "utcnow",

    # Date/time helpers
    "INVALID_DATE",
    "INVALID_TIME",
    "WEEKDAY",
    "WEEKEND",
    "add_duration",
    "classify_day",
    "combine_iso_date_and_time",
    "convert_24_to_12",
    "extract_hours",
    "get_future_date",
    "is_weekend",
    "shift_hour_backward",
    "to_display_date",
    "to_display_datetime",
    "to_display_time",

    # Text
    "RESERVED_KEYWORDS",
    "camelize",
    "is_empty",
    "is_reserved_keyword",
]
