"""
Payload serialization helpers.

Every payload written to DynamoDB, S3, EventBridge or Lambda passes through
``sanitize`` first, so embedded dates are always stored as the same
order-comparable text: ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from ..exceptions import DateTimeFormatError
from .timezone import to_utc

ISO_TIMESTAMP_FORMAT = "YYYY-MM-DDTHH:MM:SS.mmmZ"

# Characters encodeURIComponent leaves untouched besides letters, digits and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or timestamp into an aware UTC datetime.

    Accepts a trailing ``Z``; naive values are taken as UTC.

    Raises:
        DateTimeFormatError: If the string is not ISO-8601
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except (ValueError, AttributeError) as e:
        raise DateTimeFormatError(value, "an ISO-8601 date or timestamp", e) from e
    return to_utc(parsed)


def to_iso_timestamp(value: Any) -> str:
    """Normalize a date-like value to a fixed ISO-8601 UTC instant.

    Args:
        value: ``datetime`` (naive means UTC), ``date`` (midnight UTC),
            ISO-8601 string, or epoch seconds as int/float

    Returns:
        Text such as ``2024-03-01T14:30:00.000Z``

    Raises:
        DateTimeFormatError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        dt = to_utc(value)
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif isinstance(value, str):
        dt = parse_iso_datetime(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise DateTimeFormatError(value, "epoch seconds within the supported range", e) from e
    else:
        raise DateTimeFormatError(value, "a datetime, date, ISO-8601 string or epoch seconds")

    return dt.strftime('%Y-%m-%dT%H:%M:%S') + f".{dt.microsecond // 1000:03d}Z"


def sanitize(payload: Any) -> Any:
    """Deep-copy a payload, replacing every date/datetime with ISO text.

    Mappings and sequences are walked recursively (tuples become lists);
    other values are returned untouched. Applying it twice gives the same
    result as applying it once.
    """
    if isinstance(payload, (datetime, date)):
        return to_iso_timestamp(payload)
    if isinstance(payload, Mapping):
        return {key: sanitize(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [sanitize(value) for value in payload]
    return payload


def _json_default(obj: Any) -> Any:
    """json.dumps fallback for values DynamoDB hands back."""
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Serialize a payload to JSON text after sanitizing embedded dates."""
    return json.dumps(sanitize(value), default=_json_default)


def _uri_component(value: Any) -> str:
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return quote(text, safe=_URI_COMPONENT_SAFE)


def encode_flat_records_as_query_string(records: Iterable[Mapping[str, Any]]) -> str:
    """Flatten flat key/value records into one percent-encoded query string.

    Example:
        >>> encode_flat_records_as_query_string([{"a": "1 2"}, {"b": "x&y"}])
        'a=1%202&b=x%26y'
    """
    pairs = []
    for record in records:
        for key, value in record.items():
            pairs.append(f"{_uri_component(key)}={_uri_component(value)}")
    return "&".join(pairs)
