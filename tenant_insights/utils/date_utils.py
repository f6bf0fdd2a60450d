"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

from tenant_insights.domain.exceptions import InvalidRecordError

SECONDS_PER_DAY = 86_400

Timestamp = Union[datetime, date, str, None]


def to_utc(value: Timestamp) -> Optional[datetime]:
    """
    Normalize a timestamp-like value to a timezone-aware UTC datetime.

    - None and empty strings are "unknown" and return None
    - Naive datetimes are assumed to already be UTC
    - Plain dates become midnight UTC
    - ISO-8601 strings are parsed (a trailing "Z" is accepted)

    Raises:
        InvalidRecordError: If a string cannot be parsed or the type is unsupported
    """
    if value is None or value == "":
        return None

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidRecordError(f"Unparseable timestamp: {value!r}") from e

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    raise InvalidRecordError(f"Unsupported timestamp type: {type(value).__name__}")


def days_between_ceil(start: Timestamp, end: Timestamp) -> Optional[int]:
    """Whole days from start to end, rounded up. None if either side is unknown."""
    start_dt = to_utc(start)
    end_dt = to_utc(end)
    if start_dt is None or end_dt is None:
        return None
    return math.ceil((end_dt - start_dt).total_seconds() / SECONDS_PER_DAY)
