"""
Timestamp helpers.

MongoDB stores datetimes as UTC milliseconds and pymongo hands them
back as naive ``datetime`` objects.  The services therefore keep every
timestamp naive-in-UTC internally; response schemas re-attach the UTC
zone when rendering.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


_datetime_adapter = TypeAdapter(datetime)


def utcnow() -> datetime:
    # Truncated to milliseconds, the precision BSON keeps.
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_event_date(value: Any) -> datetime:
    """Parse a client-supplied event date into naive UTC.

    Accepts ISO-8601 strings (with or without offset; naive values are
    taken as UTC) and Unix timestamps.  Raises ``ValidationError`` with
    "Invalid event date." for anything else.
    """
    if isinstance(value, bool):
        raise ValidationError("Invalid event date.")
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid event date.") from exc
    try:
        return to_naive_utc(parsed)
    except (OverflowError, ValueError) as exc:
        # The offset pushes the instant outside the representable range.
        raise ValidationError("Invalid event date.") from exc


def require_future(value: datetime, now: datetime) -> datetime:
    if value <= now:
        raise ValidationError("Event date must be a future date.")
    return value
