"""
utils/serialization.py
----------------------
Canonical conversions used when entities leave the process:
UUIDs as 36-character strings, timestamps as epoch milliseconds for JSON
and as fixed-precision strings for SQL parameters.
"""

import json
from datetime import datetime, timezone
from uuid import UUID

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def uuid_to_str(value: UUID) -> str:
    """Canonical hyphenated form, e.g. ``3f2504e0-4f89-11d3-9a0c-0305e82c3301``."""
    return str(value)


def to_epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch; naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return round(value.timestamp() * 1000)


def format_timestamp(value: datetime) -> str:
    """Format for binding to a TIMESTAMP(6) column: ``YYYY-MM-DD HH:MM:SS.ffffff``."""
    return value.strftime(TIMESTAMP_FORMAT)


def dumps(entity) -> str:
    """JSON text of an entity's ``to_dict()`` projection."""
    return json.dumps(entity.to_dict())
