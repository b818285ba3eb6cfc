"""
models/validators.py
--------------------
Field validators shared by the Author and Tweet entities and by the
repositories' query methods.

Each validator takes a raw value plus the field name it is validating,
returns the normalized value, and raises ValidationError on the first
rule the value breaks. None of them log or touch the database.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional, Union
from uuid import UUID

from argon2 import Type, extract_parameters
from argon2.exceptions import InvalidHashError
from dateutil.parser import isoparse
from email_validator import EmailNotValidError, validate_email as _check_email

from models.errors import ErrorKind, ValidationError

_TAG_RE = re.compile(r"<[^>]*>")
_HEX_RE = re.compile(r"[0-9a-f]+")
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")

UuidLike = Union[UUID, str, bytes, bytearray, memoryview]
DateLike = Union[datetime, date, str, None]


def sanitize(value: str) -> str:
    """Strip markup tags and NUL bytes, then surrounding whitespace."""
    return _TAG_RE.sub("", value).replace("\x00", "").strip()


def validate_uuid(value: UuidLike, field: str) -> UUID:
    """
    Parse a UUID from a UUID, its canonical 36-character string form,
    or its raw 16 bytes.

    Raises:
        ValidationError(INVALID_IDENTIFIER): If the value is not a well-formed UUID.
    """
    if isinstance(value, UUID):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != 16:
            raise ValidationError(
                ErrorKind.INVALID_IDENTIFIER,
                f"{field} must be 16 bytes, got {len(raw)}", field,
            )
        return UUID(bytes=raw)
    if isinstance(value, str):
        text = value.strip()
        if _UUID_RE.fullmatch(text):
            return UUID(text)
        raise ValidationError(
            ErrorKind.INVALID_IDENTIFIER, f"{field} is not a valid UUID", field,
        )
    raise ValidationError(
        ErrorKind.INVALID_IDENTIFIER,
        f"{field} must be a UUID or string, got {type(value).__name__}", field,
    )


def validate_text(
    value: Optional[str], field: str, max_length: int, nullable: bool = False
) -> Optional[str]:
    """
    Trim and sanitize a bounded text value.

    Raises:
        ValidationError(EMPTY_OR_UNSAFE_INPUT): Empty after sanitizing.
        ValidationError(VALUE_TOO_LONG): Longer than ``max_length``.
    """
    if value is None:
        if nullable:
            return None
        raise ValidationError(ErrorKind.EMPTY_OR_UNSAFE_INPUT, f"{field} is required", field)
    if not isinstance(value, str):
        raise ValidationError(
            ErrorKind.INVALID_FORMAT, f"{field} must be a string", field,
        )
    cleaned = sanitize(value)
    if not cleaned:
        raise ValidationError(
            ErrorKind.EMPTY_OR_UNSAFE_INPUT, f"{field} is empty or insecure", field,
        )
    if len(cleaned) > max_length:
        raise ValidationError(
            ErrorKind.VALUE_TOO_LONG,
            f"{field} exceeds {max_length} characters", field,
        )
    return cleaned


def validate_email(value: Optional[str], field: str, max_length: int = 128) -> str:
    """
    Validate an email address against the RFC grammar (no DNS lookup).

    Raises:
        ValidationError(EMPTY_OR_UNSAFE_INPUT): Missing or blank.
        ValidationError(VALUE_TOO_LONG): Longer than ``max_length``.
        ValidationError(INVALID_FORMAT): Not a valid address.
    """
    if value is None or not str(value).strip():
        raise ValidationError(
            ErrorKind.EMPTY_OR_UNSAFE_INPUT, f"{field} is empty or insecure", field,
        )
    email = str(value).strip()
    if len(email) > max_length:
        raise ValidationError(
            ErrorKind.VALUE_TOO_LONG, f"{field} exceeds {max_length} characters", field,
        )
    try:
        _check_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(
            ErrorKind.INVALID_FORMAT, f"{field} is not a valid email: {e}", field,
        ) from e
    return email


def validate_hex_token(
    value: Optional[str], field: str, length: int = 32, nullable: bool = True
) -> Optional[str]:
    """
    Lower-case and trim a hexadecimal token of an exact length.

    Raises:
        ValidationError(INVALID_FORMAT): Contains non-hex characters.
        ValidationError(WRONG_LENGTH): Not exactly ``length`` characters.
    """
    if value is None:
        if nullable:
            return None
        raise ValidationError(ErrorKind.EMPTY_OR_UNSAFE_INPUT, f"{field} is required", field)
    token = str(value).strip().lower()
    if not _HEX_RE.fullmatch(token):
        raise ValidationError(
            ErrorKind.INVALID_FORMAT, f"{field} is not hexadecimal", field,
        )
    if len(token) != length:
        raise ValidationError(
            ErrorKind.WRONG_LENGTH, f"{field} must be {length} characters", field,
        )
    return token


def validate_password_hash(value: Optional[str], field: str, length: int = 97) -> str:
    """
    Check that a value is an encoded argon2i hash of the expected length.

    The hash is only inspected, never verified against a password.

    Raises:
        ValidationError(EMPTY_OR_UNSAFE_INPUT): Missing or blank.
        ValidationError(INVALID_FORMAT): Not an argon2i hash.
        ValidationError(WRONG_LENGTH): Not exactly ``length`` characters.
    """
    hashed = (value or "").strip()
    if not hashed:
        raise ValidationError(
            ErrorKind.EMPTY_OR_UNSAFE_INPUT, f"{field} is empty or insecure", field,
        )
    try:
        params = extract_parameters(hashed)
    except InvalidHashError:
        raise ValidationError(
            ErrorKind.INVALID_FORMAT, f"{field} is not a valid hash", field,
        ) from None
    if params.type is not Type.I:
        raise ValidationError(
            ErrorKind.INVALID_FORMAT, f"{field} is not an argon2i hash", field,
        )
    if len(hashed) != length:
        raise ValidationError(
            ErrorKind.WRONG_LENGTH, f"{field} must be {length} characters", field,
        )
    return hashed


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_datetime(value: DateLike, field: str) -> datetime:
    """
    Normalize a timestamp to a naive UTC datetime.

    Accepts a datetime, a date (midnight), an ISO-8601 string such as
    ``2020-01-01 00:00:00.000000``, or None, which means "now".
    Aware datetimes are converted to UTC.

    Raises:
        ValidationError(INVALID_DATE): Unparseable or nonexistent date.
    """
    if value is None:
        return utc_now()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(ErrorKind.INVALID_DATE, f"{field} is empty", field)
        try:
            value = isoparse(text)
        except (ValueError, OverflowError) as e:
            raise ValidationError(
                ErrorKind.INVALID_DATE, f"{field} is not a valid date: {e}", field,
            ) from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise ValidationError(
        ErrorKind.INVALID_DATE,
        f"{field} must be a date, datetime or string, got {type(value).__name__}", field,
    )


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``%`` and ``_`` match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
