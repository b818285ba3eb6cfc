"""
models/errors.py
----------------
Error types raised by entity validation and by the repositories.

Every error carries an `ErrorKind`, so callers branch on `err.kind`
instead of on the concrete exception class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """The fixed set of failure kinds an entity or repository can report."""
    INVALID_IDENTIFIER = "invalid_identifier"
    EMPTY_OR_UNSAFE_INPUT = "empty_or_unsafe_input"
    VALUE_TOO_LONG = "value_too_long"
    INVALID_FORMAT = "invalid_format"
    WRONG_LENGTH = "wrong_length"
    INVALID_DATE = "invalid_date"
    PERSISTENCE = "persistence"


class EntityError(Exception):
    """Base exception for all entity and persistence errors."""

    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None):
        self.kind = kind
        self.message = message
        self.field = field
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Machine-readable code, e.g. ``VALUE_TOO_LONG_TWEET_CONTENT``."""
        base = self.kind.name
        return f"{base}_{self.field.upper()}" if self.field else base


class ValidationError(EntityError, ValueError):
    """Raised when a field value fails validation."""


class PersistenceError(EntityError):
    """Raised when a database statement fails or a stored row is corrupt."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(ErrorKind.PERSISTENCE, message, field)


class DuplicateRecordError(PersistenceError):
    """Raised when an insert or update violates a unique constraint."""
