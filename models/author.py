"""
models/author.py
----------------
Domain model for an author (the profile that posts tweets).
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from models.validators import (
    UuidLike,
    validate_email,
    validate_hex_token,
    validate_password_hash,
    validate_text,
    validate_uuid,
)
from utils.serialization import uuid_to_str

AVATAR_URL_MAX_LENGTH = 255
ACTIVATION_TOKEN_LENGTH = 32
EMAIL_MAX_LENGTH = 128
HASH_LENGTH = 97
USERNAME_MAX_LENGTH = 32

_VALIDATORS = {
    "author_id": lambda v: validate_uuid(v, "author_id"),
    "author_avatar_url": lambda v: validate_text(
        v, "author_avatar_url", AVATAR_URL_MAX_LENGTH, nullable=True
    ),
    "author_activation_token": lambda v: validate_hex_token(
        v, "author_activation_token", ACTIVATION_TOKEN_LENGTH
    ),
    "author_email": lambda v: validate_email(v, "author_email", EMAIL_MAX_LENGTH),
    "author_hash": lambda v: validate_password_hash(v, "author_hash", HASH_LENGTH),
    "author_username": lambda v: validate_text(v, "author_username", USERNAME_MAX_LENGTH),
}


@dataclass
class Author:
    """
    Represents a registered author.

    Fields are validated in declaration order on construction and again
    on every later assignment; the first invalid one raises ValidationError.

    Attributes:
        author_id: Primary key. Cannot be reassigned once set.
        author_avatar_url: Optional avatar URL, at most 255 characters.
        author_activation_token: Optional 32-character hex token, lower-cased.
        author_email: Unique contact email, at most 128 characters.
        author_hash: argon2i password hash, exactly 97 characters.
        author_username: Unique display name, at most 32 characters.
    """
    author_id: UUID
    author_avatar_url: Optional[str]
    author_activation_token: Optional[str]
    author_email: str
    author_hash: str = field(repr=False)
    author_username: str

    def __setattr__(self, name, value):
        if name == "author_id" and name in self.__dict__:
            raise AttributeError("author_id is immutable")
        validator = _VALIDATORS.get(name)
        if validator is not None:
            value = validator(value)
        super().__setattr__(name, value)

    @classmethod
    def new(
        cls,
        email: str,
        password_hash: str,
        username: str,
        avatar_url: Optional[str] = None,
        activation_token: Optional[str] = None,
    ) -> "Author":
        """Build an Author with a freshly generated random id."""
        return cls(uuid4(), avatar_url, activation_token, email, password_hash, username)

    def to_dict(self) -> dict:
        """
        JSON-ready projection of the public fields.

        The password hash and activation token are never serialized.
        """
        return {
            "authorId": uuid_to_str(self.author_id),
            "authorAvatarUrl": self.author_avatar_url,
            "authorEmail": self.author_email,
            "authorUsername": self.author_username,
        }

    def __str__(self) -> str:
        return f"@{self.author_username} <{self.author_email}>"
