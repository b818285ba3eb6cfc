"""
repositories/author_repo.py
---------------------------
Data access layer for authors.
All SQL queries related to the `author` table live here.
"""

from typing import Optional

from models.author import Author, EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH
from models.errors import PersistenceError, ValidationError
from models.validators import (
    UuidLike,
    validate_email,
    validate_hex_token,
    validate_text,
    validate_uuid,
)
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "author_id, author_avatar_url, author_activation_token, "
    "author_email, author_hash, author_username"
)


class AuthorRepository(BaseRepository):
    """Repository for CRUD operations on the author table."""

    # ── CREATE ────────────────────────────────────────────

    def insert(self, author: Author) -> None:
        """
        Insert a new author.

        Raises:
            DuplicateRecordError: If the id, email or username is taken.
            PersistenceError: On any other database failure.
        """
        sql = f"INSERT INTO author ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s);"
        params = (
            author.author_id.bytes, author.author_avatar_url,
            author.author_activation_token, author.author_email,
            author.author_hash, author.author_username,
        )
        self._write(sql, params, f"insert author {author.author_id}")
        logger.info(f"Inserted author {author.author_id} (@{author.author_username})")

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, author_id: UuidLike) -> Optional[Author]:
        """Fetch a single author by primary key, or None."""
        author_id = validate_uuid(author_id, "author_id")
        sql = f"SELECT {_COLUMNS} FROM author WHERE author_id = %s;"
        return self._fetch_one(sql, (author_id.bytes,), f"fetch author {author_id}")

    def get_by_email(self, email: str) -> Optional[Author]:
        """Fetch the author registered under an email address, or None."""
        email = validate_email(email, "author_email", EMAIL_MAX_LENGTH)
        sql = f"SELECT {_COLUMNS} FROM author WHERE author_email = %s;"
        return self._fetch_one(sql, (email,), f"fetch author by email {email}")

    def get_by_username(self, username: str) -> Optional[Author]:
        """Fetch the author with an exact username, or None."""
        username = validate_text(username, "author_username", USERNAME_MAX_LENGTH)
        sql = f"SELECT {_COLUMNS} FROM author WHERE author_username = %s;"
        return self._fetch_one(sql, (username,), f"fetch author @{username}")

    def get_by_activation_token(self, token: str) -> Optional[Author]:
        """
        Fetch the author holding a pending activation token, or None.

        Raises:
            ValidationError: If the token is not 32 hex characters.
        """
        token = validate_hex_token(token, "author_activation_token", nullable=False)
        sql = f"SELECT {_COLUMNS} FROM author WHERE author_activation_token = %s;"
        return self._fetch_one(sql, (token,), "fetch author by activation token")

    def get_all(self) -> list[Author]:
        """Fetch every author in storage order."""
        sql = f"SELECT {_COLUMNS} FROM author;"
        rows = self._fetch(sql, None, "fetch all authors")
        return [self._row_to_author(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, author: Author) -> bool:
        """
        Write every mutable column of an existing author.

        Returns:
            True if a row was updated, False if the id was not found.
        """
        sql = """
            UPDATE author
            SET author_avatar_url = %s, author_activation_token = %s,
                author_email = %s, author_hash = %s, author_username = %s
            WHERE author_id = %s;
        """
        params = (
            author.author_avatar_url, author.author_activation_token,
            author.author_email, author.author_hash, author.author_username,
            author.author_id.bytes,
        )
        return self._write(sql, params, f"update author {author.author_id}") > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, author: Author) -> bool:
        """
        Delete an author by primary key. Fails with PersistenceError while
        tweets still reference the author.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM author WHERE author_id = %s;"
        deleted = self._write(sql, (author.author_id.bytes,), f"delete author {author.author_id}") > 0
        if deleted:
            logger.info(f"Deleted author {author.author_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_one(self, sql: str, params: tuple, action: str) -> Optional[Author]:
        rows = self._fetch(sql, params, action)
        return self._row_to_author(rows[0]) if rows else None

    @staticmethod
    def _row_to_author(row: tuple) -> Author:
        """Convert a database row tuple to an Author domain object."""
        try:
            return Author(
                author_id=row[0],
                author_avatar_url=row[1],
                author_activation_token=row[2],
                author_email=row[3],
                author_hash=row[4],
                author_username=row[5],
            )
        except ValidationError as e:
            logger.error(f"Corrupt author row: {e}")
            raise PersistenceError(f"Corrupt author row: {e}", e.field) from e
