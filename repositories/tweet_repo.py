"""
repositories/tweet_repo.py
--------------------------
Data access layer for tweets.
All SQL queries related to the `tweet` table live here.
"""

from typing import Optional

from models.errors import ErrorKind, PersistenceError, ValidationError
from models.tweet import Tweet
from models.validators import UuidLike, escape_like, sanitize, validate_uuid
from repositories.base import BaseRepository
from utils.logger import get_logger
from utils.serialization import format_timestamp

logger = get_logger(__name__)

_COLUMNS = "tweet_id, tweet_profile_id, tweet_content, tweet_date"


class TweetRepository(BaseRepository):
    """Repository for CRUD operations on the tweet table."""

    # ── CREATE ────────────────────────────────────────────

    def insert(self, tweet: Tweet) -> None:
        """
        Insert a new tweet. Not idempotent: inserting the same id twice
        raises DuplicateRecordError.

        Raises:
            PersistenceError: On any database failure.
        """
        sql = f"INSERT INTO tweet ({_COLUMNS}) VALUES (%s, %s, %s, %s);"
        params = (
            tweet.tweet_id.bytes, tweet.tweet_profile_id.bytes,
            tweet.tweet_content, format_timestamp(tweet.tweet_date),
        )
        self._write(sql, params, f"insert tweet {tweet.tweet_id}")
        logger.info(f"Inserted tweet {tweet.tweet_id} for profile {tweet.tweet_profile_id}")

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, tweet_id: UuidLike) -> Optional[Tweet]:
        """
        Fetch a single tweet by primary key.

        Returns:
            The Tweet, or None if no row matches.
        """
        tweet_id = validate_uuid(tweet_id, "tweet_id")
        sql = f"SELECT {_COLUMNS} FROM tweet WHERE tweet_id = %s;"
        rows = self._fetch(sql, (tweet_id.bytes,), f"fetch tweet {tweet_id}")
        return self._row_to_tweet(rows[0]) if rows else None

    def get_by_profile_id(self, profile_id: UuidLike) -> list[Tweet]:
        """Fetch every tweet posted by one author. Empty list if none."""
        profile_id = validate_uuid(profile_id, "tweet_profile_id")
        sql = f"SELECT {_COLUMNS} FROM tweet WHERE tweet_profile_id = %s;"
        rows = self._fetch(sql, (profile_id.bytes,), f"fetch tweets for profile {profile_id}")
        return [self._row_to_tweet(r) for r in rows]

    def get_by_content(self, content: str) -> list[Tweet]:
        """
        Substring search on tweet content.

        ``%`` and ``_`` in the search text match only themselves.

        Raises:
            ValidationError(EMPTY_OR_UNSAFE_INPUT): If the text is blank after sanitizing.
        """
        content = sanitize(content or "")
        if not content:
            raise ValidationError(
                ErrorKind.EMPTY_OR_UNSAFE_INPUT, "tweet content is invalid", "tweet_content",
            )
        sql = f"SELECT {_COLUMNS} FROM tweet WHERE tweet_content LIKE %s ESCAPE '\\';"
        pattern = f"%{escape_like(content)}%"
        rows = self._fetch(sql, (pattern,), f"search tweets for {content!r}")
        return [self._row_to_tweet(r) for r in rows]

    def get_all(self) -> list[Tweet]:
        """Fetch every tweet in storage order."""
        sql = f"SELECT {_COLUMNS} FROM tweet;"
        rows = self._fetch(sql, None, "fetch all tweets")
        return [self._row_to_tweet(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, tweet: Tweet) -> bool:
        """
        Write every mutable column of an existing tweet.

        Returns:
            True if a row was updated, False if the id was not found.
        """
        sql = """
            UPDATE tweet
            SET tweet_profile_id = %s, tweet_content = %s, tweet_date = %s
            WHERE tweet_id = %s;
        """
        params = (
            tweet.tweet_profile_id.bytes, tweet.tweet_content,
            format_timestamp(tweet.tweet_date), tweet.tweet_id.bytes,
        )
        return self._write(sql, params, f"update tweet {tweet.tweet_id}") > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, tweet: Tweet) -> bool:
        """
        Delete a tweet by primary key.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM tweet WHERE tweet_id = %s;"
        deleted = self._write(sql, (tweet.tweet_id.bytes,), f"delete tweet {tweet.tweet_id}") > 0
        if deleted:
            logger.info(f"Deleted tweet {tweet.tweet_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_tweet(row: tuple) -> Tweet:
        """Convert a database row tuple to a Tweet domain object."""
        try:
            return Tweet(
                tweet_id=row[0],
                tweet_profile_id=row[1],
                tweet_content=row[2],
                tweet_date=row[3],
            )
        except ValidationError as e:
            logger.error(f"Corrupt tweet row: {e}")
            raise PersistenceError(f"Corrupt tweet row: {e}", e.field) from e
