"""
models/tweet.py
---------------
Domain model for a tweet: a short message posted by an author.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from models.validators import DateLike, UuidLike, validate_datetime, validate_text, validate_uuid
from utils.serialization import to_epoch_millis, uuid_to_str

CONTENT_MAX_LENGTH = 140

_VALIDATORS = {
    "tweet_id": lambda v: validate_uuid(v, "tweet_id"),
    "tweet_profile_id": lambda v: validate_uuid(v, "tweet_profile_id"),
    "tweet_content": lambda v: validate_text(v, "tweet_content", CONTENT_MAX_LENGTH),
    "tweet_date": lambda v: validate_datetime(v, "tweet_date"),
}


@dataclass
class Tweet:
    """
    Represents a single tweet.

    Every assignment, including the ones made by ``__init__``, runs through
    the field's validator, so an invalid value raises ValidationError and
    no half-built Tweet is ever returned.

    Attributes:
        tweet_id: Primary key. Cannot be reassigned once set.
        tweet_profile_id: Id of the author who posted the tweet.
        tweet_content: Message text, at most 140 characters.
        tweet_date: When the tweet was posted (naive UTC); None means now.
    """
    tweet_id: UUID
    tweet_profile_id: UUID
    tweet_content: str
    tweet_date: Optional[datetime] = None

    def __setattr__(self, name, value):
        if name == "tweet_id" and name in self.__dict__:
            raise AttributeError("tweet_id is immutable")
        validator = _VALIDATORS.get(name)
        if validator is not None:
            value = validator(value)
        super().__setattr__(name, value)

    @classmethod
    def new(cls, profile_id: UuidLike, content: str, date: DateLike = None) -> "Tweet":
        """Build a Tweet with a freshly generated random id."""
        return cls(uuid4(), profile_id, content, date)

    def to_dict(self) -> dict:
        """JSON-ready projection: ids as strings, date as epoch milliseconds."""
        return {
            "tweetId": uuid_to_str(self.tweet_id),
            "tweetProfileId": uuid_to_str(self.tweet_profile_id),
            "tweetContent": self.tweet_content,
            "tweetDate": to_epoch_millis(self.tweet_date),
        }

    def __str__(self) -> str:
        return f"{self.tweet_date:%Y-%m-%d %H:%M} | {self.tweet_content}"
