"""Tests for the Tweet model."""

import json
import uuid
from datetime import datetime, timedelta

import pytest

from models.errors import ErrorKind, ValidationError
from models.tweet import Tweet
from models.validators import utc_now
from utils.serialization import dumps

TWEET_ID = "0b9e3f4c-5a1b-4d2e-8f7a-1c2d3e4f5a6b"


def test_construct_normalizes_fields(profile_id):
    tweet = Tweet(TWEET_ID, str(profile_id), "  hello world  ", "2020-01-01 00:00:00")

    assert tweet.tweet_id == uuid.UUID(TWEET_ID)
    assert tweet.tweet_profile_id == profile_id
    assert tweet.tweet_content == "hello world"
    assert tweet.tweet_date == datetime(2020, 1, 1)


def test_missing_date_defaults_to_now(profile_id):
    tweet = Tweet(uuid.uuid4(), profile_id, "now-ish")
    assert abs(tweet.tweet_date - utc_now()) < timedelta(seconds=5)


def test_new_generates_random_id(profile_id):
    first = Tweet.new(profile_id, "one")
    second = Tweet.new(profile_id, "two")
    assert first.tweet_id.version == 4
    assert first.tweet_id != second.tweet_id


def test_first_invalid_field_aborts_construction(profile_id):
    with pytest.raises(ValidationError) as exc:
        Tweet("bad-id", profile_id, "a" * 141)
    assert exc.value.kind is ErrorKind.INVALID_IDENTIFIER

    with pytest.raises(ValidationError) as exc:
        Tweet(TWEET_ID, profile_id, "a" * 141)
    assert exc.value.kind is ErrorKind.VALUE_TOO_LONG


def test_content_at_limit(profile_id):
    assert len(Tweet(TWEET_ID, profile_id, "a" * 140).tweet_content) == 140


def test_setters_revalidate(profile_id):
    tweet = Tweet(TWEET_ID, profile_id, "original")

    tweet.tweet_content = "  edited  "
    assert tweet.tweet_content == "edited"

    with pytest.raises(ValidationError) as exc:
        tweet.tweet_content = "   "
    assert exc.value.kind is ErrorKind.EMPTY_OR_UNSAFE_INPUT
    assert tweet.tweet_content == "edited"

    with pytest.raises(ValidationError) as exc:
        tweet.tweet_date = "2019-02-30"
    assert exc.value.kind is ErrorKind.INVALID_DATE


def test_id_is_immutable(profile_id):
    tweet = Tweet(TWEET_ID, profile_id, "fixed id")
    with pytest.raises(AttributeError):
        tweet.tweet_id = uuid.uuid4()
    assert tweet.tweet_id == uuid.UUID(TWEET_ID)


def test_equality_compares_all_fields(profile_id):
    a = Tweet(TWEET_ID, profile_id, "same", "2020-01-01 00:00:00")
    b = Tweet(uuid.UUID(TWEET_ID).bytes, str(profile_id), "same", datetime(2020, 1, 1))
    assert a == b
    b.tweet_content = "different"
    assert a != b


def test_to_dict(profile_id):
    tweet = Tweet(TWEET_ID, profile_id, "serialize me", "2020-01-01T00:00:00")

    assert tweet.to_dict() == {
        "tweetId": TWEET_ID,
        "tweetProfileId": "3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        "tweetContent": "serialize me",
        "tweetDate": 1577836800000,
    }
    assert len(tweet.to_dict()["tweetProfileId"]) == 36


def test_dumps_is_valid_json(profile_id):
    tweet = Tweet(TWEET_ID, profile_id, "json", "2020-01-01 00:00:00.250000")
    assert json.loads(dumps(tweet))["tweetDate"] == 1577836800250
