"""
Round-trip tests against a real PostgreSQL server.

Set TEST_DATABASE_URL to a disposable database to run them; the tables
are dropped and recreated around every test.
"""

import os
import uuid
from datetime import datetime

import psycopg2
import pytest

from db.init_db import create_tables, drop_tables
from models.author import Author
from models.errors import DuplicateRecordError
from models.tweet import Tweet
from repositories.author_repo import AuthorRepository
from repositories.tweet_repo import TweetRepository

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture
def pg_conn():
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    try:
        conn = psycopg2.connect(TEST_DATABASE_URL)
    except psycopg2.OperationalError as e:
        pytest.skip(f"PostgreSQL server not available: {e}")
    drop_tables(conn)
    create_tables(conn)
    yield conn
    conn.rollback()
    drop_tables(conn)
    conn.close()


@pytest.fixture
def author(pg_conn, valid_hash, activation_token):
    author = Author.new("etollefson@cnm.edu", valid_hash, "erica", activation_token=activation_token)
    AuthorRepository(pg_conn).insert(author)
    return author


@pytest.fixture
def tweets(pg_conn):
    return TweetRepository(pg_conn)


def test_author_round_trip(pg_conn, author):
    repo = AuthorRepository(pg_conn)
    assert repo.get_by_id(author.author_id) == author
    assert repo.get_by_email("etollefson@cnm.edu") == author
    assert repo.get_by_username("erica") == author
    assert repo.get_by_activation_token(author.author_activation_token) == author


def test_author_duplicate_username(pg_conn, author, valid_hash):
    clash = Author.new("other@cnm.edu", valid_hash, "erica")
    with pytest.raises(DuplicateRecordError):
        AuthorRepository(pg_conn).insert(clash)


def test_tweet_round_trip(tweets, author):
    tweet = Tweet.new(author.author_id, "hello world", "2020-01-01 12:34:56.789012")
    tweets.insert(tweet)

    found = tweets.get_by_id(tweet.tweet_id)

    assert found == tweet
    assert found.tweet_date == datetime(2020, 1, 1, 12, 34, 56, 789012)


def test_duplicate_tweet_id(tweets, author):
    tweet = Tweet.new(author.author_id, "once")
    tweets.insert(tweet)
    with pytest.raises(DuplicateRecordError):
        tweets.insert(tweet)


def test_update_then_read(tweets, author):
    tweet = Tweet.new(author.author_id, "draft")
    tweets.insert(tweet)

    tweet.tweet_content = "final"
    assert tweets.update(tweet) is True
    assert tweets.get_by_id(tweet.tweet_id).tweet_content == "final"


def test_delete_then_not_found(tweets, author):
    tweet = Tweet.new(author.author_id, "short lived")
    tweets.insert(tweet)

    assert tweets.delete(tweet) is True
    assert tweets.get_by_id(tweet.tweet_id) is None
    assert tweets.delete(tweet) is False


def test_get_by_profile_id(tweets, author):
    first = Tweet.new(author.author_id, "first")
    second = Tweet.new(author.author_id, "second")
    tweets.insert(first)
    tweets.insert(second)

    found = tweets.get_by_profile_id(author.author_id)

    assert sorted(t.tweet_content for t in found) == ["first", "second"]
    assert tweets.get_by_profile_id(uuid.uuid4()) == []


def test_content_search_matches_wildcards_literally(tweets, author):
    literal = Tweet.new(author.author_id, "today only: 50%_off everything")
    lookalike = Tweet.new(author.author_id, "500 offers inside")
    tweets.insert(literal)
    tweets.insert(lookalike)

    assert tweets.get_by_content("50%_off") == [literal]
    assert len(tweets.get_by_content("off")) == 2


def test_get_all(tweets, author):
    assert tweets.get_all() == []
    tweet = Tweet.new(author.author_id, "only one")
    tweets.insert(tweet)
    assert tweets.get_all() == [tweet]
