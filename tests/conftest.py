"""Pytest configuration and fixtures."""

import uuid
from unittest.mock import MagicMock

import pytest

# argon2i hash shaped like PHP's password_hash(PASSWORD_ARGON2I) output: 97 chars
VALID_HASH = "$argon2i$v=19$m=1024,t=384,p=2$" + "c2FsdHNhbHRzYWx0c2FsdA" + "$" + "h" * 43
ACTIVATION_TOKEN = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def valid_hash():
    return VALID_HASH


@pytest.fixture
def activation_token():
    return ACTIVATION_TOKEN


@pytest.fixture
def profile_id():
    return uuid.UUID("3f2504e0-4f89-11d3-9a0c-0305e82c3301")


@pytest.fixture
def conn():
    """A MagicMock standing in for a psycopg2 connection."""
    return MagicMock()


@pytest.fixture
def cursor(conn):
    """The cursor yielded by ``with conn.cursor() as cur``."""
    cur = conn.cursor.return_value.__enter__.return_value
    cur.rowcount = 1
    cur.fetchall.return_value = []
    return cur
