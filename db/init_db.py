"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Author table: one row per registered author; ids are raw 16-byte UUIDs
CREATE TABLE IF NOT EXISTS author (
    author_id               BYTEA PRIMARY KEY CHECK (octet_length(author_id) = 16),
    author_avatar_url       VARCHAR(255),
    author_activation_token CHAR(32),
    author_email            VARCHAR(128) UNIQUE NOT NULL,
    author_hash             CHAR(97) NOT NULL,
    author_username         VARCHAR(32) UNIQUE NOT NULL
);

-- Tweet table: short messages posted by an author
CREATE TABLE IF NOT EXISTS tweet (
    tweet_id                BYTEA PRIMARY KEY CHECK (octet_length(tweet_id) = 16),
    tweet_profile_id        BYTEA NOT NULL REFERENCES author(author_id),
    tweet_content           VARCHAR(140) NOT NULL,
    tweet_date              TIMESTAMP(6) NOT NULL
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_tweet_profile ON tweet(tweet_profile_id);
"""

DROP_SQL = """
DROP TABLE IF EXISTS tweet;
DROP TABLE IF EXISTS author;
"""


def _run_script(sql: str, conn=None) -> None:
    """Execute a DDL script on the given connection, or on a pooled one."""
    owned = conn is None
    if owned:
        conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owned:
            release_connection(conn)


def create_tables(conn=None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: Optional live connection; a pooled one is used when omitted.
    """
    try:
        _run_script(SCHEMA_SQL, conn)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


def drop_tables(conn=None) -> None:
    """Drop the tweet and author tables. Used to reset test databases."""
    try:
        _run_script(DROP_SQL, conn)
        logger.info("Database schema dropped.")
    except Exception as e:
        logger.error(f"Failed to drop schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
