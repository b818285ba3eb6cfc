"""
repositories/base.py
--------------------
Statement execution shared by every repository: commit-or-rollback for
writes, buffered fetches for reads, and translation of psycopg2 errors
into PersistenceError.
"""

from typing import Optional

import psycopg2
from psycopg2 import errors

from models.errors import DuplicateRecordError, PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """
    Holds the connection a repository runs its statements on.

    Args:
        conn: A live psycopg2 connection. Every statement, read or write,
            is committed on its own; the repository never opens or closes
            the connection.
    """

    def __init__(self, conn):
        self.conn = conn

    def _write(self, sql: str, params: tuple, action: str) -> int:
        """Execute and commit one statement; return the affected row count."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, params)
                count = cur.rowcount
            self.conn.commit()
            return count
        except errors.UniqueViolation as e:
            self._rollback(action)
            logger.error(f"Failed to {action}: duplicate record: {e}")
            raise DuplicateRecordError(f"Failed to {action}: duplicate record") from e
        except psycopg2.Error as e:
            self._rollback(action)
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(f"Failed to {action}: {e}") from e

    def _fetch(self, sql: str, params: Optional[tuple], action: str) -> list[tuple]:
        """
        Execute a query and buffer every row.

        The read's implicit transaction is committed before returning, so the
        connection is never left idle in transaction.
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, params)
                rows = cur.fetchall()
            self.conn.commit()
            return rows
        except psycopg2.Error as e:
            self._rollback(action)
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(f"Failed to {action}: {e}") from e

    def _rollback(self, action: str) -> None:
        """Roll back after a failed statement; a dead connection cannot roll back."""
        try:
            self.conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback after failed {action} also failed: {e}")
