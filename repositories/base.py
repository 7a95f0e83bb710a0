"""
repositories/base.py
--------------------
Shared plumbing for every repository: borrow a pooled connection (or join
the caller's transaction), run one statement, commit or roll back, log.
"""

from typing import Any, Callable, Optional, Sequence, TypeVar

from db.connection import dict_cursor, get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseRepository:
    """
    Base class for table repositories.

    Every helper takes an optional ``conn``. Without it the statement runs
    on a freshly borrowed connection and is committed on its own; with it
    the statement joins the caller's transaction and nothing is committed
    or released here.
    """

    def _run(self, sql: str, params: Sequence[Any], handle: Callable, conn=None, write: bool = False):
        own = conn is None
        if own:
            conn = get_connection()
        try:
            with dict_cursor(conn) as cur:
                cur.execute(sql, params)
                result = handle(cur)
            if own and write:
                conn.commit()
            return result
        except Exception as e:
            if own:
                conn.rollback()
            if write:
                logger.error(f"{type(self).__name__}: statement failed: {e}")
            raise
        finally:
            if own:
                release_connection(conn)

    def _fetch_all(self, sql: str, params: Sequence[Any], mapper: Callable[[dict], T], conn=None) -> list[T]:
        return self._run(sql, params, lambda cur: [mapper(r) for r in cur.fetchall()], conn)

    def _fetch_one(self, sql: str, params: Sequence[Any], mapper: Callable[[dict], T], conn=None) -> Optional[T]:
        def handle(cur):
            row = cur.fetchone()
            return mapper(row) if row else None
        return self._run(sql, params, handle, conn)

    def _fetch_value(self, sql: str, params: Sequence[Any], conn=None):
        """Return the first column of the first row, or None."""
        def handle(cur):
            row = cur.fetchone()
            return next(iter(row.values())) if row else None
        return self._run(sql, params, handle, conn)

    def _insert(self, sql: str, params: Sequence[Any], conn=None) -> Optional[int]:
        """Run an INSERT ... RETURNING id and return the id (None if nothing was inserted)."""
        def handle(cur):
            row = cur.fetchone()
            return row["id"] if row else None
        return self._run(sql, params, handle, conn, write=True)

    def _execute(self, sql: str, params: Sequence[Any], conn=None) -> int:
        """Run an UPDATE/DELETE and return the number of affected rows."""
        return self._run(sql, params, lambda cur: cur.rowcount, conn, write=True)
