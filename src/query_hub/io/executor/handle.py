"""
Execution handle.

Wraps a DB-API connection (direct, or one with an open transaction) together
with a cancellation context. The handle is owned by the caller and borrowed
by the raw execution layer for one call at a time; it must not be used from
two threads at once.
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Sequence

from query_hub.io.connectors.exceptions import ExecutionCancelledError
from query_hub.sql.core.placeholders import to_paramstyle
from query_hub.utils.logging import get_logger

logger = get_logger(__name__)


def cursor_to_dicts(cursor: Any) -> List[Dict[str, Any]]:
    """Convert a cursor's result set to a list of dicts."""
    desc = cursor.description
    if not desc:
        return []
    names = [d[0] for d in desc]
    return [dict(zip(names, row)) for row in cursor.fetchall()]


class ExecutionHandle:
    """
    A connection plus cancellation/deadline context.

    Args:
        connection: DB-API 2.0 connection
        paramstyle: The driver's paramstyle; statements are rewritten from
            ``?`` placeholders when it is ``format``/``pyformat``
        timeout: Seconds from creation after which execution is refused
        autocommit: Commit after every statement (no surrounding transaction)
        slow_query_threshold_ms: Log statements slower than this (0 = off)

    Example:
        >>> import sqlite3
        >>> handle = ExecutionHandle(sqlite3.connect(":memory:"))
        >>> handle.execute("CREATE TABLE t (a INTEGER)")
        -1
    """

    def __init__(
        self,
        connection: Any,
        *,
        paramstyle: str = "qmark",
        timeout: Optional[float] = None,
        autocommit: bool = False,
        slow_query_threshold_ms: float = 0,
    ):
        self.connection = connection
        self.paramstyle = paramstyle
        self.autocommit = autocommit
        self.slow_query_threshold_ms = slow_query_threshold_ms
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = False

    def cancel(self) -> None:
        """Refuse any further execution through this handle."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def _ensure_active(self, operation: str) -> None:
        if self._cancelled:
            raise ExecutionCancelledError("cancelled", operation)
        if self.expired:
            raise ExecutionCancelledError("deadline exceeded", operation)

    @contextmanager
    def _run(
        self, sql: str, args: Sequence[Any], operation: str, table: str
    ) -> Generator[Any, None, None]:
        self._ensure_active(operation)
        statement = to_paramstyle(sql, self.paramstyle)

        cursor = self.connection.cursor()
        start = time.perf_counter()
        try:
            cursor.execute(statement, tuple(args))
            yield cursor
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            cursor.close()
            self._log_if_slow(elapsed_ms, operation, table, sql)

    def _log_if_slow(
        self, elapsed_ms: float, operation: str, table: str, sql: str
    ) -> None:
        if self.slow_query_threshold_ms > 0 and elapsed_ms > self.slow_query_threshold_ms:
            logger.warning(
                "query.slow",
                took_ms=round(elapsed_ms, 3),
                operation=operation,
                table=table,
                query=sql,
            )

    def execute(
        self,
        sql: str,
        args: Sequence[Any] = (),
        *,
        operation: str = "execute",
        table: str = "",
    ) -> int:
        """
        Execute a statement and return the number of affected rows.

        Driver errors propagate unchanged.

        Raises:
            ExecutionCancelledError: If the handle is cancelled or expired
        """
        with self._run(sql, args, operation, table) as cursor:
            rowcount = cursor.rowcount
        if self.autocommit:
            self.connection.commit()
        return rowcount

    def query(
        self,
        sql: str,
        args: Sequence[Any] = (),
        *,
        operation: str = "query",
        table: str = "",
    ) -> List[Dict[str, Any]]:
        """Execute a statement and return its rows as dicts."""
        with self._run(sql, args, operation, table) as cursor:
            return cursor_to_dicts(cursor)
