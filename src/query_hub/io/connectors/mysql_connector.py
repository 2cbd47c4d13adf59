"""
MySQL connection pool and handle factory.

The pool is a SQLAlchemy engine over PyMySQL; handles wrap raw DB-API
connections checked out of it. There is no process-wide default database:
callers create a ``Database`` and pass its handles around explicitly.
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from query_hub.config.settings import SUPPORTED_DRIVERS, DatabaseConfig, get_settings
from query_hub.io.connectors.exceptions import UnknownDriverError
from query_hub.io.executor.handle import ExecutionHandle
from query_hub.utils.logging import get_logger

logger = get_logger(__name__)


def create_pool(config: DatabaseConfig) -> Engine:
    """
    Create a pooled engine for ``config``.

    Pool mapping: ``max_idle_conns`` connections stay pooled, up to
    ``max_open_conns`` may be open at once, and connections are recycled
    after the shorter of the idle/lifetime limits.

    Raises:
        UnknownDriverError: If the driver is not supported
    """
    if config.driver not in SUPPORTED_DRIVERS:
        raise UnknownDriverError(config.driver, SUPPORTED_DRIVERS)

    pool_size = max(1, min(config.max_idle_conns, config.max_open_conns))
    return create_engine(
        config.get_connection_url(),
        pool_size=pool_size,
        max_overflow=max(0, config.max_open_conns - pool_size),
        pool_recycle=config.pool_recycle_seconds,
        pool_pre_ping=True,
    )


class Database:
    """
    Connection pool plus handle factory.

    Usage::

        db = Database(DatabaseConfig(host="127.0.0.1", schema="app"))
        with db.transaction(timeout=5) as handle:
            raw_update(handle, "users", [("active", 0)], [Where("id = ?", 3)])
    """

    def __init__(
        self,
        config: Optional[DatabaseConfig] = None,
        *,
        slow_query_threshold_ms: Optional[float] = None,
        engine: Optional[Engine] = None,
    ):
        settings = get_settings()
        self.config = config or settings.database
        self.slow_query_threshold_ms = (
            settings.slow_query_threshold_ms
            if slow_query_threshold_ms is None
            else slow_query_threshold_ms
        )
        self.engine = engine or create_pool(self.config)
        self.paramstyle = self.engine.dialect.paramstyle

        logger.info(
            "database.pool.initialized",
            url=self.config.get_connection_string(),
            max_open_conns=self.config.max_open_conns,
            max_idle_conns=self.config.max_idle_conns,
        )

    def _make_handle(
        self, connection: Any, timeout: Optional[float], autocommit: bool
    ) -> ExecutionHandle:
        return ExecutionHandle(
            connection,
            paramstyle=self.paramstyle,
            timeout=timeout,
            autocommit=autocommit,
            slow_query_threshold_ms=self.slow_query_threshold_ms,
        )

    @contextmanager
    def handle(
        self, timeout: Optional[float] = None
    ) -> Generator[ExecutionHandle, None, None]:
        """
        Yield a handle that commits after every statement.

        The connection goes back to the pool on exit.
        """
        connection = self.engine.raw_connection()
        try:
            yield self._make_handle(connection, timeout, autocommit=True)
        finally:
            connection.close()

    @contextmanager
    def transaction(
        self, timeout: Optional[float] = None
    ) -> Generator[ExecutionHandle, None, None]:
        """
        Yield a handle inside one transaction.

        Commits when the block exits cleanly, rolls back on any exception and
        re-raises it.
        """
        connection = self.engine.raw_connection()
        try:
            yield self._make_handle(connection, timeout, autocommit=False)
            connection.commit()
        except Exception:
            connection.rollback()
            logger.warning("database.transaction.rolled_back")
            raise
        finally:
            connection.close()

    def ping(self) -> bool:
        """Run ``SELECT 1``; driver errors propagate."""
        with self.handle() as h:
            rows = h.query("SELECT 1 AS ok", operation="ping")
        return bool(rows) and rows[0].get("ok") == 1

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()
        logger.info("database.pool.closed")
