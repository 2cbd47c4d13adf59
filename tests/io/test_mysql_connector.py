"""
Tests for the connection pool and the Database handle factory.
"""

import pytest
from sqlalchemy import create_engine
from unittest.mock import patch

from query_hub.config import DatabaseConfig
from query_hub.io.connectors.exceptions import UnknownDriverError
from query_hub.io.connectors.mysql_connector import Database, create_pool
from query_hub.io.executor import raw_bulk_insert, raw_select


@pytest.fixture
def sqlite_database():
    """Database backed by an in-memory SQLite engine (qmark paramstyle)."""
    engine = create_engine("sqlite://")
    db = Database(DatabaseConfig(), engine=engine, slow_query_threshold_ms=0)
    with db.handle() as handle:
        handle.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
    yield db
    db.dispose()


@pytest.mark.unit
class TestCreatePool:
    def test_unknown_driver(self):
        with pytest.raises(UnknownDriverError) as exc_info:
            create_pool(DatabaseConfig(driver="postgres"))
        assert exc_info.value.driver == "postgres"
        assert "mysql" in str(exc_info.value)

    @patch("query_hub.io.connectors.mysql_connector.create_engine")
    def test_pool_mapping(self, mock_create_engine):
        config = DatabaseConfig(
            max_open_conns=20,
            max_idle_conns=5,
            max_idle_time_seconds=600,
            conn_max_lifetime_seconds=1800,
        )
        create_pool(config)

        args, kwargs = mock_create_engine.call_args
        assert args[0].drivername == "mysql+pymysql"
        assert kwargs == {
            "pool_size": 5,
            "max_overflow": 15,
            "pool_recycle": 600,
            "pool_pre_ping": True,
        }

    @patch("query_hub.io.connectors.mysql_connector.create_engine")
    def test_idle_limit_capped_by_open_limit(self, mock_create_engine):
        create_pool(DatabaseConfig(max_open_conns=3, max_idle_conns=8))
        _, kwargs = mock_create_engine.call_args
        assert kwargs["pool_size"] == 3
        assert kwargs["max_overflow"] == 0
        assert kwargs["pool_recycle"] == -1

    @patch("query_hub.io.connectors.mysql_connector.create_engine")
    def test_zero_idle_keeps_one_pooled(self, mock_create_engine):
        create_pool(DatabaseConfig(max_open_conns=4, max_idle_conns=0))
        _, kwargs = mock_create_engine.call_args
        assert kwargs["pool_size"] == 1
        assert kwargs["max_overflow"] == 3


@pytest.mark.integration
class TestDatabase:
    def test_paramstyle_taken_from_engine(self, sqlite_database):
        assert sqlite_database.paramstyle == "qmark"

    def test_ping(self, sqlite_database):
        assert sqlite_database.ping() is True

    def test_handle_autocommits(self, sqlite_database):
        with sqlite_database.handle() as handle:
            assert handle.autocommit
            raw_bulk_insert(handle, "users", [{"id": 1, "name": "Ann"}])
        with sqlite_database.handle() as handle:
            assert raw_select(handle, "users", ["name"]) == [{"name": "Ann"}]

    def test_transaction_commits(self, sqlite_database):
        with sqlite_database.transaction() as handle:
            assert not handle.autocommit
            raw_bulk_insert(handle, "users", [{"id": 1, "name": "Ann"}])
        with sqlite_database.handle() as handle:
            assert len(raw_select(handle, "users")) == 1

    def test_transaction_rolls_back_on_error(self, sqlite_database):
        with pytest.raises(RuntimeError, match="abort"):
            with sqlite_database.transaction() as handle:
                raw_bulk_insert(handle, "users", [{"id": 1, "name": "Ann"}])
                raise RuntimeError("abort")
        with sqlite_database.handle() as handle:
            assert raw_select(handle, "users") == []

    def test_timeout_passed_to_handle(self, sqlite_database):
        with sqlite_database.handle(timeout=30) as handle:
            assert not handle.expired
