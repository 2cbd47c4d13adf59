"""Pytest configuration: SQLite-backed handles and the opt-in MySQL suite.

The MySQL suite talks to a real server configured through the QH_DATABASE_*
environment variables and only runs with RUN_MYSQL_TESTS=1 or
``--run-mysql-tests``.
"""

from __future__ import annotations

import os
import sqlite3
from typing import Generator

import pytest

from query_hub.config import get_settings
from query_hub.io.executor.handle import ExecutionHandle

MYSQL_OPTION = "run_mysql_tests"
MYSQL_MARK = "mysql_suite"
MYSQL_ENV = "RUN_MYSQL_TESTS"

SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    age INTEGER,
    role TEXT
);
CREATE TABLE orders (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    total REAL NOT NULL
);
"""


def _env_enabled(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the CLI flag that mirrors RUN_MYSQL_TESTS."""
    parser.addoption(
        "--run-mysql-tests",
        action="store_true",
        dest=MYSQL_OPTION,
        default=_env_enabled(MYSQL_ENV),
        help="Run tests against a live MySQL server "
        "(set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", f"{MYSQL_MARK}: requires a live MySQL server (opt-in)"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip the MySQL suite unless it was enabled."""
    if config.getoption(MYSQL_OPTION):
        return
    skip_mysql = pytest.mark.skip(
        reason="Set RUN_MYSQL_TESTS=1 or pass --run-mysql-tests to run the MySQL suite."
    )
    for item in items:
        if MYSQL_MARK in item.keywords:
            item.add_marker(skip_mysql)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory SQLite database with ``users`` and ``orders`` tables."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(SCHEMA)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def sqlite_handle(sqlite_conn: sqlite3.Connection) -> ExecutionHandle:
    """Autocommit handle over the in-memory database (qmark paramstyle)."""
    return ExecutionHandle(sqlite_conn, paramstyle="qmark", autocommit=True)
