"""
Round trip against a live MySQL server.

Opt-in: requires RUN_MYSQL_TESTS=1 (or --run-mysql-tests) and QH_DATABASE_*
settings pointing at a schema the test may create tables in.
"""

import uuid

import pytest

from query_hub.io.connectors.mysql_connector import Database
from query_hub.io.executor import raw_bulk_insert, raw_delete, raw_select, raw_update
from query_hub.sql import Limit, Offset, Order, WhereIn, eq, find_in_set

pytestmark = [pytest.mark.mysql_suite, pytest.mark.integration]


@pytest.fixture
def database():
    db = Database()
    yield db
    db.dispose()


@pytest.fixture
def table(database):
    name = f"qh_test_{uuid.uuid4().hex[:8]}"
    with database.handle() as handle:
        handle.execute(
            f"CREATE TABLE `{name}` ("
            "id INT PRIMARY KEY, name VARCHAR(64), tags VARCHAR(64))"
        )
    yield name
    with database.handle() as handle:
        handle.execute(f"DROP TABLE IF EXISTS `{name}`")


def test_ping(database):
    assert database.ping()


def test_round_trip(database, table):
    rows = [
        {"id": 1, "name": "Ann", "tags": "red,blue"},
        {"id": 2, "name": "Bo", "tags": "green"},
        {"id": 3, "name": "Cy", "tags": "blue"},
    ]
    with database.transaction(timeout=30) as handle:
        assert raw_bulk_insert(handle, table, rows) == 3
        # Duplicate key skipped
        assert raw_bulk_insert(handle, table, rows[:1], ignore=True) == 0

    with database.handle() as handle:
        blue = raw_select(
            handle, table, ["id"], [find_in_set("tags", "blue"), Order("id ASC")]
        )
        assert [r["id"] for r in blue] == [1, 3]

        page = raw_select(handle, table, ["name"], [Order("id"), Limit(1), Offset(1)])
        assert page == [{"name": "Bo"}]

        assert raw_update(handle, table, {"name": "Bea"}, [eq("id", 2)]) == 1
        assert raw_delete(handle, table, [WhereIn("id", 1, 3)]) == 2
        assert raw_select(handle, table) == [{"id": 2, "name": "Bea", "tags": "green"}]
