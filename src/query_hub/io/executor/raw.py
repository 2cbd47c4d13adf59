"""
Raw execution layer.

Builds INSERT/UPDATE/DELETE/SELECT statements from row maps and predicates
and runs them through an ``ExecutionHandle``. Statements are fully built and
validated before the handle is touched, so a build error never sends partial
SQL. Driver errors are returned to the caller unchanged; nothing is retried.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from query_hub.entities.classifier import classify_records
from query_hub.entities.records import TaggedRecord
from query_hub.sql.errors import EmptyInputError
from query_hub.sql.operations.insert import build_bulk_insert
from query_hub.sql.operations.query import build_delete, build_select
from query_hub.sql.operations.update import ColumnValues, build_update
from query_hub.sql.predicates import Predicate
from query_hub.utils.logging import get_logger

from .handle import ExecutionHandle
from .models import BulkInsertResult

logger = get_logger(__name__)


def raw_bulk_insert(
    handle: ExecutionHandle,
    table: str,
    rows: Sequence[Mapping[str, Any]],
    ignore: bool = False,
) -> int:
    """
    Insert ``rows`` into ``table`` with one multi-row statement.

    Args:
        handle: Execution handle
        table: Target table
        rows: Row maps; the first row fixes the column set
        ignore: Use ``INSERT IGNORE`` to skip duplicate-key rows

    Returns:
        Rows affected as reported by the driver

    Raises:
        EmptyInputError: If ``rows`` is empty
        NoColumnsError: If the first row is empty
    """
    statement = build_bulk_insert(table, rows, ignore=ignore)
    operation = "raw_bulk_insert_ignore" if ignore else "raw_bulk_insert"
    return handle.execute(
        statement.sql, statement.args, operation=operation, table=table
    )


def raw_update(
    handle: ExecutionHandle,
    table: str,
    values: ColumnValues,
    predicates: Iterable[Predicate] = (),
) -> int:
    """
    Update ``table`` setting ``values`` on the rows matched by ``predicates``.

    Raises:
        NoColumnsForUpdateError: If ``values`` is empty
        PlaceholderMismatchError: From clause assembly
    """
    statement = build_update(table, values, predicates)
    return handle.execute(
        statement.sql, statement.args, operation="raw_update", table=table
    )


def raw_delete(
    handle: ExecutionHandle, table: str, predicates: Iterable[Predicate] = ()
) -> int:
    """Delete the rows of ``table`` matched by ``predicates``."""
    statement = build_delete(table, predicates)
    return handle.execute(
        statement.sql, statement.args, operation="raw_delete", table=table
    )


def raw_select(
    handle: ExecutionHandle,
    table: str,
    columns: Optional[Sequence[str]] = None,
    predicates: Iterable[Predicate] = (),
) -> List[Dict[str, Any]]:
    """Select ``columns`` from ``table`` and return the rows as dicts."""
    statement = build_select(table, columns, predicates)
    return handle.query(
        statement.sql, statement.args, operation="raw_select", table=table
    )


def bulk_insert_entities(
    handle: ExecutionHandle,
    entities: Sequence[TaggedRecord],
    ignore: bool = False,
) -> BulkInsertResult:
    """
    Insert a mixed collection of tagged records, one statement per table.

    A failing table does not stop the others; its error is recorded in the
    result and logged. The tables are not inserted atomically: use a
    transaction handle for all-or-nothing behaviour.

    Args:
        handle: Execution handle
        entities: Records implementing ``get_table_name()``
        ignore: Use ``INSERT IGNORE``

    Returns:
        BulkInsertResult with total and per-table affected rows and errors

    Raises:
        EmptyInputError: If ``entities`` is empty
        TypeError: If a record type has no column bindings
    """
    if not entities:
        raise EmptyInputError("no entities to insert")

    result = BulkInsertResult()
    for table, rows in classify_records(entities).items():
        try:
            affected = raw_bulk_insert(handle, table, rows, ignore=ignore)
        except Exception as e:
            result.errors[table] = e
            logger.error(
                "raw.bulk_insert.table_failed",
                table=table,
                rows=len(rows),
                error=str(e),
                error_type=type(e).__name__,
            )
            continue
        result.tables[table] = affected
        result.rows_affected += affected

    logger.info(
        "raw.bulk_insert.completed",
        tables=len(result.tables) + len(result.errors),
        rows_affected=result.rows_affected,
        failed_tables=result.failed_tables,
    )
    return result
