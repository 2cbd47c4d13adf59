"""
Entity classifier.

Groups a heterogeneous collection of tagged records by destination table and
turns each record into a row (column name -> value) ready for a bulk insert.
"""

from typing import Any, Dict, Iterable, List

from query_hub.utils.logging import get_logger

from .records import TaggedRecord, column_bindings

logger = get_logger(__name__)

Row = Dict[str, Any]


def record_to_row(record: TaggedRecord) -> Row:
    """
    Extract the persisted columns of one record.

    Returns:
        Row in binding order; empty if the record has no persisted fields
    """
    return {
        binding.column: getattr(record, binding.attribute)
        for binding in column_bindings(type(record))
    }


def classify_records(records: Iterable[TaggedRecord]) -> Dict[str, List[Row]]:
    """
    Group records into rows per destination table.

    Rows keep the encounter order of their records within a table. Records
    without any persisted field are skipped.

    Args:
        records: Objects implementing ``get_table_name()`` with column bindings

    Returns:
        Mapping of table name to its rows

    Raises:
        TypeError: If a record's type has no column bindings
    """
    grouped: Dict[str, List[Row]] = {}
    skipped = 0

    for record in records:
        row = record_to_row(record)
        if not row:
            skipped += 1
            continue
        grouped.setdefault(record.get_table_name(), []).append(row)

    if skipped:
        logger.debug("entities.classify.skipped_empty", skipped=skipped)

    return grouped
