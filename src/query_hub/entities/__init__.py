"""Tagged records and their classification into per-table rows."""

from .classifier import classify_records, record_to_row
from .records import (
    EXCLUDED,
    ColumnBinding,
    TaggedRecord,
    column_bindings,
    db_column,
)

__all__ = [
    "EXCLUDED",
    "ColumnBinding",
    "TaggedRecord",
    "column_bindings",
    "db_column",
    "classify_records",
    "record_to_row",
]
