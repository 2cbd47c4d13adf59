"""
Raw execution layer for query_hub.

Runs statements built by ``query_hub.sql`` through a caller-owned
``ExecutionHandle``.
"""

from .handle import ExecutionHandle, cursor_to_dicts
from .models import BulkInsertResult
from .raw import (
    bulk_insert_entities,
    raw_bulk_insert,
    raw_delete,
    raw_select,
    raw_update,
)

__all__ = [
    "ExecutionHandle",
    "cursor_to_dicts",
    "BulkInsertResult",
    "bulk_insert_entities",
    "raw_bulk_insert",
    "raw_delete",
    "raw_select",
    "raw_update",
]
