"""Statement builders: SELECT/DELETE, INSERT and UPDATE."""

from .insert import build_bulk_insert
from .query import Action, build_argumentless_query, build_delete, build_select
from .update import build_update

__all__ = [
    "Action",
    "build_argumentless_query",
    "build_select",
    "build_delete",
    "build_bulk_insert",
    "build_update",
]
