"""
Database connectors.

``Database`` lives in ``query_hub.io.connectors.mysql_connector``; only the
exceptions are re-exported here so the executor can import them without
pulling in the pool.
"""

from .exceptions import ExecutionCancelledError, UnknownDriverError

__all__ = [
    "ExecutionCancelledError",
    "UnknownDriverError",
]
