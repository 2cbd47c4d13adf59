"""Connection and execution errors."""

from typing import Dict

from query_hub.sql.errors import QueryHubError


class UnknownDriverError(QueryHubError):
    """Raised when a configuration names a database driver we cannot open."""

    def __init__(self, driver: str, supported: tuple):
        self.driver = driver
        self.supported = supported
        super().__init__(
            f"unknown database driver {driver!r}; supported: {', '.join(supported)}"
        )


class ExecutionCancelledError(QueryHubError):
    """Raised when a handle was cancelled or its deadline passed before execution."""

    def __init__(self, reason: str, operation: str = ""):
        self.reason = reason
        self.operation = operation
        super().__init__(f"execution cancelled ({reason})")

    def to_dict(self) -> Dict[str, str]:
        """Convert to structured dict for logging."""
        return {
            "error_type": "ExecutionCancelledError",
            "reason": self.reason,
            "operation": self.operation,
        }
