"""Errors raised while building SQL statements.

Every error here is raised before a statement reaches the database, so a
failed build never leaves partial SQL behind.
"""

from typing import Any, Dict


class QueryHubError(Exception):
    """Base class for all query_hub errors."""


class QueryBuildError(QueryHubError):
    """Raised when a statement cannot be built from its inputs."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {"error_type": type(self).__name__, "message": str(self)}


class UnsupportedActionError(QueryBuildError):
    """Raised when a builder is asked for an action it does not produce."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"unsupported action for this builder: {action!r}")


class PlaceholderMismatchError(QueryBuildError):
    """Raised when a fragment's ``?`` count differs from its argument count."""

    def __init__(self, fragment: str, placeholders: int, arguments: int):
        self.fragment = fragment
        self.placeholders = placeholders
        self.arguments = arguments
        super().__init__(
            f"{fragment!r}: {placeholders} placeholder(s) `?` "
            f"but {arguments} argument(s)"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            fragment=self.fragment,
            placeholders=self.placeholders,
            arguments=self.arguments,
        )
        return data


class EmptyInputError(QueryBuildError):
    """Raised when there are no rows or entities to process."""


class NoColumnsError(QueryBuildError):
    """Raised when the first row of an insert batch has no columns."""


class NoColumnsForUpdateError(QueryBuildError):
    """Raised when an UPDATE is requested without any column to set."""


class EmptyConditionError(QueryBuildError):
    """Raised when a condition renders no SQL, e.g. an ``Or`` with no conditions."""

    def __init__(self, predicate: Any):
        self.predicate = predicate
        super().__init__(f"{predicate!r} renders an empty condition")


class InvalidColumnError(QueryBuildError):
    """Raised when a row key cannot be used as a plain column name."""

    def __init__(self, column: str, table: str):
        self.column = column
        self.table = table
        super().__init__(
            f"{column!r} is not a plain column name for {table!r}; "
            "wrap it in backticks to use it verbatim"
        )
