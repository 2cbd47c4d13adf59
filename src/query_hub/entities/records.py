"""
Tagged record contract.

A tagged record knows its destination table and exposes an ordered, static
list of column bindings (column name -> attribute). Dataclass records declare
columns with ``db_column``; the bindings are derived once per type and cached.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class User:
    ...     id: int = db_column("id")
    ...     name: str = db_column("name")
    ...     scratch: str = db_column(EXCLUDED, default="")
    ...     def get_table_name(self) -> str:
    ...         return "users"
    >>> column_bindings(User)
    (ColumnBinding(column='id', attribute='id'), ColumnBinding(column='name', attribute='name'))
"""

import dataclasses
from functools import lru_cache
from typing import Any, NamedTuple, Protocol, Tuple, runtime_checkable

# Field metadata key holding the column name
COLUMN_TAG = "db"

# Tag value that keeps a field out of the database
EXCLUDED = "-"

_MISSING: Any = dataclasses.MISSING


class ColumnBinding(NamedTuple):
    column: str
    attribute: str


@runtime_checkable
class TaggedRecord(Protocol):
    """Anything that can be persisted by the entity classifier."""

    def get_table_name(self) -> str:
        ...


def db_column(
    name: str, *, default: Any = _MISSING, default_factory: Any = _MISSING, **kwargs: Any
) -> Any:
    """
    Declare a dataclass field persisted to column ``name``.

    Pass ``EXCLUDED`` (or an empty string) to keep the field in memory only.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[COLUMN_TAG] = name
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs
    )


def is_persisted_tag(tag: Any) -> bool:
    return isinstance(tag, str) and tag not in ("", EXCLUDED)


@lru_cache(maxsize=None)
def _dataclass_bindings(record_type: type) -> Tuple[ColumnBinding, ...]:
    bindings = []
    for f in dataclasses.fields(record_type):
        tag = f.metadata.get(COLUMN_TAG)
        if is_persisted_tag(tag):
            bindings.append(ColumnBinding(tag, f.name))
    return tuple(bindings)


def column_bindings(record_type: type) -> Tuple[ColumnBinding, ...]:
    """
    Return the ordered column bindings of a record type.

    A type may define ``column_bindings()`` (a classmethod returning
    ``(column, attribute)`` pairs) to spell out its mapping; otherwise the
    bindings come from ``db_column`` metadata on its dataclass fields.

    Raises:
        TypeError: If the type is neither a dataclass nor defines bindings
    """
    explicit = getattr(record_type, "column_bindings", None)
    if callable(explicit):
        return tuple(
            ColumnBinding(column, attribute)
            for column, attribute in explicit()
            if is_persisted_tag(column)
        )

    if dataclasses.is_dataclass(record_type):
        return _dataclass_bindings(record_type)

    raise TypeError(
        f"{record_type.__name__} is not a dataclass and defines no column_bindings()"
    )
