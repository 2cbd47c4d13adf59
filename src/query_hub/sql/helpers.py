"""
Shortcut constructors for common WHERE conditions.

Each helper quotes the column and returns a ``Where`` predicate bound to a
single argument.
"""

from typing import Any

from .core.identifier import quote_identifier
from .predicates import Where


def _compare(column: str, operator: str, value: Any) -> Where:
    return Where(f"{quote_identifier(column)} {operator} ?", value)


def contains(column: str, phrase: str) -> Where:
    """``column LIKE '%phrase%'``"""
    return _compare(column, "LIKE", f"%{phrase}%")


def find(column: str, pattern: str) -> Where:
    """``column LIKE pattern`` with the pattern used as given."""
    return _compare(column, "LIKE", pattern)


def starts_with(column: str, phrase: str) -> Where:
    """``column LIKE 'phrase%'``"""
    return _compare(column, "LIKE", f"{phrase}%")


def ends_with(column: str, phrase: str) -> Where:
    """``column LIKE '%phrase'``"""
    return _compare(column, "LIKE", f"%{phrase}")


def eq(column: str, value: Any) -> Where:
    return _compare(column, "=", value)


def not_eq(column: str, value: Any) -> Where:
    return _compare(column, "!=", value)


def gt(column: str, value: Any) -> Where:
    return _compare(column, ">", value)


def gte(column: str, value: Any) -> Where:
    return _compare(column, ">=", value)


def lt(column: str, value: Any) -> Where:
    return _compare(column, "<", value)


def lte(column: str, value: Any) -> Where:
    return _compare(column, "<=", value)


def find_in_set(column: str, value: Any) -> Where:
    """``FIND_IN_SET(?, column) > 0`` for comma-separated set columns."""
    return Where(f"FIND_IN_SET(?, {quote_identifier(column)}) > 0", value)
