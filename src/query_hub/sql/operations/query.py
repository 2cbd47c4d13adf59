"""
SELECT and DELETE statement builders.

Both statements take no values of their own; all arguments come from the
predicate set.
"""

from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from ..assembler import AssembledStatement, assemble_clauses
from ..core.identifier import quote_identifier, quote_identifiers
from ..errors import UnsupportedActionError
from ..predicates import Predicate


class Action(str, Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


ARGUMENTLESS_ACTIONS = frozenset({Action.SELECT, Action.DELETE})


def build_argumentless_query(
    action: Union[Action, str],
    table: str,
    columns: Optional[Sequence[str]],
    predicates: Iterable[Predicate] = (),
) -> AssembledStatement:
    """
    Build a SELECT or DELETE statement.

    Args:
        action: ``Action.SELECT`` or ``Action.DELETE`` (plain strings accepted)
        table: Target table; quoted unless it is an expression
        columns: Projection for SELECT, ignored for DELETE; empty selects ``*``
        predicates: Joins, conditions, grouping, ordering and bounds

    Returns:
        AssembledStatement

    Raises:
        UnsupportedActionError: For any other action
        PlaceholderMismatchError: From clause assembly

    Example:
        >>> from query_hub.sql.predicates import Where
        >>> build_argumentless_query("DELETE", "users", None, [Where("id = ?", 7)])
        AssembledStatement(sql='DELETE FROM `users`  WHERE (id = ?)', args=(7,))
    """
    try:
        resolved = Action(action)
    except ValueError:
        raise UnsupportedActionError(str(action)) from None
    if resolved not in ARGUMENTLESS_ACTIONS:
        raise UnsupportedActionError(resolved.value)

    query = resolved.value
    if resolved is Action.SELECT:
        projection = ",".join(quote_identifiers(columns or [])) or "*"
        query += " " + projection + " "

    query += " FROM " + quote_identifier(table)

    clauses = assemble_clauses(predicates)
    return AssembledStatement(query + clauses.sql, clauses.args)


def build_select(
    table: str,
    columns: Optional[Sequence[str]] = None,
    predicates: Iterable[Predicate] = (),
) -> AssembledStatement:
    """
    Build ``SELECT columns FROM table ...``.

    Example:
        >>> from query_hub.sql.predicates import Where, Order, Limit
        >>> build_select("users", ["id", "name"],
        ...              [Where("age > ?", 18), Order("name ASC"), Limit(10)])
        AssembledStatement(sql='SELECT `id`,`name`  FROM `users`  WHERE (age > ?) ORDER BY name ASC LIMIT ?', args=(18, 10))
    """
    return build_argumentless_query(Action.SELECT, table, columns, predicates)


def build_delete(
    table: str, predicates: Iterable[Predicate] = ()
) -> AssembledStatement:
    """Build ``DELETE FROM table ...``."""
    return build_argumentless_query(Action.DELETE, table, None, predicates)
