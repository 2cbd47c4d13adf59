"""
Clause assembler.

Linearizes a predicate set into the trailing part of a statement
(``JOIN ... WHERE ... GROUP BY ... HAVING ... ORDER BY ... LIMIT ... OFFSET``)
and the flattened argument list. Categories are always emitted in that order
whatever order the predicates arrive in; within a category, input order is
kept.
"""

from typing import Any, Iterable, List, NamedTuple, Sequence, Tuple

from .core.identifier import quote_identifier
from .core.placeholders import count_placeholders
from .errors import EmptyConditionError, PlaceholderMismatchError
from .predicates import CONDITION_KINDS, Predicate, PredicateKind


class AssembledStatement(NamedTuple):
    """SQL text plus arguments in placeholder order."""

    sql: str
    args: Tuple[Any, ...]


def check_placeholders(predicate: Predicate) -> None:
    """
    Verify a predicate's ``?`` count matches its argument count.

    Raises:
        PlaceholderMismatchError: On any mismatch
    """
    placeholders = count_placeholders(predicate.sql)
    if placeholders != len(predicate.args):
        raise PlaceholderMismatchError(
            predicate.sql, placeholders, len(predicate.args)
        )


def _by_kind(
    predicates: Sequence[Predicate], *kinds: PredicateKind
) -> List[Predicate]:
    return [p for p in predicates if p.kind in kinds]


def assemble_clauses(predicates: Iterable[Predicate]) -> AssembledStatement:
    """
    Build the clause text and arguments for a predicate set.

    Args:
        predicates: Predicates in any order

    Returns:
        AssembledStatement whose text starts with a space, ready to be
        appended after ``FROM table`` or a ``SET`` list. Empty input gives
        ``" "``.

    Raises:
        PlaceholderMismatchError: If a fragment's ``?`` count differs from its
            argument count
        EmptyConditionError: If a condition renders no SQL, such as ``Or()``
        TypeError: If an item is not a Predicate

    Example:
        >>> from query_hub.sql.predicates import Where, Limit
        >>> assemble_clauses([Limit(5), Where("age > ?", 18)])
        AssembledStatement(sql='  WHERE (age > ?) LIMIT ?', args=(18, 5))
    """
    items = list(predicates)
    for item in items:
        if not isinstance(item, Predicate):
            raise TypeError(f"Expected a Predicate, got {type(item).__name__}")

    query = " "
    args: List[Any] = []

    for join in _by_kind(items, PredicateKind.JOIN):
        check_placeholders(join)
        query += join.sql
        args.extend(join.args)

    conditions: List[str] = []
    for condition in _by_kind(items, *CONDITION_KINDS):
        check_placeholders(condition)
        if not condition.sql.strip():
            raise EmptyConditionError(condition)
        conditions.append(f"({condition.sql})")
        args.extend(condition.args)
    if conditions:
        query += " WHERE " + " AND ".join(conditions)

    groups: List[str] = []
    for group in _by_kind(items, PredicateKind.GROUP):
        check_placeholders(group)
        groups.append(quote_identifier(group.sql))
        args.extend(group.args)
    if groups:
        query += " GROUP BY " + ",".join(groups)

    havings: List[str] = []
    for having in _by_kind(items, PredicateKind.HAVING):
        check_placeholders(having)
        havings.append(having.sql)
        args.extend(having.args)
    if havings:
        query += " HAVING " + " AND ".join(havings)

    # Several Order predicates share one ORDER BY; repeating the keyword is
    # invalid SQL.
    orders: List[str] = []
    for order in _by_kind(items, PredicateKind.ORDER):
        check_placeholders(order)
        orders.append(order.sql)
        args.extend(order.args)
    if orders:
        query += " ORDER BY " + ", ".join(orders)

    # LIMIT must precede OFFSET; their single argument is self-generated.
    for bound in _by_kind(items, PredicateKind.LIMIT) + _by_kind(
        items, PredicateKind.OFFSET
    ):
        query += " " + bound.sql
        args.extend(bound.args)

    return AssembledStatement(query, tuple(args))
