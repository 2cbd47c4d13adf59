"""
Predicate algebra.

A predicate is one SQL clause fragment plus its bound arguments. The set of
predicate classes is closed; each one carries a ``PredicateKind`` that the
clause assembler uses to place it in the statement.

Example:
    >>> from query_hub.sql.predicates import Where, WhereIn, Order, Limit
    >>> preds = [Where("age > ?", 18), WhereIn("role", "admin", "owner"),
    ...          Order("name ASC"), Limit(10)]
    >>> WhereIn("role", "admin", "owner").sql
    '`role` IN (?,?)'
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Tuple, Union

from .core.identifier import quote_identifier
from .core.placeholders import placeholder_group


class PredicateKind(str, Enum):
    """Category of a predicate; decides where the assembler emits it."""

    JOIN = "join"
    WHERE = "where"
    OR = "or"
    WHERE_IN = "where in"
    WHERE_NOT_IN = "where not in"
    GROUP = "group"
    HAVING = "having"
    ORDER = "order"
    LIMIT = "limit"
    OFFSET = "offset"


# Kinds that end up AND-joined inside the WHERE clause
CONDITION_KINDS = frozenset(
    {
        PredicateKind.WHERE,
        PredicateKind.OR,
        PredicateKind.WHERE_IN,
        PredicateKind.WHERE_NOT_IN,
    }
)


class JoinKind(str, Enum):
    INNER = "INNER"
    OUTER = "OUTER"
    NATURAL = "NATURAL"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Predicate(ABC):
    """Base class: a kind, a rendered SQL fragment and its arguments."""

    kind: ClassVar[PredicateKind]

    @property
    @abstractmethod
    def sql(self) -> str:
        """Rendered SQL fragment."""

    @property
    @abstractmethod
    def args(self) -> Tuple[Any, ...]:
        """Arguments bound to the fragment's placeholders, in order."""

    def render(self) -> Tuple[str, Tuple[Any, ...]]:
        return self.sql, self.args

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Predicate):
            return NotImplemented
        return (self.kind, self.sql, self.args) == (other.kind, other.sql, other.args)

    def __hash__(self) -> int:
        return hash((self.kind, self.sql))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sql!r}, args={self.args!r})"


class _Fragment(Predicate):
    """Caller-supplied SQL fragment rendered verbatim."""

    def __init__(self, fragment: str, *args: Any):
        if not isinstance(fragment, str):
            raise TypeError(
                f"{type(self).__name__} fragment must be str, "
                f"got {type(fragment).__name__}"
            )
        self._fragment = fragment
        self._args = tuple(args)

    @property
    def sql(self) -> str:
        return self._fragment

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args


class Where(_Fragment):
    kind = PredicateKind.WHERE


class Group(_Fragment):
    """GROUP BY item; the assembler quotes it like an identifier."""

    kind = PredicateKind.GROUP


class Having(_Fragment):
    kind = PredicateKind.HAVING


class Order(_Fragment):
    kind = PredicateKind.ORDER


class Or(Predicate):
    """
    Disjunction of conditions.

    ``Or(Where("a = ?", 1), WhereIn("b", 2, 3))`` renders
    ``a = ? OR `b` IN (?,?)``. Children that are not conditions (joins,
    orders, limits) and conditions rendering no SQL are ignored; when nothing
    is left the fragment is empty and the assembler rejects it.
    ``Or("a = ? OR b = ?", 1, 2)`` keeps a raw fragment as-is.
    """

    kind = PredicateKind.OR

    def __init__(self, *items: Union[Predicate, str, Any]):
        if items and isinstance(items[0], str):
            self.predicates: Tuple[Predicate, ...] = ()
            self._sql = items[0]
            self._args = tuple(items[1:])
            return

        for item in items:
            if not isinstance(item, Predicate):
                raise TypeError(
                    f"Or() takes predicates or a fragment, got {type(item).__name__}"
                )

        self.predicates = tuple(
            p for p in items if p.kind in CONDITION_KINDS and p.sql.strip()
        )
        self._sql = " OR ".join(p.sql for p in self.predicates)
        args: list = []
        for p in self.predicates:
            args.extend(p.args)
        self._args = tuple(args)

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args


class WhereIn(Predicate):
    """
    ``column IN (?,...)`` sized to the argument count.

    With no arguments this renders the literal ``1``, a no-op filter that
    matches every row.
    """

    kind = PredicateKind.WHERE_IN
    operator: ClassVar[str] = "IN"

    def __init__(self, column: str, *args: Any):
        self.column = column
        self._args = tuple(args)

    @property
    def sql(self) -> str:
        if not self._args:
            return "1"
        return (
            f"{quote_identifier(self.column)} {self.operator} "
            f"{placeholder_group(len(self._args))}"
        )

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args


class WhereNotIn(WhereIn):
    """``column NOT IN (?,...)``; no arguments renders ``1``."""

    kind = PredicateKind.WHERE_NOT_IN
    operator = "NOT IN"


class Join(Predicate):
    """``{KIND} JOIN table [ON condition]`` with optional bound arguments."""

    kind = PredicateKind.JOIN

    def __init__(
        self, join_kind: Union[JoinKind, str], table: str, on: str = "", *args: Any
    ):
        self.join_kind = JoinKind(join_kind.upper())
        self.table = table
        self.on = on
        self._args = tuple(args)

    @property
    def sql(self) -> str:
        on = f" ON {self.on}" if self.on else ""
        return f" {self.join_kind.value} JOIN {self.table}{on} "

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args


class _Bound(Predicate):
    """Single non-negative integer bound to one placeholder."""

    keyword: ClassVar[str]

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(
                f"{self.keyword} must be an int, got {type(value).__name__}"
            )
        if value < 0:
            raise ValueError(f"{self.keyword} must be non-negative, got {value}")
        self.value = value

    @property
    def sql(self) -> str:
        return f"{self.keyword} ?"

    @property
    def args(self) -> Tuple[Any, ...]:
        return (self.value,)


class Limit(_Bound):
    kind = PredicateKind.LIMIT
    keyword = "LIMIT"


class Offset(_Bound):
    kind = PredicateKind.OFFSET
    keyword = "OFFSET"


def inner_join(table: str, on: str = "", *args: Any) -> Join:
    return Join(JoinKind.INNER, table, on, *args)


def outer_join(table: str, on: str = "", *args: Any) -> Join:
    return Join(JoinKind.OUTER, table, on, *args)


def natural_join(table: str, on: str = "", *args: Any) -> Join:
    return Join(JoinKind.NATURAL, table, on, *args)


def left_join(table: str, on: str = "", *args: Any) -> Join:
    return Join(JoinKind.LEFT, table, on, *args)


def right_join(table: str, on: str = "", *args: Any) -> Join:
    return Join(JoinKind.RIGHT, table, on, *args)
