"""
SQL module for predicate-driven statement construction.

Builds parameterized MySQL statements (``?`` placeholders, backtick
identifiers) from composable predicates.
"""

from .assembler import AssembledStatement, assemble_clauses
from .core.identifier import is_column_name, quote_identifier, quote_identifiers
from .errors import (
    EmptyConditionError,
    EmptyInputError,
    InvalidColumnError,
    NoColumnsError,
    NoColumnsForUpdateError,
    PlaceholderMismatchError,
    QueryBuildError,
    QueryHubError,
    UnsupportedActionError,
)
from .helpers import (
    contains,
    ends_with,
    eq,
    find,
    find_in_set,
    gt,
    gte,
    lt,
    lte,
    not_eq,
    starts_with,
)
from .operations import (
    Action,
    build_argumentless_query,
    build_bulk_insert,
    build_delete,
    build_select,
    build_update,
)
from .predicates import (
    Group,
    Having,
    Join,
    JoinKind,
    Limit,
    Offset,
    Or,
    Order,
    Predicate,
    PredicateKind,
    Where,
    WhereIn,
    WhereNotIn,
    inner_join,
    left_join,
    natural_join,
    outer_join,
    right_join,
)

__all__ = [
    "AssembledStatement",
    "assemble_clauses",
    "quote_identifier",
    "quote_identifiers",
    "is_column_name",
    "QueryHubError",
    "QueryBuildError",
    "UnsupportedActionError",
    "PlaceholderMismatchError",
    "EmptyConditionError",
    "EmptyInputError",
    "InvalidColumnError",
    "NoColumnsError",
    "NoColumnsForUpdateError",
    "Action",
    "build_argumentless_query",
    "build_select",
    "build_delete",
    "build_bulk_insert",
    "build_update",
    "Predicate",
    "PredicateKind",
    "JoinKind",
    "Where",
    "Or",
    "WhereIn",
    "WhereNotIn",
    "Join",
    "Group",
    "Having",
    "Order",
    "Limit",
    "Offset",
    "inner_join",
    "outer_join",
    "natural_join",
    "left_join",
    "right_join",
    "contains",
    "find",
    "starts_with",
    "ends_with",
    "eq",
    "not_eq",
    "gt",
    "gte",
    "lt",
    "lte",
    "find_in_set",
]
