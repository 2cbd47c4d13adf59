"""UPDATE statement builder."""

from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from ..assembler import AssembledStatement, assemble_clauses
from ..core.identifier import is_column_name, quote_identifier
from ..errors import InvalidColumnError, NoColumnsForUpdateError
from ..predicates import Predicate

ColumnValues = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


def build_update(
    table: str,
    values: ColumnValues,
    predicates: Iterable[Predicate] = (),
) -> AssembledStatement:
    """
    Build ``UPDATE table SET col = ?,... [clauses]``.

    ``values`` is read in a single pass, so the SET list and its arguments
    always come out in the same order.

    Args:
        table: Target table name
        values: Ordered ``(column, value)`` pairs, or a mapping
        predicates: Conditions (and optionally ordering/limit) for the update

    Returns:
        AssembledStatement with SET values first, then clause arguments

    Raises:
        NoColumnsForUpdateError: If ``values`` is empty
        InvalidColumnError: If a column is not a plain column name
        PlaceholderMismatchError: From clause assembly

    Example:
        >>> from query_hub.sql.predicates import Where
        >>> build_update("users", [("name", "Ann")], [Where("id = ?", 3)])
        AssembledStatement(sql='UPDATE `users` SET `name` = ?  WHERE (id = ?)', args=('Ann', 3))
    """
    pairs = list(values.items()) if isinstance(values, Mapping) else list(values)
    if not pairs:
        raise NoColumnsForUpdateError(f"no columns to set on {table!r}")

    items: List[str] = []
    args: List[Any] = []
    for column, value in pairs:
        if not is_column_name(column):
            raise InvalidColumnError(column, table)
        items.append(f"{quote_identifier(column)} = ?")
        args.append(value)

    clauses = assemble_clauses(predicates)
    args.extend(clauses.args)

    sql = f"UPDATE {quote_identifier(table)} SET " + ",".join(items) + clauses.sql
    return AssembledStatement(sql, tuple(args))
