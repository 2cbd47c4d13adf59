"""
Multi-row INSERT statement builder.

One statement carries every row of a batch:
``INSERT INTO `t` (`a`,`b`) VALUES (?,?),(?,?)`` with arguments flattened in
row-major order.
"""

from typing import Any, Dict, List, Mapping, Sequence

from ..assembler import AssembledStatement
from ..core.identifier import is_column_name, quote_identifier, quote_identifiers
from ..core.placeholders import placeholder_groups
from ..errors import EmptyInputError, InvalidColumnError, NoColumnsError

Row = Dict[str, Any]


def _column_order(table: str, rows: Sequence[Mapping[str, Any]]) -> List[str]:
    """Fix the batch's column set from the first row."""
    columns = list(rows[0].keys())
    if not columns:
        raise NoColumnsError("first row has no columns to insert")
    for column in columns:
        if not is_column_name(column):
            raise InvalidColumnError(column, table)
    return columns


def build_bulk_insert(
    table: str, rows: Sequence[Mapping[str, Any]], ignore: bool = False
) -> AssembledStatement:
    """
    Build a parameterized multi-row INSERT.

    The column set comes from the first row. Later rows are read through that
    set: a missing key binds ``None`` and keys absent from the first row are
    dropped.

    Args:
        table: Target table name
        rows: Row mappings, column name to value
        ignore: Emit ``INSERT IGNORE`` so duplicate-key rows are skipped

    Returns:
        AssembledStatement

    Raises:
        EmptyInputError: If ``rows`` is empty
        NoColumnsError: If the first row is empty
        InvalidColumnError: If a key of the first row is not a plain column
            name (for example ``"first name"``); backtick-quote such keys

    Example:
        >>> build_bulk_insert("users", [{"a": 1, "b": 2}, {"a": 3, "b": 4}])
        AssembledStatement(sql='INSERT INTO `users` (`a`,`b`) VALUES (?,?),(?,?)', args=(1, 2, 3, 4))
    """
    if not rows:
        raise EmptyInputError(f"no rows to insert into {table!r}")

    columns = _column_order(table, rows)

    args: List[Any] = []
    for row in rows:
        for column in columns:
            args.append(row.get(column))  # None if key missing

    verb = "INSERT IGNORE" if ignore else "INSERT INTO"
    col_list = ",".join(quote_identifiers(columns))
    values = placeholder_groups(len(columns), len(rows))

    sql = f"{verb} {quote_identifier(table)} ({col_list}) VALUES {values}"
    return AssembledStatement(sql, tuple(args))
