"""
Positional placeholder utilities.

Statements are always built with qmark (``?``) placeholders. Drivers using the
``format``/``pyformat`` paramstyle (PyMySQL, mysqlclient) need them rewritten
to ``%s`` before execution.
"""

from typing import List

PLACEHOLDER = "?"

QMARK_STYLES = frozenset({"qmark"})
FORMAT_STYLES = frozenset({"format", "pyformat"})


def count_placeholders(fragment: str) -> int:
    """
    Count ``?`` placeholders in a fragment.

    Every ``?`` counts, including one inside a string literal; such a literal
    must be passed as an argument instead.
    """
    return fragment.count(PLACEHOLDER)


def placeholder_group(count: int) -> str:
    """
    Build a parenthesized placeholder tuple.

    Examples:
        >>> placeholder_group(3)
        '(?,?,?)'
    """
    return "(" + ",".join([PLACEHOLDER] * count) + ")"


def placeholder_groups(width: int, rows: int) -> str:
    """
    Build ``rows`` comma-separated placeholder tuples of ``width`` each.

    Examples:
        >>> placeholder_groups(2, 2)
        '(?,?),(?,?)'
    """
    groups: List[str] = [placeholder_group(width)] * rows
    return ",".join(groups)


def to_paramstyle(sql: str, paramstyle: str) -> str:
    """
    Rewrite a qmark statement for the given DB-API paramstyle.

    Args:
        sql: Statement built with ``?`` placeholders
        paramstyle: The driver module's ``paramstyle`` attribute

    Returns:
        Statement ready for ``cursor.execute``

    Raises:
        ValueError: For paramstyles that need named parameters

    Examples:
        >>> to_paramstyle("a LIKE ? AND b = '100%'", "format")
        "a LIKE %s AND b = '100%%'"
    """
    if paramstyle in QMARK_STYLES:
        return sql
    if paramstyle in FORMAT_STYLES:
        # Literal percent signs must survive the driver's % interpolation
        return sql.replace("%", "%%").replace(PLACEHOLDER, "%s")
    raise ValueError(f"Unsupported paramstyle: {paramstyle!r}")
