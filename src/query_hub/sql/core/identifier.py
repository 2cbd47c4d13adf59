"""
SQL identifier handling utilities.

Identifiers are quoted with MySQL backticks. Anything that already looks like
an SQL expression is passed through untouched so callers can hand in
``COUNT(*)`` or ``t.created_at DESC`` where a column name is expected.

Embedded backticks are not escaped: quoting here keeps reserved words and
dotted references usable, it is not an injection guard.
"""

from typing import Iterable, List

DELIMITER = "`"

# Presence of any of these marks the input as a raw SQL fragment
EXPRESSION_CHARS = frozenset("` (:+-^='\"*/%")


def is_expression(name: str) -> bool:
    """Return True if ``name`` should be treated as raw SQL, not an identifier."""
    return any(ch in EXPRESSION_CHARS for ch in name)


def quote_identifier(name: str) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: Identifier, dotted reference or raw SQL expression

    Returns:
        Backtick-quoted identifier, or ``name`` unchanged for expressions

    Examples:
        >>> quote_identifier("users")
        '`users`'
        >>> quote_identifier("users.id")
        '`users`.`id`'
        >>> quote_identifier("COUNT(*)")
        'COUNT(*)'
    """
    if is_expression(name):
        return name

    if "." in name:
        return ".".join(quote_identifier(part) for part in name.split("."))

    return f"{DELIMITER}{name}{DELIMITER}"


def quote_identifiers(names: Iterable[str]) -> List[str]:
    """
    Quote each identifier in ``names``.

    Returns a new list; the input is left as it was.

    Examples:
        >>> quote_identifiers(["id", "u.name"])
        ['`id`', '`u`.`name`']
    """
    return [quote_identifier(name) for name in names]


def is_quoted(name: str) -> bool:
    """Return True for one name wrapped in backticks, with none inside."""
    return (
        len(name) > 2
        and name[0] == DELIMITER
        and name[-1] == DELIMITER
        and DELIMITER not in name[1:-1]
    )


def is_column_name(name: str) -> bool:
    """
    Return True if ``name`` can stand in a column list (INSERT, SET).

    Plain and dotted names qualify, as do names already wrapped in backticks.
    Anything ``quote_identifier`` would pass through as an expression does
    not, since it would be emitted unquoted.

    Examples:
        >>> is_column_name("first_name"), is_column_name("`first name`")
        (True, True)
        >>> is_column_name("first name")
        False
    """
    return bool(name) and (not is_expression(name) or is_quoted(name))
