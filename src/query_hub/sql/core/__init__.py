"""Core SQL utilities package."""

from .identifier import quote_identifier, quote_identifiers
from .placeholders import count_placeholders, placeholder_group, to_paramstyle

__all__ = [
    "quote_identifier",
    "quote_identifiers",
    "count_placeholders",
    "placeholder_group",
    "to_paramstyle",
]
