"""
query_hub - Predicate-driven SQL construction and raw execution helpers.

Builds parameterized MySQL statements from composable predicate objects and
runs them through an explicit execution handle, mapping tagged records to
table rows for bulk inserts.
"""

__version__ = "0.1.0"
