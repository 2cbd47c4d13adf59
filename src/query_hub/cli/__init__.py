"""Command-line interface for query_hub."""
