"""Shared utilities for query_hub."""
