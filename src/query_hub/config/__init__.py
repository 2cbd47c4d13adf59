"""Configuration management for query_hub.

Usage::

    from query_hub.config import get_settings
    settings = get_settings()
    url = settings.database.get_connection_string()
"""

from query_hub.config.settings import (
    ConfigurationError,
    DatabaseConfig,
    Settings,
    get_settings,
    load_database_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "Settings",
    "get_settings",
    "load_database_config",
]
