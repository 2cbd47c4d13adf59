"""
Configuration management for query_hub.

Environment-based configuration using Pydantic BaseSettings. Connection
parameters and pool tuning can also be loaded from a YAML document through
``load_database_config``.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

logger = structlog.get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def resolve_env_file(override: Optional[str] = None) -> Path:
    """
    Locate the ``.env`` file read by ``Settings``.

    QH_ENV_FILE (or ``override``) points elsewhere; relative paths are taken
    from the project root.
    """
    raw = override if override is not None else os.getenv("QH_ENV_FILE")
    if not raw:
        return PROJECT_ROOT / ".env"
    path = Path(raw).expanduser()
    return path if path.is_absolute() else PROJECT_ROOT / path


SUPPORTED_DRIVERS = ("mysql",)

# SQLAlchemy drivername per supported driver identifier
_SQLALCHEMY_DRIVERS = {"mysql": "mysql+pymysql"}


class ConfigurationError(Exception):
    """Raised when a database configuration document cannot be loaded."""


class DatabaseConfig(BaseModel):
    """
    Database connection parameters and pool tuning.

    YAML example::

        driver: mysql
        host: 127.0.0.1
        port: 3306
        user: root
        password:
        schema: mydbname
        flags:
          charset: utf8mb4
        max_open_conns: 10
    """

    driver: str = "mysql"
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    schema_name: str = Field(
        default="", validation_alias=AliasChoices("schema", "schema_name")
    )
    flags: Dict[str, str] = Field(default_factory=lambda: {"charset": "utf8mb4"})
    uri: Optional[str] = None

    max_idle_time_seconds: float = Field(default=0, ge=0)
    max_open_conns: int = Field(default=10, ge=1)
    max_idle_conns: int = Field(default=5, ge=0)
    conn_max_lifetime_seconds: float = Field(default=0, ge=0)

    @field_validator("password", mode="before")
    @classmethod
    def _none_password(cls, value: Optional[str]) -> str:
        # ``password:`` with no value parses to None in YAML
        return "" if value is None else value

    @field_validator("flags", mode="before")
    @classmethod
    def _stringify_flags(cls, value: Optional[Dict[str, object]]) -> Dict[str, str]:
        if value is None:
            return {}
        return {str(k): str(v) for k, v in value.items()}

    def get_connection_url(self) -> URL:
        """
        Build the SQLAlchemy URL for this configuration.

        ``uri`` takes precedence over the individual components. Driver
        support is checked by the connector, not here, so an unsupported
        driver still renders a URL for diagnostics.
        """
        if self.uri:
            return make_url(self.uri)
        return URL.create(
            drivername=_SQLALCHEMY_DRIVERS.get(self.driver, self.driver),
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.schema_name or None,
            query=dict(self.flags),
        )

    def get_connection_string(self, hide_password: bool = True) -> str:
        """Render the connection URL, masking the password by default."""
        return self.get_connection_url().render_as_string(
            hide_password=hide_password
        )

    @property
    def pool_recycle_seconds(self) -> int:
        """
        Seconds after which pooled connections are recycled, -1 for never.

        SQLAlchemy has a single recycle knob; the shorter of the idle and
        lifetime limits wins.
        """
        limits = [
            v
            for v in (self.max_idle_time_seconds, self.conn_max_lifetime_seconds)
            if v > 0
        ]
        return int(min(limits)) if limits else -1


class Settings(BaseSettings):
    """
    Settings read from QH_* environment variables and the ``.env`` file.

    QH_DATABASE_HOST sets ``database_host``, QH_MAX_OPEN_CONNS sets
    ``max_open_conns`` and so on. LOG_LEVEL is read without the prefix.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root log level name",
    )

    database_driver: str = Field(default="mysql", description="Database driver")
    database_host: str = Field(default="localhost", description="Database host")
    database_port: int = Field(default=3306, description="Database port")
    database_user: str = Field(default="root", description="Database user")
    database_password: str = Field(default="", description="Database password")
    database_schema: str = Field(default="", description="Database (schema) name")
    database_flags: Dict[str, str] = Field(
        default_factory=lambda: {"charset": "utf8mb4"},
        description="Extra driver flags, appended to the connection URL query",
    )
    database_uri: Optional[str] = Field(
        default=None,
        description="Complete database URI (overrides the components above)",
        validation_alias=AliasChoices(
            "QH_DATABASE__URI", "QH_DATABASE_URI", "database_uri"
        ),
    )

    # Pool tuning
    max_idle_time_seconds: float = Field(
        default=0, description="Recycle connections idle longer than this (0 = off)"
    )
    max_open_conns: int = Field(default=10, description="Maximum open connections")
    max_idle_conns: int = Field(default=5, description="Connections kept in the pool")
    conn_max_lifetime_seconds: float = Field(
        default=0, description="Maximum connection lifetime (0 = unlimited)"
    )

    # Observability
    slow_query_threshold_ms: float = Field(
        default=0,
        description="Log statements slower than this many milliseconds (0 = off)",
    )

    @property
    def database(self) -> DatabaseConfig:
        """Connection and pool settings as a ``DatabaseConfig``."""
        return DatabaseConfig(
            driver=self.database_driver,
            host=self.database_host,
            port=self.database_port,
            user=self.database_user,
            password=self.database_password,
            schema_name=self.database_schema,
            flags=self.database_flags,
            uri=self.database_uri,
            max_idle_time_seconds=self.max_idle_time_seconds,
            max_open_conns=self.max_open_conns,
            max_idle_conns=self.max_idle_conns,
            conn_max_lifetime_seconds=self.conn_max_lifetime_seconds,
        )

    model_config = SettingsConfigDict(
        env_prefix="QH_",
        env_file=str(resolve_env_file()),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, read once; ``get_settings.cache_clear()`` re-reads."""
    return Settings()


def _load_failed(reason: str, config_path: Path, message: str, **fields: Any):
    logger.error(
        "database_config.load_failed",
        reason=reason,
        config_path=str(config_path),
        **fields,
    )
    return ConfigurationError(message)


def load_database_config(path: Union[str, Path]) -> DatabaseConfig:
    """
    Read a ``DatabaseConfig`` from a YAML document.

    An empty document yields the defaults.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, is not
            a mapping, or fails validation
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise _load_failed(
            "missing", config_path, f"Database configuration not found: {config_path}"
        )

    try:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise _load_failed(
            "yaml", config_path, f"Invalid YAML in {config_path}: {e}", error=str(e)
        ) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise _load_failed(
            "shape",
            config_path,
            f"Database configuration must be a mapping, got {type(document).__name__}",
        )

    try:
        config = DatabaseConfig.model_validate(document)
    except ValidationError as e:
        raise _load_failed(
            "validation",
            config_path,
            f"Database configuration validation failed: {e}",
            errors=e.error_count(),
        ) from e

    logger.info(
        "database_config.loaded",
        config_path=str(config_path),
        driver=config.driver,
        url=config.get_connection_string(),
    )
    return config
