"""Structured logging for query_hub.

All modules log through structlog and emit one JSON object per event, routed
through the stdlib ``logging`` root so handlers (and pytest's ``caplog``) see
every event. Events use dotted names such as ``query.slow`` or
``raw.bulk_insert.completed``.

Before rendering, every event passes the redaction step:

- values under credential-like keys (password, token, secret, api_key, and
  exact ``uri``/``dsn`` keys) are replaced with ``[REDACTED]``;
- passwords embedded in connection URLs (``scheme://user:pw@host``) are
  masked wherever they appear in string values;
- ``query`` values longer than ``QUERY_LOG_MAX_CHARS`` are truncated so a
  slow multi-row INSERT does not flood the log.

Environment:
- LOG_LEVEL: read through ``get_settings()``. Default: INFO
- LOG_TO_FILE: also write to a daily-rotated file (1, true, yes)
- LOG_FILE_DIR: directory for that file. Default: logs/

Usage:
    >>> from query_hub.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("raw.delete.executed", table="users", rows_affected=3)
"""

import logging
import os
import re
from datetime import date
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping, Optional

import structlog
from structlog.types import EventDict, Processor

from query_hub.config import get_settings

REDACTED_VALUE = "[REDACTED]"

QUERY_LOG_MAX_CHARS = 2000

_SENSITIVE_KEY = re.compile(
    r"(password|passwd|token|api_key|secret)|^(database_)?(uri|dsn)$",
    re.IGNORECASE,
)

# scheme://user:password@  ->  scheme://user:***@
_URL_CREDENTIALS = re.compile(r"(?P<head>[a-z][a-z0-9+.\-]*://[^:/@\s]+:)[^@\s]+@", re.I)

# Marks handlers installed by configure_logging so a reconfigure replaces them
_HANDLER_FLAG = "_query_hub_handler"


def is_sensitive_key(key: str) -> bool:
    return bool(_SENSITIVE_KEY.search(key))


def mask_url_credentials(text: str) -> str:
    """Hide the password part of any connection URL inside ``text``."""
    return _URL_CREDENTIALS.sub(r"\g<head>***@", text)


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return sanitize_for_logging(value)
    if isinstance(value, list):
        return [_redact(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_redact(v) for v in value)
    if isinstance(value, str):
        return mask_url_credentials(value)
    return value


def sanitize_for_logging(data: Mapping[str, Any]) -> dict:
    """Return a redacted copy of ``data``; nested mappings and lists included.

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "root"})
        {'password': '[REDACTED]', 'user': 'root'}
    """
    return {
        key: REDACTED_VALUE if is_sensitive_key(str(key)) else _redact(value)
        for key, value in data.items()
    }


def sanitization_processor(
    logger: Any, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """structlog processor applying ``sanitize_for_logging`` to each event."""
    return sanitize_for_logging(event_dict)


def truncate_query_processor(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    query = event_dict.get("query")
    if isinstance(query, str) and len(query) > QUERY_LOG_MAX_CHARS:
        event_dict["query"] = query[:QUERY_LOG_MAX_CHARS] + "..."
        event_dict["query_length"] = len(query)
    return event_dict


def resolve_log_level(level: Optional[str] = None) -> int:
    """Map a level name to its ``logging`` constant; unknown names give INFO.

    Without an explicit name the level comes from settings, or from the
    LOG_LEVEL variable when settings cannot be loaded.
    """
    if level is None:
        try:
            level = get_settings().LOG_LEVEL
        except Exception:
            level = os.getenv("LOG_LEVEL", "INFO")
    return getattr(logging, level.upper(), logging.INFO)


def file_logging_enabled() -> bool:
    return os.getenv("LOG_TO_FILE", "").strip().lower() in ("1", "true", "yes")


def log_file_path(directory: Optional[str] = None) -> Path:
    """Path of today's log file, ``queryhub-YYYYMMDD.log``; creates the directory."""
    log_dir = Path(directory or os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"queryhub-{date.today():%Y%m%d}.log"


def _build_handlers(level: int, to_file: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if to_file:
        handlers.append(
            TimedRotatingFileHandler(
                filename=str(log_file_path()),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _HANDLER_FLAG, True)
    return handlers


def configure_logging(
    level: Optional[str] = None, to_file: Optional[bool] = None
) -> None:
    """(Re)configure stdlib handlers and the structlog processor chain.

    Runs once at import; calling it again swaps the handlers it installed
    earlier and leaves foreign handlers alone.
    """
    resolved = resolve_log_level(level)
    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_FLAG, False)]:
        root.removeHandler(handler)
        handler.close()

    wants_file = file_logging_enabled() if to_file is None else to_file
    for handler in _build_handlers(resolved, wants_file):
        root.addHandler(handler)
    root.setLevel(resolved)

    processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        truncate_query_processor,
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(default=str),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Logger carrying ``kwargs`` on every event it emits.

    Example:
        >>> logger = bind_context(table="users", operation="raw_update")
        >>> logger.info("statement.built", args=2)
    """
    return structlog.get_logger().bind(**kwargs)
