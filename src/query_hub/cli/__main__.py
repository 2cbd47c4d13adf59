"""
Command-line entry point for query_hub.

Usage:
    python -m query_hub.cli <command> [options]

Available commands:
    ping     - Connect with the configured database and run SELECT 1
    config   - Print the effective connection settings (password masked)
    render   - Build a SELECT statement and print its SQL and arguments
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from query_hub.config import (
    ConfigurationError,
    DatabaseConfig,
    get_settings,
    load_database_config,
)
from query_hub.sql import AssembledStatement, Limit, Offset, Order, Where, build_select
from query_hub.sql.core.placeholders import count_placeholders
from query_hub.sql.errors import QueryHubError


def _load_config(path: Optional[str]) -> DatabaseConfig:
    if path:
        return load_database_config(path)
    return get_settings().database


def _parse_value(raw: str) -> Any:
    """Interpret a CLI argument as JSON when possible, else keep the string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _build_render_statement(args: argparse.Namespace) -> AssembledStatement:
    values = [_parse_value(v) for v in args.arg]
    predicates: List[Any] = []
    for fragment in args.where:
        needed = count_placeholders(fragment)
        predicates.append(Where(fragment, *values[:needed]))
        values = values[needed:]
    if values:
        raise ValueError(f"{len(values)} --arg value(s) left without a placeholder")

    predicates.extend(Order(o) for o in args.order)
    if args.limit is not None:
        predicates.append(Limit(args.limit))
    if args.offset is not None:
        predicates.append(Offset(args.offset))

    columns = [c.strip() for c in args.columns.split(",") if c.strip()]
    return build_select(args.table, columns, predicates)


def _cmd_ping(args: argparse.Namespace) -> int:
    from query_hub.io.connectors.mysql_connector import Database

    db = Database(_load_config(args.config))
    try:
        ok = db.ping()
    finally:
        db.dispose()
    print("ok" if ok else "unexpected response")
    return 0 if ok else 1


def _cmd_config(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    payload = config.model_dump(exclude={"password", "uri"})
    payload["url"] = config.get_connection_string()
    payload["pool_recycle_seconds"] = config.pool_recycle_seconds
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    statement = _build_render_statement(args)
    print(
        json.dumps(
            {"sql": statement.sql, "args": list(statement.args)},
            ensure_ascii=False,
            default=str,
        )
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="query_hub.cli",
        description="query_hub CLI - statement rendering and connectivity checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check connectivity using QH_* environment settings
  python -m query_hub.cli ping

  # Check connectivity using a YAML config
  python -m query_hub.cli ping --config config/database.yml

  # Render a SELECT
  python -m query_hub.cli render --table users --columns id,name \\
      --where "age > ?" --arg 18 --order "name ASC" --limit 10
        """,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    ping_parser = subparsers.add_parser("ping", help="Run SELECT 1 against the database")
    ping_parser.add_argument("--config", help="YAML database configuration file")

    config_parser = subparsers.add_parser(
        "config", help="Print effective connection settings"
    )
    config_parser.add_argument("--config", help="YAML database configuration file")

    render_parser = subparsers.add_parser("render", help="Render a SELECT statement")
    render_parser.add_argument("--table", required=True, help="Table to select from")
    render_parser.add_argument(
        "--columns", default="", help="Comma-separated projection (default: *)"
    )
    render_parser.add_argument(
        "--where", action="append", default=[], help="WHERE fragment (repeatable)"
    )
    render_parser.add_argument(
        "--arg",
        action="append",
        default=[],
        help="Placeholder value, JSON-decoded when possible (repeatable)",
    )
    render_parser.add_argument(
        "--order", action="append", default=[], help="ORDER BY item (repeatable)"
    )
    render_parser.add_argument("--limit", type=int, default=None)
    render_parser.add_argument("--offset", type=int, default=None)

    args = parser.parse_args(argv)

    handlers = {
        "ping": _cmd_ping,
        "config": _cmd_config,
        "render": _cmd_render,
    }
    try:
        return handlers[args.command](args)
    except (QueryHubError, ConfigurationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
