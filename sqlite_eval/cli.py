"""CLI entry point: `sqlite-eval` / `python -m sqlite_eval`

Three subcommands:
    query   — Run SQL against a database and print every row
    info    — Show the database file name and buffer size
    serve   — Serve a database over HTTP
"""

import argparse
import json
import logging
import sys

from sqlite_eval import config
from sqlite_eval.connection import connect
from sqlite_eval.errors import EvalError
from sqlite_eval.results import ResultSet

log = logging.getLogger(__name__)


def _print_table(result: ResultSet) -> None:
    """Print rows as a fixed-width table, NULL shown as an empty cell."""
    if not result:
        print("(0 rows)")
        return
    columns = list(result.columns)
    cells = [["" if v.is_null else str(v.value) for v in row.values] for row in result]
    widths = [max(len(name), *(len(r[i]) for r in cells)) for i, name in enumerate(columns)]
    print("  ".join(f"{name:<{w}s}" for name, w in zip(columns, widths)))
    print("  ".join("-" * w for w in widths))
    for r in cells:
        print("  ".join(f"{c:<{w}s}" for c, w in zip(r, widths)))
    print(f"({len(result)} rows)")


def _cmd_query(args: argparse.Namespace) -> int:
    with connect(args.database, args.buffer_size, extensions=args.extension) as conn:
        result = conn.evaluate(args.sql)
    if args.format == "table":
        _print_table(result)
    else:
        for record in result.to_dicts():
            print(json.dumps(record))
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    with connect(args.database, args.buffer_size) as conn:
        print(json.dumps(conn.info()))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    db_path = args.db or config.DB_PATH
    if not db_path:
        print("No database given: pass --db or set SQLITE_EVAL_DB_PATH", file=sys.stderr)
        return 1
    config.DB_PATH = db_path
    uvicorn.run("sqlite_eval.server.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlite-eval",
        description="Run SQL against a read-only SQLite database",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", help="Subcommand")

    # ── query ─────────────────────────────────────────────────────
    query_parser = subparsers.add_parser("query", help="Run SQL and print every row")
    query_parser.add_argument("database", help="Path to the SQLite database file")
    query_parser.add_argument("sql", help="SQL text to evaluate")
    query_parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help=f"Rows per accumulation chunk (default: {config.DEFAULT_BUFFER_SIZE})",
    )
    query_parser.add_argument(
        "--extension",
        action="append",
        default=[],
        help="Load a SQLite extension before querying (repeatable)",
    )
    query_parser.add_argument(
        "--format",
        choices=["jsonl", "table"],
        default="jsonl",
        help="Output format: one JSON object per row (default) or a text table",
    )

    # ── info ──────────────────────────────────────────────────────
    info_parser = subparsers.add_parser("info", help="Show database file and buffer size")
    info_parser.add_argument("database", help="Path to the SQLite database file")
    info_parser.add_argument("--buffer-size", type=int, default=None, help="Buffer size to report")

    # ── serve ─────────────────────────────────────────────────────
    serve_parser = subparsers.add_parser("serve", help="Serve a database over HTTP")
    serve_parser.add_argument("--db", default=None, help="Database path (default: $SQLITE_EVAL_DB_PATH)")
    serve_parser.add_argument("--host", default=config.DEFAULT_HOST, help=f"Host (default: {config.DEFAULT_HOST})")
    serve_parser.add_argument(
        "--port", type=int, default=config.DEFAULT_PORT, help=f"Port (default: {config.DEFAULT_PORT})"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    handlers = {"query": _cmd_query, "info": _cmd_info, "serve": _cmd_serve}
    try:
        return handlers[args.command](args)
    except (EvalError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
