#!/usr/bin/env python3

"""Unified command-line interface for receiptsplit.

Usage:
    rs parse <pdf> [--json]
    rs split <pdf> --person NAME [--person NAME ...] [--assign IDX=NAME[,NAME]] [--even IDX] [--all-even]
    rs serve [--host] [--port]
"""

import argparse
import logging
from collections.abc import Callable, Sequence

from receiptsplit.receipt.formatter import DEFAULT_PAYER_ACCOUNT
from receiptsplit.runtime.logging import set_log_level


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split supermarket receipt PDFs between people",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <pdf>                Print the items and summary of a receipt
  split <pdf> --person NAME  Split the receipt between people
  serve [--host] [--port]    Start the receipt upload server

Item indexes are 0-based, as printed by "parse".
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse a receipt PDF")
    parse_parser.add_argument("pdf", help="Path to receipt PDF")
    parse_parser.add_argument("--json", action="store_true", help="Print the parsed receipt as JSON")

    split_parser = subparsers.add_parser("split", help="Split a receipt PDF between people")
    split_parser.add_argument("pdf", help="Path to receipt PDF")
    split_parser.add_argument("--person", action="append", help="Person sharing the receipt (repeatable)")
    split_parser.add_argument(
        "--assign",
        action="append",
        metavar="IDX=NAME[,NAME]",
        help="Give item IDX to the listed people (repeatable)",
    )
    split_parser.add_argument("--even", action="append", type=int, metavar="IDX", help="Split item IDX evenly")
    split_parser.add_argument("--all-even", action="store_true", help="Split every unassigned item evenly")
    split_parser.add_argument("--beancount", action="store_true", help="Also print a beancount transaction")
    split_parser.add_argument(
        "--payer",
        default=DEFAULT_PAYER_ACCOUNT,
        help=f"Account that paid the receipt (default: {DEFAULT_PAYER_ACCOUNT})",
    )
    split_parser.add_argument("--date", help="Transaction date, YYYY-MM-DD (default: today)")

    serve_parser = subparsers.add_parser("serve", help="Start receipt upload server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command == "parse":
        from receiptsplit.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "split":
        from receiptsplit.cli.receipt import cmd_split

        return _run_command(cmd_split, args)
    elif args.command == "serve":
        from receiptsplit.cli.receipt import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
