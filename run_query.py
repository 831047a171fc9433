#!/usr/bin/env python3
"""Run one query, command or catalog action against a data store from the command line."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config import Config
from core.border import BorderStyle
from core.errors import DBeerError
from core.logger import init_logging
from core.query_engine import QueryEngine
from models.command import Action, Command


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "y", "on"):
        return True
    if lowered in ("0", "false", "no", "n", "off"):
        return False
    raise argparse.ArgumentTypeError(f"Expected a boolean value, got '{value}'.")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Execute a query against a database and write the result as a "
            "box-drawn table for the editor integration."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "-engine", "--engine",
        required=True,
        help="Database engine (sqlite, postgres, mysql, mongo, redis).",
    )
    parser.add_argument(
        "-conn-str", "--conn-str",
        dest="conn_str",
        default="",
        help="Connection string or URL for the engine.",
    )
    parser.add_argument(
        "-dbname", "--dbname",
        dest="db_name",
        default="",
        help="Database name (SQLite file path, Mongo database, MySQL schema).",
    )
    parser.add_argument(
        "-queries", "--queries",
        default="",
        help="Query text, Redis command, Mongo expression, or table name for table-info.",
    )
    parser.add_argument(
        "-border-style", "--border-style",
        dest="border_style",
        default=Config.BORDER_STYLE,
        help=f"Table border style 1-5 (default: {Config.BORDER_STYLE}).",
    )
    parser.add_argument(
        "-dest-folder", "--dest-folder",
        dest="dest_folder",
        default=Config.DEST_FOLDER,
        help=f"Folder receiving dbeer result files (default: {Config.DEST_FOLDER}).",
    )
    parser.add_argument(
        "-dbeer-log-file", "--dbeer-log-file",
        dest="dbeer_log_file",
        default=Config.LOG_FILE,
        help="Append-only log file.",
    )
    parser.add_argument(
        "-option", "--option",
        default=Action.RUN.value,
        help="Action to execute: 1:run/2:tables/3:table-info/4:ping (default: 1).",
    )
    parser.add_argument(
        "-header-style-link", "--header-style-link",
        dest="header_style_link",
        default=Config.HEADER_STYLE_LINK,
        help=f"Highlight group linked to header names (default: {Config.HEADER_STYLE_LINK}).",
    )
    parser.add_argument(
        "-log-debug", "--log-debug",
        dest="log_debug",
        type=_parse_bool,
        default=Config.LOG_DEBUG,
        help="Enable debug records in the log file (true/false).",
    )
    return parser.parse_args(argv)


def build_command(args: argparse.Namespace) -> Command:
    """
    Turn parsed arguments into the invocation value.

    Raises:
        ConfigurationError: for unknown border styles or options
    """
    return Command(
        engine=args.engine,
        conn_str=args.conn_str,
        db_name=args.db_name,
        queries=args.queries,
        border_style=BorderStyle.from_code(args.border_style),
        dest_folder=args.dest_folder,
        header_style_link=args.header_style_link,
        action=Action.from_code(args.option),
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logger = init_logging(args.dbeer_log_file, args.log_debug)
    logger.debug("Debug enabled!")

    try:
        command = build_command(args)
        QueryEngine(logger=logger).process(command)
    except DBeerError as exc:
        error_msg = f"[ERROR] {exc}"
        print(error_msg)
        logger.error(error_msg)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
