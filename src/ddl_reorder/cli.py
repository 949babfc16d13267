"""
DDL Reorder - Command Line

Usage:
    ddl-reorder -i schema.sql [-o output.sql]
    python -m ddl_reorder -i schema.sql --keep-preamble -v

Exit code 0 on success, 1 on any error (missing input, unreadable input,
unwritable output, invalid configuration, cyclic foreign keys, references
to tables missing from the file).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_config
from .exceptions import DDLReorderError
from .pipeline import process_sql
from .sorter import RootOrder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddl-reorder",
        description="Reorder CREATE TABLE statements so referenced tables come first.",
    )
    parser.add_argument("-i", "--input", help="Input SQL file (required)")
    parser.add_argument("-o", "--output", help="Output SQL file (default: output.sql)")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument(
        "--keep-preamble",
        action="store_true",
        default=None,
        help="Keep lines that appear before the first CREATE TABLE",
    )
    parser.add_argument(
        "--inline-references",
        action="store_true",
        default=None,
        help="Also treat column-level REFERENCES clauses as foreign keys",
    )
    parser.add_argument(
        "--allow-self-references",
        action="store_true",
        default=None,
        help="Let a table reference itself instead of failing as a cycle",
    )
    parser.add_argument(
        "--allow-external-references",
        action="store_true",
        default=None,
        help="Skip, instead of fail on, foreign keys to tables not in the file",
    )
    parser.add_argument(
        "--root-order",
        choices=[order.value for order in RootOrder],
        help="Order of tables with no pending dependencies (default: appearance)",
    )
    parser.add_argument("--encoding", help="File encoding (default: utf-8)")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def _configure_logging(args: argparse.Namespace, default_level: str) -> None:
    if args.quiet:
        level = "ERROR"
    elif args.verbose >= 2:
        level = "DEBUG"
    elif args.verbose == 1:
        level = "INFO"
    else:
        level = default_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input:
        print("Error: specify the input SQL file with -i/--input", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config(args.config).merged(
            output_path=args.output,
            encoding=args.encoding,
            keep_preamble=args.keep_preamble,
            inline_references=args.inline_references,
            allow_self_references=args.allow_self_references,
            allow_external_references=args.allow_external_references,
            root_order=args.root_order,
        )
        _configure_logging(args, config.log_level)
        result = process_sql(args.input, config=config)
    except DDLReorderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {result.tables_written} tables in dependency order to {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
