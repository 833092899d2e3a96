# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the TinyScan command-line interface."""

import argparse
import sys
from pathlib import Path

from tinyscan.config import ConfigError, ScanConfig, find_config, load_config
from tinyscan.scanner import (
    ReportError,
    ScanError,
    Token,
    line_and_column,
    render_error_json,
    render_json,
    render_text,
    tokenize,
    write_report,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the TinyScan CLI."""
    parser = argparse.ArgumentParser(
        prog="tinyscan",
        description="TinyScan: lexical scanner for the TINY language",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # scan subcommand
    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a source file and write its token report",
        description="Scan a TINY source file and write one '<value> , <KIND>' line per token.",
    )
    scan_parser.add_argument("source", help="Source file to scan ('-' reads standard input)")
    scan_parser.add_argument(
        "-o",
        "--output",
        help="File to write the report to (default: standard output)",
    )
    scan_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=None,
        help="Report format (default: from the config file, else text)",
    )
    scan_parser.add_argument("--config", help="Path to a config file (default: ./.tinyscan.yaml if present)")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that a source file scans without errors",
        description="Scan a TINY source file and report whether it is lexically valid.",
    )
    check_parser.add_argument("source", help="Source file to check ('-' reads standard input)")
    check_parser.add_argument("--config", help="Path to a config file (default: ./.tinyscan.yaml if present)")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_STDIN_MARKER = "-"


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "scan":
        return _cmd_scan(args)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    """Handle the scan subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1

    text = _read_source(args.source, config.encoding)
    if text is None:
        return 1

    report_format = args.format or config.report_format
    label = _source_label(args.source)

    try:
        tokens = tokenize(text)
    except ScanError as exc:
        _print_scan_error(exc, text, label)
        if report_format == "json":
            _emit(render_error_json(exc, label), args.output, config.encoding)
        return 1

    if report_format == "json":
        report = render_json(tokens, label)
    else:
        report = render_text(tokens)

    return 0 if _emit(report, args.output, config.encoding) else 1


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1

    text = _read_source(args.source, config.encoding)
    if text is None:
        return 1

    label = _source_label(args.source)
    try:
        tokens: list[Token] = tokenize(text)
    except ScanError as exc:
        _print_scan_error(exc, text, label)
        return 1

    print(f"OK: {len(tokens)} token(s) in {label}")
    return 0


def _load_config(config_arg: str | None) -> ScanConfig | None:
    """Load the explicit or discovered config file, printing errors to stderr."""
    if config_arg is not None:
        path: Path | None = Path(config_arg)
    else:
        path = find_config(Path.cwd())

    if path is None:
        return ScanConfig()

    try:
        return load_config(path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _read_source(source: str, encoding: str) -> str | None:
    """Read the source text from a file or stdin, printing errors to stderr."""
    if source == _STDIN_MARKER:
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        print(f"Error: source file '{path}' does not exist.", file=sys.stderr)
        return None

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read source file '{path}': {exc}", file=sys.stderr)
        return None


def _source_label(source: str) -> str:
    return "<stdin>" if source == _STDIN_MARKER else source


def _print_scan_error(error: ScanError, text: str, label: str) -> None:
    line, column = line_and_column(text, error.position)
    print(f"Error: {label}:{line}:{column}: {error.message}", file=sys.stderr)


def _emit(report: str, output: str | None, encoding: str) -> bool:
    """Write the report to *output* or stdout. Returns False on write failure."""
    if output is None:
        sys.stdout.write(report)
        return True

    try:
        write_report(report, Path(output), encoding=encoding)
    except ReportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return False
    print(f"Report written to '{output}'.")
    return True
