# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner and report rendering for TINY source files."""

from tinyscan.scanner.lexer import (
    RESERVED_WORDS,
    SYMBOLS,
    ScanError,
    ScanErrorKind,
    Token,
    TokenKind,
    line_and_column,
    tokenize,
)
from tinyscan.scanner.report import ReportError, render_error_json, render_json, render_text, write_report

__all__ = [
    "RESERVED_WORDS",
    "SYMBOLS",
    "ReportError",
    "ScanError",
    "ScanErrorKind",
    "Token",
    "TokenKind",
    "line_and_column",
    "render_error_json",
    "render_json",
    "render_text",
    "tokenize",
    "write_report",
]
