# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of scan results into text and JSON reports.

The text format lists one token per line as ``<value> , <KIND>``. The JSON
format is a versioned document describing either the tokens or the error.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from tinyscan.scanner.lexer import ScanError, Token

# ###############
# Public Interface
# ###############

REPORT_FORMAT_VERSION = "1"


class ReportError(Exception):
    """Raised when a report cannot be written."""


class ReportedToken(BaseModel):
    """A single token entry of a JSON report."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: str
    kind: str
    position: int


class ReportedError(BaseModel):
    """The error entry of a JSON report for a failed scan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: str
    message: str
    position: int


class ScanReport(BaseModel):
    """Top-level JSON report for one scanned source."""

    model_config = ConfigDict(extra="forbid")

    version: str = REPORT_FORMAT_VERSION
    source: str
    tokens: list[ReportedToken] = []
    error: ReportedError | None = None


def render_text(tokens: list[Token]) -> str:
    """Render tokens as ``<value> , <KIND>`` lines, each ending in a newline."""
    return "".join(f"{token.value} , {token.kind.value}\n" for token in tokens)


def render_json(tokens: list[Token], source_label: str = "<string>") -> str:
    """Render a successful scan as a JSON report."""
    report = ScanReport(
        source=source_label,
        tokens=[ReportedToken(value=t.value, kind=t.kind.value, position=t.position) for t in tokens],
    )
    return report.model_dump_json(indent=2) + "\n"


def render_error_json(error: ScanError, source_label: str = "<string>") -> str:
    """Render a failed scan as a JSON report carrying only the error."""
    report = ScanReport(
        source=source_label,
        error=ReportedError(kind=error.kind.name, message=error.message, position=error.position),
    )
    return report.model_dump_json(indent=2) + "\n"


def write_report(text: str, path: Path, encoding: str = "utf-8") -> None:
    """Write a rendered report to *path*, creating parent directories as needed.

    Raises:
        ReportError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding=encoding)
    except OSError as exc:
        raise ReportError(f"Cannot write report '{path}': {exc}") from exc
