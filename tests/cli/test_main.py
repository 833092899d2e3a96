# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the TinyScan CLI entry point."""

import io
import json
import sys
from pathlib import Path

import pytest

from tinyscan.cli.main import main

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Invoke main() with *argv* and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["tinyscan", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


def _source(tmp_path: Path, text: str, name: str = "prog.tiny") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- scan tests --------


def test_scan_writes_text_report_to_stdout(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """scan prints one '<value> , <KIND>' line per token."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "x := 12 ;")
    assert _run(monkeypatch, "scan", str(source)) == 0
    captured = capsys.readouterr()
    assert captured.out == "x , IDENTIFIER\n:= , ASSIGN\n12 , NUMBER\n; , SEMICOLON\n"


def test_scan_writes_report_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """scan -o writes the report to the given path."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "read x { input }")
    output = tmp_path / "out" / "tokens.txt"
    assert _run(monkeypatch, "scan", str(source), "-o", str(output)) == 0
    assert output.read_text(encoding="utf-8") == "read , READ\nx , IDENTIFIER\n"
    assert "Report written" in capsys.readouterr().out


def test_scan_json_format(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--format json emits a JSON report."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "write 1")
    assert _run(monkeypatch, "scan", str(source), "--format", "json") == 0
    data = json.loads(capsys.readouterr().out)
    assert [t["kind"] for t in data["tokens"]] == ["WRITE", "NUMBER"]
    assert data["source"] == str(source)


def test_scan_uses_config_file_format(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A .tinyscan.yaml in the working directory selects the report format."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".tinyscan.yaml").write_text("report-format: json\n", encoding="utf-8")
    source = _source(tmp_path, "end")
    assert _run(monkeypatch, "scan", str(source)) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["tokens"][0]["kind"] == "END"


def test_scan_format_flag_overrides_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--format takes precedence over the config file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".tinyscan.yaml").write_text("report-format: json\n", encoding="utf-8")
    source = _source(tmp_path, "end")
    assert _run(monkeypatch, "scan", str(source), "--format", "text") == 0
    assert capsys.readouterr().out == "end , END\n"


def test_scan_reads_stdin(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """'-' reads the source from standard input."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("12+3"))
    assert _run(monkeypatch, "scan", "-") == 0
    assert capsys.readouterr().out == "12 , NUMBER\n+ , PLUS\n3 , NUMBER\n"


def test_scan_error_reports_line_and_column(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A scan error exits 1 and prints the location to stderr."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "read x;\nif x > 5 then")
    assert _run(monkeypatch, "scan", str(source)) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Error: {source}:2:6: Invalid character '>'" in captured.err


def test_scan_error_json_document(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """In JSON mode a scan error also produces an error document."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "x {abc")
    assert _run(monkeypatch, "scan", str(source), "--format", "json") == 1
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data["error"]["kind"] == "UNCLOSED_COMMENT"
    assert data["error"]["position"] == 2
    assert "Error" in captured.err


def test_scan_missing_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A missing source file exits with code 1."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "scan", str(tmp_path / "missing.tiny")) == 1
    assert "does not exist" in capsys.readouterr().err


def test_scan_invalid_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """An invalid config file exits with code 1."""
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "custom.yaml"
    config.write_text("report-format: xml\n", encoding="utf-8")
    source = _source(tmp_path, "x")
    assert _run(monkeypatch, "scan", str(source), "--config", str(config)) == 1
    assert "Error: Invalid config" in capsys.readouterr().err


def test_scan_unwritable_output(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Writing the report onto a directory exits with code 1."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "x")
    assert _run(monkeypatch, "scan", str(source), "-o", str(tmp_path)) == 1
    assert "Cannot write report" in capsys.readouterr().err


# -------- check tests --------


def test_check_valid_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check reports the number of tokens of a valid source."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "x := 12 ;")
    assert _run(monkeypatch, "check", str(source)) == 0
    assert "OK: 4 token(s)" in capsys.readouterr().out


def test_check_invalid_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """check exits with code 1 on a lexical error."""
    monkeypatch.chdir(tmp_path)
    source = _source(tmp_path, "x : 5")
    assert _run(monkeypatch, "check", str(source)) == 1
    assert "Invalid assignment operator" in capsys.readouterr().err
