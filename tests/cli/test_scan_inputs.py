# topmark:header:start
#
#   project      : ErrFold
#   file         : test_scan_inputs.py
#   file_relpath : tests/cli/test_scan_inputs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input handling of ``errfold scan``: STDIN, directories and failure exit codes."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from errfold.cli.exit_codes import ExitCode
from tests.cli.conftest import GO_SIMPLE, assert_SUCCESS, assert_USAGE_ERROR, run_cli_in
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_stdin_document(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["scan", "-"], input_text=GO_SIMPLE)

    assert_SUCCESS(result)
    assert result.output.splitlines() == ["<stdin>:5-7: if err != nil { return err }"]


@mark_cli
def test_stdin_given_twice_is_a_usage_error(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["scan", "-", "-"], input_text=GO_SIMPLE)

    assert_USAGE_ERROR(result)


@mark_cli
def test_directory_is_searched_for_go_files(isolation: Path) -> None:
    pkg: Path = isolation / "pkg"
    (pkg / "inner").mkdir(parents=True)
    (pkg / "b.go").write_text(GO_SIMPLE, encoding="utf-8")
    (pkg / "inner" / "a.go").write_text(GO_SIMPLE, encoding="utf-8")
    (pkg / "notes.txt").write_text(GO_SIMPLE, encoding="utf-8")

    result: Result = run_cli_in(isolation, ["scan", "--format", "json", "pkg"])

    assert_SUCCESS(result)
    payload = json.loads(result.output)
    assert [f["path"] for f in payload["files"]] == [
        str(pkg.relative_to(isolation) / "b.go"),
        str(pkg.relative_to(isolation) / "inner" / "a.go"),
    ]
    assert payload["total"] == 2


@mark_cli
def test_explicit_file_is_scanned_whatever_its_suffix(isolation: Path) -> None:
    (isolation / "snippet.txt").write_text(GO_SIMPLE, encoding="utf-8")

    result: Result = run_cli_in(isolation, ["scan", "--summary", "snippet.txt"])

    assert_SUCCESS(result)
    assert "Collapsed 1 error block(s)" in result.output


@mark_cli
def test_duplicate_paths_are_reported_once(isolation: Path) -> None:
    (isolation / "main.go").write_text(GO_SIMPLE, encoding="utf-8")

    result: Result = run_cli_in(isolation, ["scan", "main.go", "./main.go", "."])

    assert_SUCCESS(result)
    assert len(result.output.splitlines()) == 1


@mark_cli
def test_empty_directory_warns(isolation: Path) -> None:
    (isolation / "empty").mkdir()

    result: Result = run_cli_in(isolation, ["scan", "empty"])

    assert_SUCCESS(result)
    assert "No Go files found." in result.output


@mark_cli
def test_no_paths_is_a_usage_error(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["scan"])

    assert_USAGE_ERROR(result)
    assert "No input given" in result.output


@mark_cli
def test_missing_file(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["scan", "nope.go"])

    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output
    assert "nope.go" in result.output


@mark_cli
def test_invalid_utf8(isolation: Path) -> None:
    (isolation / "bad.go").write_bytes(b"package main\n\xff\xfe\n")

    result: Result = run_cli_in(isolation, ["scan", "bad.go"])

    assert result.exit_code == ExitCode.ENCODING_ERROR, result.output
    assert "bad.go" in result.output


@mark_cli
def test_missing_config_file(isolation: Path) -> None:
    (isolation / "main.go").write_text(GO_SIMPLE, encoding="utf-8")

    result: Result = run_cli_in(isolation, ["scan", "--config", "missing.toml", "main.go"])

    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert "missing.toml" in result.output


@mark_cli
def test_verbose_and_quiet_conflict(isolation: Path) -> None:
    (isolation / "main.go").write_text(GO_SIMPLE, encoding="utf-8")

    result: Result = run_cli_in(isolation, ["-v", "-q", "scan", "main.go"])

    assert_USAGE_ERROR(result)
