# topmark:header:start
#
#   project      : ErrFold
#   file         : test_main.py
#   file_relpath : tests/cli/test_main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Smoke tests for the ``errfold`` group and the ``version`` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from errfold.constants import ERRFOLD_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from click.testing import Result


@mark_cli
def test_bare_invocation_prints_hint_and_help() -> None:
    result: Result = run_cli([])

    assert_SUCCESS(result)
    assert "errfold scan" in result.output
    assert "Commands:" in result.output


@mark_cli
@parametrize("argv", [["-h"], ["--help"], ["scan", "--help"], ["config", "dump", "-h"]])
def test_help(argv: list[str]) -> None:
    result: Result = run_cli(argv)

    assert_SUCCESS(result)
    assert "Usage:" in result.output


@mark_cli
def test_version_plain() -> None:
    result: Result = run_cli(["version"])

    assert_SUCCESS(result)
    assert result.output.strip() == ERRFOLD_VERSION


@mark_cli
def test_version_verbose() -> None:
    result: Result = run_cli(["-v", "version"])

    assert_SUCCESS(result)
    assert "ErrFold version:" in result.output
    assert ERRFOLD_VERSION in result.output


@mark_cli
@parametrize("fmt", ["json", "ndjson"])
def test_version_machine(fmt: str) -> None:
    result: Result = run_cli(["version", "--format", fmt])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": ERRFOLD_VERSION}


@mark_cli
def test_unknown_format_is_rejected() -> None:
    result: Result = run_cli(["version", "--format", "yaml"])

    assert result.exit_code != 0
    assert "yaml" in result.output
