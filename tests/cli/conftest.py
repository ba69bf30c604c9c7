# topmark:header:start
#
#   project      : ErrFold
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ErrFold in a controlled working directory.

`run_cli_in()` changes the process working directory to the given directory
before invoking the Click CLI, so relative PATHS and config discovery resolve
against the test sandbox. Color is forced off through the environment so
assertions can compare plain text.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from errfold.cli.exit_codes import ExitCode
from errfold.cli.main import cli
from errfold.config import logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

_ENV: dict[str, str | None] = {
    "NO_COLOR": "1",
    "FORCE_COLOR": None,
    "ERRFOLD_LOG_LEVEL": None,
}

GO_SIMPLE = """package main

func load() error {
\tdata, err := read()
\tif err != nil {
\t\treturn err
\t}
\treturn use(data)
}
"""

GO_NONE = """package main

func load() error {
\tif err != nil {
\t\tcleanup()
\t\treturn err
\t}
\treturn nil
}
"""


@pytest.fixture(autouse=True)
def restore_test_logging() -> Iterator[None]:
    """Reinstate TRACE logging after the CLI reconfigured it for a run."""
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)


def run_cli_in(
    cwd: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``cwd`` as the working directory.

    Args:
        cwd (Path): Directory used as the CWD for the invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["scan", "main.go"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` of the run.
    """
    runner = CliRunner()
    previous: str = os.getcwd()
    try:
        os.chdir(cwd)
        return runner.invoke(cli, argv, input=input_text, env=_ENV)
    finally:
        os.chdir(previous)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this for runs that touch no files (``--help``, ``version``) or that
    pass only absolute paths.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, env=_ENV)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_BLOCKS_FOUND(result: Result) -> None:
    """Assert that ``--check`` reported blocks (code 2) rather than a usage error."""
    assert result.exit_code == ExitCode.BLOCKS_FOUND, result.output
    assert "Usage:" not in result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output
