# topmark:header:start
#
#   project      : ErrFold
#   file         : errors.py
#   file_relpath : src/errfold/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ErrFold CLI.

Raise these from commands to stop with a standardized message and exit code.
They print through the project console when one is stored on the Click
context, and through Click's default error display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from errfold.cli.exit_codes import ExitCode


class ErrfoldError(click.ClickException):
    """Base class for all ErrFold CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class ErrfoldUsageError(ErrfoldError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ErrfoldConfigError(ErrfoldError):
    """Error for configuration errors (missing config file)."""

    exit_code = ExitCode.CONFIG_ERROR


class ErrfoldFileNotFoundError(ErrfoldError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ErrfoldIOError(ErrfoldError):
    """Error for I/O failures while reading input."""

    exit_code = ExitCode.IO_ERROR


class ErrfoldEncodingError(ErrfoldError):
    """Error for input that cannot be decoded as UTF-8."""

    exit_code = ExitCode.ENCODING_ERROR
