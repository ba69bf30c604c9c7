# topmark:header:start
#
#   project      : ErrFold
#   file         : version.py
#   file_relpath : src/errfold/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold `version` command.

Prints the ErrFold version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from errfold.cli.cli_types import OutputFormat, is_machine_format
from errfold.cli.cmd_common import get_console, get_effective_verbosity
from errfold.cli.options import output_format_option
from errfold.constants import ERRFOLD_VERSION

if TYPE_CHECKING:
    from errfold.cli.console import ConsoleLike


@click.command(name="version", help="Show the current version of ErrFold.")
@output_format_option
@click.pass_context
def version_command(ctx: click.Context, *, output_format: OutputFormat | None) -> None:
    """Show the current version of ErrFold."""
    console: ConsoleLike = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if is_machine_format(fmt):
        console.print(json.dumps({"version": ERRFOLD_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("ErrFold version:", bold=True, underline=True))
        console.print(f"    {console.styled(ERRFOLD_VERSION, bold=True)}")
    else:
        console.print(console.styled(ERRFOLD_VERSION, bold=True))
