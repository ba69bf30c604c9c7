# topmark:header:start
#
#   project      : ErrFold
#   file         : config.py
#   file_relpath : src/errfold/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold `config` command group.

  * ``errfold config dump``: show the effective merged configuration.
  * ``errfold config defaults``: show the built-in default configuration.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from errfold.cli.cli_types import OutputFormat, is_machine_format
from errfold.cli.cmd_common import build_config, get_console
from errfold.cli.errors import ErrfoldUsageError
from errfold.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    output_format_option,
    pyproject_option,
)
from errfold.config import MutableConfig
from errfold.config.io import nest_toml_under_section, to_toml
from errfold.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from errfold.cli.console import ConsoleLike
    from errfold.config import Config
    from errfold.config.io import TomlTable


def _emit_toml_dict(
    console: ConsoleLike,
    toml_dict: TomlTable,
    *,
    fmt: OutputFormat,
    pyproject: bool,
) -> None:
    if fmt is OutputFormat.DEFAULT:
        rendered: str = (
            nest_toml_under_section(toml_dict, f"tool.{PYPROJECT_TOOL_SECTION}")
            if pyproject
            else to_toml(toml_dict)
        )
        console.print(rendered, nl=False)
    elif fmt is OutputFormat.JSON:
        console.print(json.dumps({"config": toml_dict}, indent=2))
    else:
        console.print(json.dumps({"kind": "config", "config": toml_dict}))


def _check_pyproject(fmt: OutputFormat, pyproject: bool) -> None:
    if pyproject and is_machine_format(fmt):
        raise ErrfoldUsageError("--pyproject is not supported with machine-readable formats.")


@click.group(
    name="config",
    help="Inspect ErrFold configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands."""


@config_command.command(name="dump", help="Display the effective merged configuration.")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@common_config_options
@output_format_option
@pyproject_option
@click.pass_context
def config_dump_command(
    ctx: click.Context,
    *,
    path: Path | None,
    config_files: tuple[Path, ...],
    no_config: bool,
    patterns: tuple[str, ...],
    output_format: OutputFormat | None,
    pyproject: bool,
) -> None:
    """Print the configuration that ``errfold scan`` would use for PATH (or CWD)."""
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    _check_pyproject(fmt, pyproject)

    config: Config = build_config(
        ctx,
        anchor=path,
        config_files=config_files,
        no_config=no_config,
        patterns=patterns,
    )
    console: ConsoleLike = get_console(ctx)
    if fmt is OutputFormat.DEFAULT:
        for source in config.config_files:
            console.print(f"# merged: {source}")
    _emit_toml_dict(console, config.to_toml_dict(), fmt=fmt, pyproject=pyproject)


@config_command.command(
    name="defaults", help="Display the built-in default ErrFold configuration."
)
@output_format_option
@pyproject_option
@click.pass_context
def config_defaults_command(
    ctx: click.Context,
    *,
    output_format: OutputFormat | None,
    pyproject: bool,
) -> None:
    """Print the runtime defaults as TOML (or JSON)."""
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    _check_pyproject(fmt, pyproject)

    config: Config = MutableConfig.from_defaults().freeze()
    _emit_toml_dict(get_console(ctx), config.to_toml_dict(), fmt=fmt, pyproject=pyproject)
