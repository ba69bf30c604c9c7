# topmark:header:start
#
#   project      : ErrFold
#   file         : cmd_common.py
#   file_relpath : src/errfold/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from errfold.cli.errors import ErrfoldConfigError
from errfold.config import load_config
from errfold.config.logging import get_logger
from errfold.core.diagnostics import DiagnosticLevel, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from errfold.cli.console import ConsoleLike
    from errfold.config import Config
    from errfold.config.logging import ErrfoldLogger

logger: ErrfoldLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context by the group callback."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return program-output verbosity (negative = quiet, 0 = default, >0 = verbose)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def build_config(
    ctx: click.Context,
    *,
    anchor: Path | None,
    config_files: Iterable[Path],
    no_config: bool,
    patterns: Iterable[str],
    show_collapsed_hint: bool | None = None,
) -> Config:
    """Load the effective config for a command and surface its diagnostics.

    Warnings are printed to stderr unless output is quiet. Error diagnostics
    (e.g. a ``--config`` file that does not exist) abort the command.

    Raises:
        ErrfoldConfigError: If loading recorded an error diagnostic.
    """
    pattern_list: list[str] = list(patterns)
    config: Config = load_config(
        anchor=anchor,
        extra_config_files=list(config_files),
        no_config=no_config,
        error_patterns=pattern_list or None,
        show_collapsed_hint=show_collapsed_hint,
    )
    logger.debug("Effective config: %s", config)

    diags: DiagnosticLog = DiagnosticLog.from_iterable(config.diagnostics)
    logger.debug("Config diagnostics: %s", diags.stats())
    if diags.has_error():
        raise ErrfoldConfigError(
            "; ".join(d.message for d in diags if d.level is DiagnosticLevel.ERROR)
        )

    if diags.has_warning() and get_effective_verbosity(ctx) >= 0:
        console: ConsoleLike = get_console(ctx)
        for d in diags:
            if d.level is DiagnosticLevel.WARNING:
                console.warn(f"Warning: {d.message}")
    return config
