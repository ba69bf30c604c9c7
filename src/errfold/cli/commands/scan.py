# topmark:header:start
#
#   project      : ErrFold
#   file         : scan.py
#   file_relpath : src/errfold/cli/commands/scan.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold `scan` command.

Scans Go sources for ``if err != nil { ... }`` blocks that can be collapsed and
reports them. Files are driven through a `BlockCache`, which is disposed of
when the command ends.

Input:
  * Files given as PATHS are scanned whatever their suffix.
  * Directories are searched recursively for ``*.go`` files.
  * ``-`` reads one document from STDIN.

Exit status:
  * 0 on success, including when blocks were found.
  * 2 (`ExitCode.BLOCKS_FOUND`) with ``--check`` when at least one block was found.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from errfold.cache import BlockCache
from errfold.cli.cli_types import OutputFormat, is_machine_format
from errfold.cli.cmd_common import build_config, get_console, get_effective_verbosity
from errfold.cli.emitters import (
    emit_reports_default,
    emit_reports_machine,
    emit_summary_default,
)
from errfold.cli.errors import ErrfoldUsageError
from errfold.cli.exit_codes import ExitCode
from errfold.cli.io import collect_sources, read_source
from errfold.cli.options import common_config_options, output_format_option
from errfold.config.logging import get_logger
from errfold.scanner import split_lines
from errfold.views import BlockReport, hints

if TYPE_CHECKING:
    from errfold.cli.console import ConsoleLike
    from errfold.cli.io import Source
    from errfold.config import Config
    from errfold.config.logging import ErrfoldLogger
    from errfold.scanner import ErrorBlock

logger: ErrfoldLogger = get_logger(__name__)

# Every CLI document is read once, so all share the initial version
_INITIAL_VERSION = 0


def _anchor_for(paths: tuple[str, ...]) -> Path | None:
    for raw in paths:
        if raw != "-":
            return Path(raw)
    return None


@click.command(
    name="scan",
    help="Report collapsible 'if err != nil' blocks in Go sources.",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@output_format_option
@click.option(
    "--summary",
    is_flag=True,
    help="Print only the number of collapsible blocks.",
)
@click.option(
    "--no-hints",
    "no_hints",
    is_flag=True,
    help="Omit the collapsed one-line preview from human output and hints from JSON.",
)
@click.option(
    "--check",
    is_flag=True,
    help=f"Exit with status {int(ExitCode.BLOCKS_FOUND)} when any block is found.",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    *,
    paths: tuple[str, ...],
    config_files: tuple[Path, ...],
    no_config: bool,
    patterns: tuple[str, ...],
    output_format: OutputFormat | None,
    summary: bool,
    no_hints: bool,
    check: bool,
) -> None:
    """Scan PATHS and report collapsible error blocks.

    Raises:
        ErrfoldUsageError: If no PATHS are given.
    """
    if not paths:
        raise ErrfoldUsageError("No input given; pass files, directories, or '-' for STDIN.")

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    console: ConsoleLike = get_console(ctx)
    verbosity: int = get_effective_verbosity(ctx)

    config: Config = build_config(
        ctx,
        anchor=_anchor_for(paths),
        config_files=config_files,
        no_config=no_config,
        patterns=patterns,
        show_collapsed_hint=False if no_hints else None,
    )
    sources: list[Source] = collect_sources(paths)
    if not sources and verbosity >= 0:
        console.warn("No Go files found.")

    reports: list[BlockReport] = []
    with BlockCache.from_config(config) as cache:
        for source in sources:
            logger.debug("Scanning %s", "STDIN" if source.is_stdin else source.path)
            lines: list[str] = split_lines(read_source(source))
            blocks: list[ErrorBlock] = cache.get_or_scan(source.label, _INITIAL_VERSION, lines)
            reports.append(
                BlockReport(
                    path=source.label,
                    blocks=tuple(blocks),
                    hints=tuple(hints(blocks, lines)) if config.show_collapsed_hint else (),
                )
            )
        logger.debug("Cache stats: %s", cache.stats)

    if is_machine_format(fmt):
        emit_reports_machine(console, reports, fmt=fmt, summary_only=summary)
    elif summary:
        emit_summary_default(console, reports, verbosity=verbosity)
    else:
        emit_reports_default(
            console, reports, show_hints=config.show_collapsed_hint, verbosity=verbosity
        )

    if check and any(r.count for r in reports):
        ctx.exit(int(ExitCode.BLOCKS_FOUND))
