# topmark:header:start
#
#   project      : ErrFold
#   file         : emitters.py
#   file_relpath : src/errfold/cli/emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Renderers for ``errfold scan`` output.

Human output lists one line per block with 1-based line numbers, as editors and
compilers print them. Machine output (JSON/NDJSON) keeps the 0-based indexes of
`ErrorBlock.to_dict()` and never carries ANSI color.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from errfold.cli.cli_types import OutputFormat
from errfold.constants import ERRFOLD_VERSION

if TYPE_CHECKING:
    from collections.abc import Sequence

    from errfold.cli.console import ConsoleLike
    from errfold.views import BlockReport


def summary_line(total: int) -> str:
    """Return the human summary for ``total`` blocks."""
    return f"Collapsed {total} error block(s)"


def emit_reports_default(
    console: ConsoleLike,
    reports: Sequence[BlockReport],
    *,
    show_hints: bool,
    verbosity: int,
) -> None:
    """Print blocks as ``path:start-end: collapsed text`` lines."""
    for report in reports:
        if verbosity > 0:
            console.print(
                console.styled(f"{report.path}: {report.count} block(s)", bold=True)
            )
        for block in report.blocks:
            location: str = console.styled(
                f"{report.path}:{block.start_line + 1}-{block.end_line + 1}", fg="cyan"
            )
            if show_hints:
                console.print(f"{location}: {block.collapsed_text}")
            else:
                console.print(location)


def emit_summary_default(
    console: ConsoleLike,
    reports: Sequence[BlockReport],
    *,
    verbosity: int,
) -> None:
    """Print the total block count (and per-file counts when verbose)."""
    if verbosity > 0:
        for report in reports:
            console.print(f"{report.path}: {report.count}")
    total: int = sum(r.count for r in reports)
    console.print(console.styled(summary_line(total), bold=True))


def build_machine_payload(reports: Sequence[BlockReport]) -> dict[str, Any]:
    """Return the JSON document for a whole run."""
    return {
        "meta": {"tool": "errfold", "version": ERRFOLD_VERSION},
        "files": [r.to_dict() for r in reports],
        "total": sum(r.count for r in reports),
    }


def emit_reports_machine(
    console: ConsoleLike,
    reports: Sequence[BlockReport],
    *,
    fmt: OutputFormat,
    summary_only: bool,
) -> None:
    """Print reports as JSON (one document) or NDJSON (one record per file).

    With ``summary_only`` the per-file records carry counts but no blocks.
    """
    payload: dict[str, Any] = build_machine_payload(reports)
    if summary_only:
        payload["files"] = [{"path": r.path, "count": r.count} for r in reports]

    if fmt is OutputFormat.JSON:
        console.print(json.dumps(payload, indent=2))
        return

    for record in payload["files"]:
        console.print(json.dumps({"kind": "file", **record}))
    console.print(json.dumps({"kind": "summary", "total": payload["total"]}))
