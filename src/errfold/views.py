# topmark:header:start
#
#   project      : ErrFold
#   file         : views.py
#   file_relpath : src/errfold/views.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Presentation views derived from block descriptors.

These helpers turn `ErrorBlock` descriptors into the shapes consumed by
collaborators of the scanner: collapsible fold ranges, inline hints shown after
the header's opening brace, dimmed ranges, and a per-document report used by
the CLI's machine output. They are pure mappings; no I/O happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from errfold.scanner import ErrorBlock

__all__: list[str] = [
    "BlockReport",
    "DimRange",
    "FoldRange",
    "HintView",
    "dim_ranges",
    "fold_ranges",
    "hint_for",
    "hints",
]


@dataclass(frozen=True)
class FoldRange:
    """Collapsible line range ``[start, end]`` (header through closer)."""

    start: int
    end: int


@dataclass(frozen=True)
class HintView:
    """Inline summary anchored on the header line.

    Attributes:
        line (int): Header line index.
        column (int): Character offset right after the last ``{`` of the header.
        text (str): Hint text: a single space followed by the body statement.
    """

    line: int
    column: int
    text: str


@dataclass(frozen=True)
class DimRange:
    """Inclusive line range rendered with reduced emphasis."""

    start_line: int
    end_line: int


def fold_ranges(blocks: Iterable[ErrorBlock]) -> list[FoldRange]:
    """Return one fold range per block."""
    return [FoldRange(b.start_line, b.end_line) for b in blocks]


def hint_for(block: ErrorBlock, header_line: str) -> HintView:
    """Return the inline hint for ``block`` given the text of its header line."""
    brace_index: int = header_line.rfind("{")
    return HintView(
        line=block.start_line,
        column=brace_index + 1,
        text=f" {block.body_statement}",
    )


def hints(blocks: Iterable[ErrorBlock], lines: Sequence[str]) -> list[HintView]:
    """Return inline hints for ``blocks`` of the document ``lines``."""
    return [hint_for(b, lines[b.start_line]) for b in blocks]


def dim_ranges(blocks: Iterable[ErrorBlock]) -> list[DimRange]:
    """Return the full range of each block, to be dimmed."""
    return [DimRange(b.start_line, b.end_line) for b in blocks]


@dataclass(frozen=True)
class BlockReport:
    """Blocks detected in one document.

    Attributes:
        path (str): Document path, or ``"<stdin>"`` / a caller-chosen label.
        blocks (tuple[ErrorBlock, ...]): Detected blocks in document order.
        hints (tuple[HintView, ...]): Inline hints, one per block (may be empty
            when hints are disabled).
    """

    path: str
    blocks: tuple[ErrorBlock, ...]
    hints: tuple[HintView, ...] = ()

    @property
    def count(self) -> int:
        """Return the number of detected blocks."""
        return len(self.blocks)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this report."""
        data: dict[str, Any] = {
            "path": self.path,
            "count": self.count,
            "blocks": [b.to_dict() for b in self.blocks],
        }
        if self.hints:
            data["hints"] = [
                {"line": h.line, "column": h.column, "text": h.text} for h in self.hints
            ]
        return data
