# topmark:header:start
#
#   project      : ErrFold
#   file         : detector.py
#   file_relpath : src/errfold/scanner/detector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detect foldable ``if err != nil { ... }`` blocks in source text.

The scanner walks the lines top to bottom with a cursor. On a guard header it
counts net brace depth on the following lines until depth returns to zero, and
accepts the block only when that line is a closer at exactly the header's
indentation and no ``else`` branch follows. The body is then classified (see
`errfold.scanner.classifier`); simple bodies become `ErrorBlock` descriptors.

Cursor movement:
    - Closed block (folded or not): jump past the closer, so the same span is
      never re-read with another interpretation.
    - Rejected header (else branch, misaligned, unterminated): advance one line,
      so guard headers nested inside remain candidates.

A same-line ``} else {`` is brace-neutral. An ``if`` with such an else branch
therefore closes at the else branch's ``}`` and is skipped as one closed block
with a disallowed body, so guards nested inside either branch are not reported.

The scan is a pure function: no state, no I/O, and it never raises on text
input. Brace deltas are computed once per line, so a closer search costs one
integer addition per visited line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from errfold.config.logging import get_logger
from errfold.constants import (
    COLLAPSED_BODY_MAX_LENGTH,
    DEFAULT_ERROR_PATTERNS,
    ELLIPSIS,
    FALLBACK_CONDITION,
)
from errfold.scanner.classifier import classify_body, statement_lines
from errfold.scanner.patterns import (
    CLOSER_RE,
    CONDITION_RE,
    ELSE_NEXT_LINE_RE,
    ELSE_SAME_LINE_RE,
    WHITESPACE_RE,
    header_pattern,
)
from errfold.scanner.types import BlockEnd, BodyVerdict, CloseKind, ErrorBlock

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable, Sequence

    from errfold.config.logging import ErrfoldLogger

logger: ErrfoldLogger = get_logger(__name__)


def split_lines(text: str) -> list[str]:
    """Split document text into 0-indexed lines on ``\\n`` only.

    Other separators recognized by `str.splitlines` (form feed, U+2028, ...)
    are kept inside their line so indexes agree with editors.
    """
    return text.split("\n")


def _brace_deltas(lines: Sequence[str]) -> list[int]:
    return [line.count("{") - line.count("}") for line in lines]


def find_block_end(
    lines: Sequence[str],
    header_index: int,
    indentation: str,
    *,
    deltas: Sequence[int] | None = None,
) -> BlockEnd:
    """Find the closer matching the guard header at ``header_index``.

    Depth starts at 1 for the header's opening brace and changes by the number
    of ``{`` minus ``}`` on each following line. The first line on which depth
    drops to zero or below decides the outcome.

    Args:
        lines (Sequence[str]): Document lines.
        header_index (int): Index of the guard header line.
        indentation (str): Leading whitespace of the header line.
        deltas (Sequence[int] | None): Precomputed per-line brace deltas.

    Returns:
        BlockEnd: The discriminated search result.
    """
    if deltas is None:
        deltas = _brace_deltas(lines)

    depth: int = 1
    j: int = header_index + 1
    n: int = len(lines)
    while j < n:
        depth += deltas[j]
        if depth > 0:
            j += 1
            continue

        closer: re.Match[str] | None = CLOSER_RE.match(lines[j])
        if closer is None or closer.group(1) != indentation:
            return BlockEnd(CloseKind.MISALIGNED, end_line=j)
        if ELSE_SAME_LINE_RE.search(lines[j]) or (
            j + 1 < n and ELSE_NEXT_LINE_RE.match(lines[j + 1])
        ):
            return BlockEnd(CloseKind.ELSE_BRANCH, end_line=j)
        return BlockEnd(
            CloseKind.CLOSED,
            end_line=j,
            body_lines=tuple(lines[header_index + 1 : j]),
        )

    return BlockEnd(CloseKind.UNTERMINATED)


def normalize_body(body_lines: Iterable[str]) -> str:
    """Render the body's statements as one whitespace-collapsed line."""
    joined: str = " ".join(statement_lines(body_lines))
    return WHITESPACE_RE.sub(" ", joined).strip()


def build_collapsed_text(header_line: str, body_statement: str) -> str:
    """Build the one-line preview ``if <condition> { <body> }``.

    The body is cut to `COLLAPSED_BODY_MAX_LENGTH` characters followed by an
    ellipsis when longer; ``body_statement`` itself is never truncated.
    """
    match: re.Match[str] | None = CONDITION_RE.search(header_line)
    condition: str = match.group(1) if match else FALLBACK_CONDITION

    display: str = body_statement
    if len(display) > COLLAPSED_BODY_MAX_LENGTH:
        display = display[:COLLAPSED_BODY_MAX_LENGTH] + ELLIPSIS

    return f"if {condition} {{ {display} }}"


def scan(
    lines: Sequence[str],
    error_patterns: Iterable[str] = DEFAULT_ERROR_PATTERNS,
) -> list[ErrorBlock]:
    """Detect all foldable error blocks in ``lines``.

    Args:
        lines (Sequence[str]): Document text as 0-indexed lines.
        error_patterns (Iterable[str]): Error-variable name fragments.

    Returns:
        list[ErrorBlock]: Non-overlapping blocks in ascending ``start_line`` order.
    """
    pattern: re.Pattern[str] | None = header_pattern(error_patterns)
    if pattern is None:
        return []

    blocks: list[ErrorBlock] = []
    deltas: list[int] | None = None
    n: int = len(lines)
    i: int = 0
    while i < n:
        line: str = lines[i]
        header: re.Match[str] | None = pattern.match(line)
        if header is None:
            i += 1
            continue

        if deltas is None:
            deltas = _brace_deltas(lines)

        indentation: str = header.group("indent")
        end: BlockEnd = find_block_end(lines, i, indentation, deltas=deltas)
        if end.kind is not CloseKind.CLOSED or end.end_line is None:
            logger.trace("Guard header at line %d rejected: %s", i, end.kind.value)
            i += 1
            continue

        verdict: BodyVerdict = classify_body(end.body_lines)
        if verdict.is_simple:
            body_statement: str = normalize_body(end.body_lines)
            blocks.append(
                ErrorBlock(
                    start_line=i,
                    end_line=end.end_line,
                    body_start_line=i + 1,
                    indentation=indentation,
                    body_statement=body_statement,
                    collapsed_text=build_collapsed_text(line, body_statement),
                )
            )
        else:
            logger.trace(
                "Block at lines %d-%d not collapsible: %s", i, end.end_line, verdict.value
            )
        i = end.end_line + 1

    logger.debug("Scanned %d line(s), found %d error block(s)", n, len(blocks))
    return blocks
