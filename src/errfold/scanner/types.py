# topmark:header:start
#
#   project      : ErrFold
#   file         : types.py
#   file_relpath : src/errfold/scanner/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type definitions for the scanner layer.

Structured result types passed between the scanner's phases (closer search,
body classification, descriptor construction). They replace bare tuples so
callers and tests can inspect outcomes by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class LineRange:
    """Inclusive ``[start, end]`` span of 0-based line indexes."""

    start: int
    end: int

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.start <= line <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, kw_only=True)
class ErrorBlock:
    """One detected, foldable error-handling block.

    Attributes:
        start_line (int): Index of the guard header line (``if err != nil {``).
        end_line (int): Index of the matching closing brace line.
        body_start_line (int): Index of the first body line.
        indentation (str): Literal leading whitespace of the header line; the
            closer carries exactly the same prefix.
        body_statement (str): Whitespace-collapsed, single-line rendering of all
            body statements (never truncated).
        collapsed_text (str): One-line preview ``if <condition> { <body> }`` with the
            body truncated for display.
    """

    start_line: int
    end_line: int
    body_start_line: int
    indentation: str
    body_statement: str
    collapsed_text: str

    @property
    def full_range(self) -> LineRange:
        """Inclusive line span covered by the block, header through closer."""
        return LineRange(self.start_line, self.end_line)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this block."""
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "body_start_line": self.body_start_line,
            "indentation": self.indentation,
            "body_statement": self.body_statement,
            "collapsed_text": self.collapsed_text,
            "full_range": [self.start_line, self.end_line],
        }


class CloseKind(Enum):
    """Discriminant for the closing-brace search of one guard header.

    Members:
        CLOSED: A closer at the header's indentation was found.
        ELSE_BRANCH: The closer is followed by an ``else`` branch; never folded.
        MISALIGNED: Brace depth returned to zero on a line that is not a closer
            at the header's indentation.
        UNTERMINATED: End of input was reached with unbalanced braces.
    """

    CLOSED = "closed"
    ELSE_BRANCH = "else_branch"
    MISALIGNED = "misaligned"
    UNTERMINATED = "unterminated"


@dataclass(frozen=True)
class BlockEnd:
    """Structured result of the closing-brace search.

    This is a discriminated union controlled by ``kind``:

    * ``CLOSED``: ``end_line`` is the closer index, ``body_lines`` the lines
      strictly between header and closer.
    * ``ELSE_BRANCH`` / ``MISALIGNED``: ``end_line`` is the line where depth
      returned to zero; ``body_lines`` is empty.
    * ``UNTERMINATED``: ``end_line`` is ``None``.

    Attributes:
        kind (CloseKind): Discriminant of the result.
        end_line (int | None): Line index where the search stopped, if any.
        body_lines (tuple[str, ...]): Raw body lines when ``kind`` is ``CLOSED``.
    """

    kind: CloseKind
    end_line: int | None = None
    body_lines: tuple[str, ...] = ()


class StatementKind(Enum):
    """Shapes a body statement may take in a simple error-handling body."""

    RETURN = "return"
    LOG = "log"
    PANIC = "panic"
    EXIT = "exit"


class BodyVerdict(Enum):
    """Outcome of classifying a block body.

    Members:
        SIMPLE: Eligible for collapsing.
        EMPTY: No statement lines.
        TOO_MANY_STATEMENTS: More statement lines than allowed.
        DISALLOWED_STATEMENT: A line is not a return/log/panic/exit statement.
        MULTIPLE_RETURNS: More than one ``return`` statement.
    """

    SIMPLE = "simple"
    EMPTY = "empty"
    TOO_MANY_STATEMENTS = "too_many_statements"
    DISALLOWED_STATEMENT = "disallowed_statement"
    MULTIPLE_RETURNS = "multiple_returns"

    @property
    def is_simple(self) -> bool:
        """Return True if the body may be collapsed."""
        return self is BodyVerdict.SIMPLE
