# topmark:header:start
#
#   project      : ErrFold
#   file         : classifier.py
#   file_relpath : src/errfold/scanner/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classify a guard block's body as a *simple* error-handling body.

A body is simple when, ignoring blank and comment-only lines:

- it has between 1 and `MAX_BODY_STATEMENTS` statement lines;
- every statement line is a ``return``, a logging call, a ``panic(...)`` or a
  process exit (see `errfold.scanner.patterns.STATEMENT_PATTERNS`);
- at most `MAX_RETURN_STATEMENTS` of them are ``return`` statements.

Each line is judged on its own; a statement continued over several lines fails
unless every continuation line also has an allowed shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from errfold.constants import MAX_BODY_STATEMENTS, MAX_RETURN_STATEMENTS
from errfold.scanner.patterns import is_comment_only, statement_kind
from errfold.scanner.types import BodyVerdict, StatementKind

if TYPE_CHECKING:
    from collections.abc import Iterable


def statement_lines(body_lines: Iterable[str]) -> list[str]:
    """Return the trimmed body lines that carry a statement.

    Blank lines and comment-only lines are dropped.
    """
    out: list[str] = []
    for line in body_lines:
        trimmed: str = line.strip()
        if trimmed and not is_comment_only(trimmed):
            out.append(trimmed)
    return out


def classify_body(body_lines: Iterable[str]) -> BodyVerdict:
    """Classify a block body.

    Args:
        body_lines (Iterable[str]): Raw lines strictly between header and closer.

    Returns:
        BodyVerdict: ``SIMPLE`` when the body may be collapsed, otherwise the
            first rule it violates.
    """
    statements: list[str] = statement_lines(body_lines)
    if not statements:
        return BodyVerdict.EMPTY
    if len(statements) > MAX_BODY_STATEMENTS:
        return BodyVerdict.TOO_MANY_STATEMENTS

    returns: int = 0
    for stmt in statements:
        kind: StatementKind | None = statement_kind(stmt)
        if kind is None:
            return BodyVerdict.DISALLOWED_STATEMENT
        if kind is StatementKind.RETURN:
            returns += 1

    if returns > MAX_RETURN_STATEMENTS:
        return BodyVerdict.MULTIPLE_RETURNS
    return BodyVerdict.SIMPLE


def is_simple_error_body(body_lines: Iterable[str]) -> bool:
    """Return True if ``body_lines`` form a simple error-handling body."""
    return classify_body(body_lines).is_simple
