# topmark:header:start
#
#   project      : ErrFold
#   file         : patterns.py
#   file_relpath : src/errfold/scanner/patterns.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compiled line patterns used by the scanner.

The guard-header pattern depends on the configured error-variable fragments.
It is compiled once per distinct fragment set and memoized, so the hot scanning
path never rebuilds a regex. All other patterns are fixed and compiled at import.

Every pattern here applies to a single line; block structure is recovered by
brace-depth counting in `errfold.scanner.detector`, never by a multi-line regex.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Final

from errfold.config.logging import get_logger
from errfold.scanner.types import StatementKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from errfold.config.logging import ErrfoldLogger

logger: ErrfoldLogger = get_logger(__name__)

# Condition text between ``if`` and the opening brace, used for the collapsed preview
CONDITION_RE: Final[re.Pattern[str]] = re.compile(r"if\s+(.+?)\s*\{")

# A closer line: optional indentation, then ``}``
CLOSER_RE: Final[re.Pattern[str]] = re.compile(r"^(\s*)\}")

# ``} else {`` / ``} else if ... {`` on the closing line, or a bare ``else`` on the next line
ELSE_SAME_LINE_RE: Final[re.Pattern[str]] = re.compile(r"\}\s*else\b")
ELSE_NEXT_LINE_RE: Final[re.Pattern[str]] = re.compile(r"^\s*else\b")

WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")

RETURN_RE: Final[re.Pattern[str]] = re.compile(r"^return\b", re.IGNORECASE)

# Allowed statement shapes, matched case-insensitively against the trimmed line
STATEMENT_PATTERNS: Final[tuple[tuple[StatementKind, re.Pattern[str]], ...]] = (
    (StatementKind.RETURN, RETURN_RE),
    (StatementKind.LOG, re.compile(r"^log\.(Fatal|Panic|Error|Warn|Info|Print)", re.IGNORECASE)),
    (StatementKind.LOG, re.compile(r"^fmt\.(Print|Errorf|Fprint|Sprint)", re.IGNORECASE)),
    (StatementKind.PANIC, re.compile(r"^panic\s*\(", re.IGNORECASE)),
    # Namespaced logger calls: logger.Error(...), klog.Infof(...)
    (StatementKind.LOG, re.compile(r"^\w+\.(Fatal|Error|Warn|Info|Debug|Print)", re.IGNORECASE)),
    (StatementKind.EXIT, re.compile(r"^(os\.Exit|syscall\.Exit)", re.IGNORECASE)),
)


def normalize_fragments(fragments: Iterable[str]) -> tuple[str, ...]:
    """Return a canonical, hashable form of an error-variable fragment set.

    Blank fragments are dropped (a blank fragment would match any identifier);
    duplicates are removed case-insensitively; the result is sorted so that
    equal sets share one compiled pattern. A bare string counts as a single
    fragment rather than as one fragment per character.
    """
    if isinstance(fragments, str):
        fragments = (fragments,)
    seen: dict[str, str] = {}
    for raw in fragments:
        frag: str = raw.strip()
        if not frag:
            continue
        seen.setdefault(frag.casefold(), frag)
    return tuple(sorted(seen.values(), key=str.casefold))


@functools.lru_cache(maxsize=32)
def _compile_header_pattern(fragments: tuple[str, ...]) -> re.Pattern[str] | None:
    if not fragments:
        logger.debug("No error-variable fragments configured; header pattern matches nothing")
        return None
    alternatives: str = "|".join(re.escape(f) for f in fragments)
    pattern: str = (
        r"^(?P<indent>\s*)if\s+"
        rf"(?P<var>\w*(?i:{alternatives})\w*)"
        r"\s*!=\s*nil\s*\{\s*$"
    )
    logger.debug("Compiled guard-header pattern for fragments %s", fragments)
    return re.compile(pattern)


def header_pattern(fragments: Iterable[str]) -> re.Pattern[str] | None:
    """Return the compiled guard-header pattern for ``fragments``.

    The pattern matches ``<indent>if <var> != nil {`` where ``<var>`` is a word
    containing one of the fragments as a case-insensitive substring (so ``err``
    matches ``err``, ``someErr`` and ``errWrapped``). Named groups: ``indent``
    and ``var``.

    Args:
        fragments (Iterable[str]): Error-variable name fragments.

    Returns:
        re.Pattern[str] | None: The compiled pattern, or None when no usable
            fragment is configured (nothing can match).
    """
    return _compile_header_pattern(normalize_fragments(fragments))


def statement_kind(trimmed: str) -> StatementKind | None:
    """Return the shape of a trimmed body line, or None when it is not allowed."""
    for kind, pattern in STATEMENT_PATTERNS:
        if pattern.match(trimmed):
            return kind
    return None


def is_comment_only(trimmed: str) -> bool:
    """Return True if a trimmed line holds nothing but a comment."""
    if trimmed.startswith("//"):
        return True
    return trimmed.startswith("/*") and trimmed.endswith("*/")
