# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/scanner/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold block scanner package.

This package contains the pure, stateless detection of foldable error guards:

- Line patterns, including the memoized guard-header pattern
- Body classification rules
- The cursor scan with brace-depth closer matching
- Result types shared between these phases

The public entry point is [`scan`][errfold.scanner.detector.scan]; it returns
[`ErrorBlock`][errfold.scanner.types.ErrorBlock] descriptors.
"""

from __future__ import annotations

from errfold.scanner.classifier import classify_body, is_simple_error_body
from errfold.scanner.detector import (
    build_collapsed_text,
    find_block_end,
    normalize_body,
    scan,
    split_lines,
)
from errfold.scanner.patterns import header_pattern
from errfold.scanner.types import (
    BlockEnd,
    BodyVerdict,
    CloseKind,
    ErrorBlock,
    LineRange,
    StatementKind,
)

__all__ = [
    "BlockEnd",
    "BodyVerdict",
    "CloseKind",
    "ErrorBlock",
    "LineRange",
    "StatementKind",
    "build_collapsed_text",
    "classify_body",
    "find_block_end",
    "header_pattern",
    "is_simple_error_body",
    "normalize_body",
    "scan",
    "split_lines",
]
