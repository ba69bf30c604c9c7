# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold package.

ErrFold finds Go ``if err != nil { ... }`` guard blocks whose body is simple
enough to collapse into a one-line summary. It exposes a pure scanner, a
version-aware result cache with debounced rescans, and a small CLI.
"""

from __future__ import annotations

from errfold.api import scan_path, scan_text
from errfold.cache import BlockCache
from errfold.config import Config, MutableConfig, load_config
from errfold.scanner import ErrorBlock, scan

__all__ = [
    "BlockCache",
    "Config",
    "ErrorBlock",
    "MutableConfig",
    "load_config",
    "scan",
    "scan_path",
    "scan_text",
]
