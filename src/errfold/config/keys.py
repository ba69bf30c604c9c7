# topmark:header:start
#
#   project      : ErrFold
#   file         : keys.py
#   file_relpath : src/errfold/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for ErrFold configuration.

These constants define the external configuration schema as it appears in
``errfold.toml`` and in ``[tool.errfold]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by ErrFold configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [detector]
    SECTION_DETECTOR: Final[str] = "detector"

    KEY_ERROR_PATTERNS: Final[str] = "error_patterns"

    # [cache]
    SECTION_CACHE: Final[str] = "cache"

    KEY_TTL_MS: Final[str] = "ttl_ms"
    KEY_DEBOUNCE_MS: Final[str] = "debounce_ms"

    # [display]
    SECTION_DISPLAY: Final[str] = "display"

    KEY_SHOW_COLLAPSED_HINT: Final[str] = "show_collapsed_hint"
