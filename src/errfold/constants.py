# topmark:header:start
#
#   project      : ErrFold
#   file         : constants.py
#   file_relpath : src/errfold/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ErrFold Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

ERRFOLD_VERSION: str = get_version("errfold")

# Config file names looked up during discovery
DEFAULT_TOML_CONFIG_NAME: Final[str] = "errfold.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "errfold"

# Environment variable consulted by `setup_logging()`
LOG_LEVEL_ENV_VAR: Final[str] = "ERRFOLD_LOG_LEVEL"

# Detector defaults
DEFAULT_ERROR_PATTERNS: Final[tuple[str, ...]] = ("err", "error")
MAX_BODY_STATEMENTS: Final[int] = 3
MAX_RETURN_STATEMENTS: Final[int] = 1
COLLAPSED_BODY_MAX_LENGTH: Final[int] = 50
ELLIPSIS: Final[str] = "..."
FALLBACK_CONDITION: Final[str] = "err != nil"

# Cache defaults (milliseconds)
DEFAULT_CACHE_TTL_MS: Final[int] = 5000
DEFAULT_DEBOUNCE_MS: Final[int] = 150

# Source files picked up when a directory is passed to the CLI
GO_SOURCE_SUFFIX: Final[str] = ".go"
