# topmark:header:start
#
#   project      : ErrFold
#   file         : loaders.py
#   file_relpath : src/errfold/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides the runtime defaults (defined in code, no I/O) and a
reader for on-disk TOML files (``errfold.toml`` / ``pyproject.toml``).
Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from errfold.config.keys import Toml
from errfold.config.logging import get_logger
from errfold.constants import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_ERROR_PATTERNS,
)

if TYPE_CHECKING:
    from pathlib import Path

    from errfold.config.logging import ErrfoldLogger

    from .types import TomlTable

logger: ErrfoldLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return ErrFold's **runtime defaults** as a Python dict.

    This function performs **no I/O**. The returned value is a new dict so
    callers can mutate it safely.
    """
    return {
        Toml.SECTION_DETECTOR: {
            Toml.KEY_ERROR_PATTERNS: list(DEFAULT_ERROR_PATTERNS),
        },
        Toml.SECTION_CACHE: {
            Toml.KEY_TTL_MS: DEFAULT_CACHE_TTL_MS,
            Toml.KEY_DEBOUNCE_MS: DEFAULT_DEBOUNCE_MS,
        },
        Toml.SECTION_DISPLAY: {
            Toml.KEY_SHOW_COLLAPSED_HINT: True,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``errfold.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except UnicodeDecodeError as e:
        logger.error("Error decoding %s as UTF-8: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}
