# topmark:header:start
#
#   project      : ErrFold
#   file         : render.py
#   file_relpath : src/errfold/config/io/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render TOML for config dumps.

TOML has no `null` value, so `None` entries are stripped during rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit

from errfold.config.logging import get_logger

if TYPE_CHECKING:
    from errfold.config.logging import ErrfoldLogger

    from .types import TomlTable

logger: ErrfoldLogger = get_logger(__name__)


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings/lists."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            k: str = k_any if isinstance(k_any, str) else str(k_any)
            out[k] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]

    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def nest_toml_under_section(toml_dict: TomlTable, section: str) -> str:
    """Render ``toml_dict`` nested under a dotted section path.

    Used to produce a ``[tool.errfold]`` block for ``pyproject.toml``.

    Args:
        toml_dict (TomlTable): TOML mapping to render.
        section (str): Dotted section path, e.g. ``"tool.errfold"``.

    Returns:
        str: The rendered TOML document as a string.
    """
    nested: TomlTable = dict(toml_dict)
    for part in reversed(section.split(".")):
        nested = {part: nested}
    return to_toml(nested)
