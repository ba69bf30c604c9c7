# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for ErrFold configuration.

ErrFold uses `tomlkit` for parsing and rendering.

Typical flow:
    1. Load runtime defaults (``load_defaults_dict``).
    2. Load project/user TOML files (``load_toml_dict``).
    3. Read values with checked getters that record diagnostics.
    4. Serialize back to TOML when needed (``to_toml``).
"""

from __future__ import annotations

from .getters import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
)
from .guards import get_table_value, is_any_list, is_str_list, is_toml_table
from .loaders import load_defaults_dict, load_toml_dict
from .render import nest_toml_under_section, to_toml
from .types import TomlTable

__all__: list[str] = [
    "TomlTable",
    "get_bool_value_or_none_checked",
    "get_int_value_or_none_checked",
    "get_string_list_value_or_none_checked",
    "get_table_value",
    "is_any_list",
    "is_str_list",
    "is_toml_table",
    "load_defaults_dict",
    "load_toml_dict",
    "nest_toml_under_section",
    "to_toml",
]
