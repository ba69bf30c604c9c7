# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for ErrFold.

Build configs using `MutableConfig` (mutable), then `freeze()` into a `Config`
for runtime use. To tweak a frozen `Config`, call `Config.thaw()`, edit the
returned `MutableConfig`, then `freeze()` again. `load_config()` wraps
discovery, merging, overrides and freezing in one call.
"""

from __future__ import annotations

from errfold.config.model import Config, MutableConfig, load_config

__all__ = [
    "Config",
    "MutableConfig",
    "load_config",
]
