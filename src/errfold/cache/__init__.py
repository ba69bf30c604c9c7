# topmark:header:start
#
#   project      : ErrFold
#   file         : __init__.py
#   file_relpath : src/errfold/cache/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version-aware scan result cache with per-document debounced rescans.

Construct a [`BlockCache`][errfold.cache.service.BlockCache] explicitly and
dispose of it when done. A process-wide instance exists only behind the
`get_shared_cache()` / `dispose_shared_cache()` pair.
"""

from __future__ import annotations

from errfold.cache.service import (
    BlockCache,
    CacheEntry,
    CacheStats,
    TimerLike,
    dispose_shared_cache,
    get_shared_cache,
)

__all__ = [
    "BlockCache",
    "CacheEntry",
    "CacheStats",
    "TimerLike",
    "dispose_shared_cache",
    "get_shared_cache",
]
