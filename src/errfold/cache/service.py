# topmark:header:start
#
#   project      : ErrFold
#   file         : service.py
#   file_relpath : src/errfold/cache/service.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scan result cache keyed by document identity.

A [`BlockCache`][errfold.cache.service.BlockCache] remembers the last scan of
each document together with the document version it was computed for and the
time it was stored. A stored result is reused only while the requested version
is identical and the entry is younger than the TTL; anything else triggers a
fresh scan, so a miss never serves stale blocks.

Debounced rescans run on timer threads (`threading.Timer` by default). Shared
maps are therefore guarded by an `RLock`, and scans of one document are
serialized by a per-document lock. Clock and timer factory are injectable so
tests can drive time and timers deterministically.

Notes:
    * Changing the error patterns does not invalidate stored entries; callers
      that change configuration should call `invalidate()` or `dispose_all()`.
    * Cached block lists are stored as tuples and handed out as fresh lists.
    * `close()` and `dispose_all()` bump a generation counter. A scan that
      started before the bump still returns its blocks to a direct caller but
      is not stored, and a debounced scan in that situation is not delivered.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING, Protocol

from errfold.config.logging import get_logger
from errfold.constants import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_ERROR_PATTERNS,
)
from errfold.scanner import scan

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from errfold.config import Config
    from errfold.config.logging import ErrfoldLogger
    from errfold.scanner import ErrorBlock

    Scanner = Callable[[Sequence[str], Iterable[str]], list[ErrorBlock]]
    TimerFactory = Callable[[float, Callable[[], None]], "TimerLike"]

logger: ErrfoldLogger = get_logger(__name__)


class TimerLike(Protocol):
    """Minimal timer surface used for debouncing (satisfied by `threading.Timer`)."""

    def start(self) -> None:
        """Arm the timer."""
        ...

    def cancel(self) -> None:
        """Disarm the timer; a cancelled timer never fires."""
        ...


def _daemon_timer(interval_s: float, function: Callable[[], None]) -> TimerLike:
    timer = threading.Timer(interval_s, function)
    timer.daemon = True
    return timer


def _as_patterns(error_patterns: Iterable[str]) -> tuple[str, ...]:
    # A bare string is one fragment, not a sequence of one-letter fragments
    if isinstance(error_patterns, str):
        return (error_patterns,)
    return tuple(error_patterns)


@dataclass(frozen=True)
class CacheEntry:
    """Stored scan result for one document.

    Attributes:
        version (int): Document version the blocks were computed for.
        blocks (tuple[ErrorBlock, ...]): The scan result.
        timestamp_ms (float): Clock reading (milliseconds) when the entry was stored.
    """

    version: int
    blocks: tuple[ErrorBlock, ...]
    timestamp_ms: float


@dataclass(frozen=True)
class CacheStats:
    """Hit/miss counters of a `BlockCache`."""

    hits: int
    misses: int

    @property
    def lookups(self) -> int:
        """Return the total number of `get_or_scan` calls."""
        return self.hits + self.misses


class BlockCache:
    """Per-document memoization of scan results with debounced rescans.

    Args:
        ttl_ms (int): Maximum age of a reusable entry, in milliseconds.
        error_patterns (Iterable[str]): Fragments used when a call passes none.
        debounce_ms (int): Delay used by `schedule_debounced` when the call
            passes none.
        scanner (Scanner | None): Scan function; defaults to `errfold.scanner.scan`.
        clock (Callable[[], float] | None): Monotonic clock returning seconds.
        timer_factory (TimerFactory | None): Builds a timer from
            ``(interval_seconds, function)``; defaults to a daemon `threading.Timer`.
    """

    def __init__(
        self,
        *,
        ttl_ms: int = DEFAULT_CACHE_TTL_MS,
        error_patterns: Iterable[str] = DEFAULT_ERROR_PATTERNS,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        scanner: Scanner | None = None,
        clock: Callable[[], float] | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.ttl_ms: int = ttl_ms
        self.error_patterns: tuple[str, ...] = _as_patterns(error_patterns)
        self.debounce_ms: int = debounce_ms
        self._scanner: Scanner = scanner or scan
        self._clock: Callable[[], float] = clock or time.monotonic
        self._timer_factory: TimerFactory = timer_factory or _daemon_timer

        self._lock = RLock()
        self._entries: dict[str, CacheEntry] = {}
        self._timers: dict[str, TimerLike] = {}
        self._scan_locks: dict[str, threading.Lock] = {}
        # Bumped by dispose_all() (global) and close() (per document)
        self._generation: int = 0
        self._doc_generations: dict[str, int] = {}
        self._hits: int = 0
        self._misses: int = 0

    @classmethod
    def from_config(cls, config: Config, **kwargs: object) -> BlockCache:
        """Create a cache using the TTL, error patterns and debounce delay of ``config``.

        Extra keyword arguments (``scanner``, ``clock``, ``timer_factory``) are
        passed through to the constructor.
        """
        return cls(
            ttl_ms=config.cache_ttl_ms,
            error_patterns=config.error_patterns,
            debounce_ms=config.debounce_ms,
            **kwargs,  # type: ignore[arg-type]
        )

    def __enter__(self) -> BlockCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose_all()

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def _is_fresh(self, entry: CacheEntry | None, version: int) -> bool:
        if entry is None or entry.version != version:
            return False
        return self._now_ms() - entry.timestamp_ms < self.ttl_ms

    def _scan_lock_for(self, doc_id: str) -> threading.Lock:
        with self._lock:
            lock: threading.Lock | None = self._scan_locks.get(doc_id)
            if lock is None:
                lock = threading.Lock()
                self._scan_locks[doc_id] = lock
            return lock

    def _generation_of(self, doc_id: str) -> tuple[int, int]:
        with self._lock:
            return self._generation, self._doc_generations.get(doc_id, 0)

    def _drop_idle_scan_lock(self, doc_id: str) -> None:
        # Caller holds self._lock. A lock held by a running scan stays so that
        # the next lookup of doc_id still waits for that scan.
        lock: threading.Lock | None = self._scan_locks.get(doc_id)
        if lock is not None and lock.acquire(blocking=False):
            lock.release()
            del self._scan_locks[doc_id]

    # ------------------------------ Lookups ------------------------------
    def get_or_scan(
        self,
        doc_id: str,
        version: int,
        lines: Sequence[str],
        error_patterns: Iterable[str] | None = None,
    ) -> list[ErrorBlock]:
        """Return the blocks of ``doc_id`` at ``version``, scanning on a miss.

        Args:
            doc_id (str): Opaque document identity.
            version (int): Document version the caller holds.
            lines (Sequence[str]): Current document lines.
            error_patterns (Iterable[str] | None): Fragments for this scan; the
                cache's own patterns are used when None.

        Returns:
            list[ErrorBlock]: Blocks for the requested version.
        """
        blocks, _current = self._lookup(
            doc_id, version, lines, error_patterns, self._generation_of(doc_id)
        )
        return blocks

    def _lookup(
        self,
        doc_id: str,
        version: int,
        lines: Sequence[str],
        error_patterns: Iterable[str] | None,
        generation: tuple[int, int],
    ) -> tuple[list[ErrorBlock], bool]:
        """Resolve a lookup started at ``generation``.

        Returns:
            tuple[list[ErrorBlock], bool]: The blocks, and False when the document
                was closed or the cache disposed since ``generation`` (the result
                was then not stored).
        """
        with self._lock:
            entry: CacheEntry | None = self._entries.get(doc_id)
            if self._is_fresh(entry, version) and entry is not None:
                self._hits += 1
                logger.trace("Cache hit for %s at version %d", doc_id, version)
                return list(entry.blocks), self._generation_of(doc_id) == generation

        with self._scan_lock_for(doc_id):
            # Another thread may have stored this version while we waited
            with self._lock:
                entry = self._entries.get(doc_id)
                if self._is_fresh(entry, version) and entry is not None:
                    self._hits += 1
                    return list(entry.blocks), self._generation_of(doc_id) == generation
                self._misses += 1

            logger.debug("Cache miss for %s at version %d; scanning", doc_id, version)
            patterns: Iterable[str] = (
                self.error_patterns if error_patterns is None else error_patterns
            )
            blocks: list[ErrorBlock] = self._scanner(lines, patterns)

            with self._lock:
                if self._generation_of(doc_id) != generation:
                    logger.debug(
                        "Discarding scan of %s at version %d: closed while scanning",
                        doc_id,
                        version,
                    )
                    return list(blocks), False
                self._entries[doc_id] = CacheEntry(
                    version=version,
                    blocks=tuple(blocks),
                    timestamp_ms=self._now_ms(),
                )
            return list(blocks), True

    def peek(self, doc_id: str) -> CacheEntry | None:
        """Return the stored entry for ``doc_id`` without checking freshness."""
        with self._lock:
            return self._entries.get(doc_id)

    @property
    def stats(self) -> CacheStats:
        """Return a snapshot of the hit/miss counters."""
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, doc_id: object) -> bool:
        with self._lock:
            return doc_id in self._entries

    # ---------------------------- Invalidation ----------------------------
    def invalidate(self, doc_id: str) -> None:
        """Drop the stored entry of ``doc_id``, if any."""
        with self._lock:
            if self._entries.pop(doc_id, None) is not None:
                logger.debug("Invalidated cache entry for %s", doc_id)

    def close(self, doc_id: str) -> None:
        """Forget ``doc_id`` entirely: cancel its pending timer and drop its entry."""
        with self._lock:
            timer: TimerLike | None = self._timers.pop(doc_id, None)
            if timer is not None:
                timer.cancel()
            self._entries.pop(doc_id, None)
            self._doc_generations[doc_id] = self._doc_generations.get(doc_id, 0) + 1
            self._drop_idle_scan_lock(doc_id)
        logger.debug("Closed document %s", doc_id)

    def dispose_all(self) -> None:
        """Cancel every pending timer and clear every entry."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            n_timers: int = len(self._timers)
            n_entries: int = len(self._entries)
            self._timers.clear()
            self._entries.clear()
            self._generation += 1
            self._doc_generations.clear()
            for doc_id in list(self._scan_locks):
                self._drop_idle_scan_lock(doc_id)
        logger.debug("Disposed cache: %d timer(s), %d entr(y/ies)", n_timers, n_entries)

    # ----------------------------- Debouncing -----------------------------
    def schedule_debounced(
        self,
        doc_id: str,
        delay_ms: int | None,
        callback: Callable[[list[ErrorBlock]], None],
        *,
        version: int,
        lines: Sequence[str],
        error_patterns: Iterable[str] | None = None,
    ) -> None:
        """Schedule a rescan of ``doc_id`` after ``delay_ms`` of inactivity.

        A pending timer for the same document is cancelled and replaced, so a
        burst of calls results in one scan with the arguments of the last call.
        When the timer fires, `get_or_scan` runs on the timer's thread and its
        result is passed to ``callback``, unless the document was closed or the
        cache disposed in the meantime.

        Args:
            doc_id (str): Opaque document identity.
            delay_ms (int | None): Inactivity delay in milliseconds; None uses
                the cache's ``debounce_ms``.
            callback (Callable[[list[ErrorBlock]], None]): Receives the blocks.
            version (int): Document version at scheduling time.
            lines (Sequence[str]): Document lines at scheduling time.
            error_patterns (Iterable[str] | None): Fragments for the scan.
        """
        snapshot: tuple[str, ...] = tuple(lines)
        patterns: tuple[str, ...] | None = (
            None if error_patterns is None else _as_patterns(error_patterns)
        )
        delay: int = self.debounce_ms if delay_ms is None else delay_ms
        timer: TimerLike

        def _fire() -> None:
            with self._lock:
                if self._timers.get(doc_id) is not timer:
                    # Superseded or cancelled after the timer thread woke up
                    return
                del self._timers[doc_id]
                generation: tuple[int, int] = self._generation_of(doc_id)
            logger.trace("Debounce timer fired for %s at version %d", doc_id, version)
            blocks, current = self._lookup(doc_id, version, snapshot, patterns, generation)
            if not current or self._generation_of(doc_id) != generation:
                logger.debug("Dropping debounced result for closed document %s", doc_id)
                return
            callback(blocks)

        with self._lock:
            previous: TimerLike | None = self._timers.pop(doc_id, None)
            if previous is not None:
                previous.cancel()
                logger.trace("Replaced pending debounce timer for %s", doc_id)
            timer = self._timer_factory(max(delay, 0) / 1000.0, _fire)
            self._timers[doc_id] = timer
            timer.start()

    def has_pending(self, doc_id: str) -> bool:
        """Return True if a debounce timer is pending for ``doc_id``."""
        with self._lock:
            return doc_id in self._timers


# --------------------------- Shared instance ---------------------------

_shared_lock = RLock()
_shared_cache: BlockCache | None = None


def get_shared_cache() -> BlockCache:
    """Return the process-wide `BlockCache`, creating it on first use."""
    global _shared_cache
    with _shared_lock:
        if _shared_cache is None:
            _shared_cache = BlockCache()
            logger.debug("Created shared block cache")
        return _shared_cache


def dispose_shared_cache() -> None:
    """Dispose of the process-wide `BlockCache`, if one was created."""
    global _shared_cache
    with _shared_lock:
        if _shared_cache is not None:
            _shared_cache.dispose_all()
            _shared_cache = None
