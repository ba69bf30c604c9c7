# topmark:header:start
#
#   project      : ErrFold
#   file         : test_block_cache.py
#   file_relpath : tests/cache/test_block_cache.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `BlockCache`: version/TTL reuse, invalidation and debouncing."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from errfold.cache import BlockCache, dispose_shared_cache, get_shared_cache
from errfold.scanner import ErrorBlock, scan
from tests.conftest import FakeClock, FakeTimerFactory, make_config, mark_cache

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

LINES: list[str] = ["if err != nil {", "\treturn err", "}"]
OTHER_LINES: list[str] = [
    "func f() error {",
    "\tif err != nil {",
    '\t\tlog.Print("x")',
    "\t}",
    "\treturn nil",
    "}",
]


class CountingScanner:
    """Scanner stub that records calls and delegates to the real scanner."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[str, ...], tuple[str, ...]]] = []

    def __call__(self, lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        pats: tuple[str, ...] = tuple(patterns)
        self.calls.append((tuple(lines), pats))
        return scan(lines, pats)


def _make_cache(
    clock: FakeClock,
    timers: FakeTimerFactory | None = None,
    *,
    ttl_ms: int = 5000,
) -> tuple[BlockCache, CountingScanner]:
    scanner = CountingScanner()
    cache = BlockCache(ttl_ms=ttl_ms, scanner=scanner, clock=clock, timer_factory=timers)
    return cache, scanner


@mark_cache
def test_hit_within_ttl_does_not_rescan(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    first: list[ErrorBlock] = cache.get_or_scan("a.go", 1, LINES)
    fake_clock.advance_ms(4999)
    second: list[ErrorBlock] = cache.get_or_scan("a.go", 1, LINES)

    assert first == second
    assert len(first) == 1
    assert len(scanner.calls) == 1
    assert cache.stats.hits == 1
    assert cache.stats.misses == 1
    assert cache.stats.lookups == 2


@mark_cache
def test_ttl_expiry_rescans(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    cache.get_or_scan("a.go", 1, LINES)
    fake_clock.advance_ms(5000)
    cache.get_or_scan("a.go", 1, LINES)

    assert len(scanner.calls) == 2


@mark_cache
def test_version_change_rescans_even_within_ttl(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    cache.get_or_scan("a.go", 1, LINES)
    blocks: list[ErrorBlock] = cache.get_or_scan("a.go", 2, OTHER_LINES)

    assert len(scanner.calls) == 2
    assert [(b.start_line, b.end_line) for b in blocks] == [(1, 3)]
    entry = cache.peek("a.go")
    assert entry is not None
    assert entry.version == 2


@mark_cache
def test_older_version_is_a_miss(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    cache.get_or_scan("a.go", 2, LINES)
    cache.get_or_scan("a.go", 1, LINES)

    assert len(scanner.calls) == 2


@mark_cache
def test_documents_are_independent(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    cache.get_or_scan("a.go", 1, LINES)
    cache.get_or_scan("b.go", 1, OTHER_LINES)
    cache.get_or_scan("a.go", 1, LINES)

    assert len(scanner.calls) == 2
    assert len(cache) == 2
    assert "a.go" in cache


@mark_cache
def test_invalidate_forces_rescan(fake_clock: FakeClock) -> None:
    cache, scanner = _make_cache(fake_clock)

    cache.get_or_scan("a.go", 1, LINES)
    cache.invalidate("a.go")
    cache.invalidate("never-seen.go")
    cache.get_or_scan("a.go", 1, LINES)

    assert len(scanner.calls) == 2


@mark_cache
def test_error_patterns_default_and_override(fake_clock: FakeClock) -> None:
    scanner = CountingScanner()
    cache = BlockCache(error_patterns=("fail",), scanner=scanner, clock=fake_clock)

    cache.get_or_scan("a.go", 1, LINES)
    cache.get_or_scan("b.go", 1, LINES, ["err"])

    assert scanner.calls[0][1] == ("fail",)
    assert scanner.calls[1][1] == ("err",)


@mark_cache
def test_returned_lists_are_copies(fake_clock: FakeClock) -> None:
    cache, _ = _make_cache(fake_clock)

    first: list[ErrorBlock] = cache.get_or_scan("a.go", 1, LINES)
    first.clear()

    assert len(cache.get_or_scan("a.go", 1, LINES)) == 1


@mark_cache
def test_debounce_coalesces_to_last_call(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    cache, scanner = _make_cache(fake_clock, fake_timers)
    received: list[list[ErrorBlock]] = []

    cache.schedule_debounced("a.go", 150, received.append, version=1, lines=["package x"])
    cache.schedule_debounced("a.go", 150, received.append, version=2, lines=OTHER_LINES)
    cache.schedule_debounced("a.go", 150, received.append, version=3, lines=LINES)

    assert len(fake_timers.timers) == 3
    assert [t.cancelled for t in fake_timers.timers] == [True, True, False]
    assert fake_timers.timers[-1].interval == pytest.approx(0.15)
    assert cache.has_pending("a.go")
    assert scanner.calls == []

    for timer in fake_timers.timers:
        timer.fire()

    assert len(scanner.calls) == 1
    assert scanner.calls[0][0] == tuple(LINES)
    assert len(received) == 1
    assert [(b.start_line, b.end_line) for b in received[0]] == [(0, 2)]
    assert not cache.has_pending("a.go")
    entry = cache.peek("a.go")
    assert entry is not None
    assert entry.version == 3


@mark_cache
def test_superseded_timer_firing_late_is_ignored(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    """A timer thread that wakes after being replaced must not deliver stale results."""
    cache, scanner = _make_cache(fake_clock, fake_timers)
    received: list[list[ErrorBlock]] = []

    cache.schedule_debounced("a.go", 10, received.append, version=1, lines=OTHER_LINES)
    stale = fake_timers.timers[0]
    cache.schedule_debounced("a.go", 10, received.append, version=2, lines=LINES)

    stale.function()

    assert scanner.calls == []
    assert received == []
    assert cache.has_pending("a.go")


@mark_cache
def test_debounce_per_document(fake_clock: FakeClock, fake_timers: FakeTimerFactory) -> None:
    cache, _ = _make_cache(fake_clock, fake_timers)
    received: dict[str, list[ErrorBlock]] = {}

    cache.schedule_debounced(
        "a.go", 150, lambda b: received.__setitem__("a", b), version=1, lines=LINES
    )
    cache.schedule_debounced(
        "b.go", 150, lambda b: received.__setitem__("b", b), version=1, lines=OTHER_LINES
    )

    assert len(fake_timers.live) == 2
    for timer in fake_timers.live:
        timer.fire()

    assert set(received) == {"a", "b"}


@mark_cache
def test_dispose_all_cancels_timers_and_clears_entries(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    cache, scanner = _make_cache(fake_clock, fake_timers)
    received: list[list[ErrorBlock]] = []

    cache.get_or_scan("a.go", 1, LINES)
    cache.schedule_debounced("b.go", 150, received.append, version=1, lines=LINES)
    cache.dispose_all()

    assert len(cache) == 0
    assert fake_timers.live == []
    assert not cache.has_pending("b.go")

    fake_timers.timers[0].function()
    assert received == []
    assert len(scanner.calls) == 1


@mark_cache
def test_close_drops_entry_and_timer(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    cache, _ = _make_cache(fake_clock, fake_timers)

    cache.get_or_scan("a.go", 1, LINES)
    cache.schedule_debounced("a.go", 150, lambda _b: None, version=2, lines=LINES)
    cache.close("a.go")

    assert "a.go" not in cache
    assert not cache.has_pending("a.go")
    assert fake_timers.timers[0].cancelled


@mark_cache
def test_context_manager_disposes(fake_clock: FakeClock) -> None:
    with BlockCache(clock=fake_clock) as cache:
        cache.get_or_scan("a.go", 1, LINES)
        assert len(cache) == 1
    assert len(cache) == 0


@mark_cache
def test_from_config_uses_ttl_and_patterns(fake_clock: FakeClock) -> None:
    scanner = CountingScanner()
    cache = BlockCache.from_config(
        make_config(cache_ttl_ms=10, error_patterns=["oops"]),
        scanner=scanner,
        clock=fake_clock,
    )

    assert cache.ttl_ms == 10
    cache.get_or_scan("a.go", 1, LINES)
    fake_clock.advance_ms(10)
    cache.get_or_scan("a.go", 1, LINES)

    assert len(scanner.calls) == 2
    assert scanner.calls[0][1] == ("oops",)


@mark_cache
def test_configured_debounce_is_the_default_delay(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    cache = BlockCache.from_config(
        make_config(debounce_ms=900), clock=fake_clock, timer_factory=fake_timers
    )

    assert cache.debounce_ms == 900
    cache.schedule_debounced("a.go", None, lambda _b: None, version=1, lines=LINES)
    cache.schedule_debounced("b.go", 20, lambda _b: None, version=1, lines=LINES)

    assert fake_timers.timers[0].interval == pytest.approx(0.9)
    assert fake_timers.timers[1].interval == pytest.approx(0.02)
    assert BlockCache().debounce_ms == 150


@mark_cache
def test_string_patterns_are_one_fragment(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    scanner = CountingScanner()
    cache = BlockCache(
        error_patterns="fail", scanner=scanner, clock=fake_clock, timer_factory=fake_timers
    )

    assert cache.error_patterns == ("fail",)
    cache.schedule_debounced(
        "a.go", 0, lambda _b: None, version=1, lines=LINES, error_patterns="err"
    )
    fake_timers.timers[0].fire()

    assert scanner.calls[0][1] == ("err",)


@mark_cache
def test_dispose_during_debounced_scan_drops_result(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    """A timer already past its supersession check must not deliver after disposal."""
    received: list[list[ErrorBlock]] = []

    def disposing_scanner(lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        cache.dispose_all()
        return scan(lines, patterns)

    cache = BlockCache(scanner=disposing_scanner, clock=fake_clock, timer_factory=fake_timers)
    cache.schedule_debounced("a.go", 150, received.append, version=1, lines=LINES)
    fake_timers.timers[0].fire()

    assert received == []
    assert "a.go" not in cache


@mark_cache
def test_close_during_debounced_scan_drops_result(
    fake_clock: FakeClock, fake_timers: FakeTimerFactory
) -> None:
    received: list[list[ErrorBlock]] = []

    def closing_scanner(lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        cache.close("a.go")
        return scan(lines, patterns)

    cache = BlockCache(scanner=closing_scanner, clock=fake_clock, timer_factory=fake_timers)
    cache.schedule_debounced("a.go", 150, received.append, version=1, lines=LINES)
    fake_timers.timers[0].fire()

    assert received == []
    assert "a.go" not in cache


@mark_cache
def test_close_during_direct_lookup_returns_blocks_without_storing(
    fake_clock: FakeClock,
) -> None:
    closed: list[str] = []

    def closing_scanner(lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        if not closed:
            closed.append("a.go")
            cache.close("a.go")
        return scan(lines, patterns)

    cache = BlockCache(scanner=closing_scanner, clock=fake_clock)
    blocks: list[ErrorBlock] = cache.get_or_scan("a.go", 1, LINES)

    assert len(blocks) == 1
    assert "a.go" not in cache

    cache.get_or_scan("a.go", 1, LINES)
    assert "a.go" in cache


@mark_cache
def test_real_timer_delivers_result() -> None:
    cache = BlockCache()
    done = threading.Event()
    received: list[list[ErrorBlock]] = []

    def _callback(blocks: list[ErrorBlock]) -> None:
        received.append(blocks)
        done.set()

    try:
        cache.schedule_debounced("a.go", 1, _callback, version=1, lines=LINES)
        assert done.wait(timeout=5.0)
    finally:
        cache.dispose_all()

    assert len(received) == 1
    assert len(received[0]) == 1


@mark_cache
def test_concurrent_lookups_scan_once() -> None:
    started = threading.Event()
    release = threading.Event()
    calls: list[int] = []

    def slow_scanner(lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        calls.append(1)
        started.set()
        release.wait(timeout=5.0)
        return scan(lines, patterns)

    cache = BlockCache(scanner=slow_scanner)
    results: list[list[ErrorBlock]] = []
    workers: list[threading.Thread] = [
        threading.Thread(target=lambda: results.append(cache.get_or_scan("a.go", 1, LINES)))
        for _ in range(4)
    ]
    workers[0].start()
    assert started.wait(timeout=5.0)
    for w in workers[1:]:
        w.start()
    release.set()
    for w in workers:
        w.join(timeout=5.0)

    assert len(calls) == 1
    assert len(results) == 4
    assert all(r == results[0] for r in results)


@mark_cache
def test_close_keeps_scan_lock_of_running_scan() -> None:
    """A lookup after close() waits for the scan that was already running."""
    started = threading.Event()
    release = threading.Event()
    guard = threading.Lock()
    running: list[int] = []
    peak: list[int] = []

    def slow_scanner(lines: Sequence[str], patterns: Iterable[str]) -> list[ErrorBlock]:
        with guard:
            running.append(1)
            peak.append(len(running))
        started.set()
        release.wait(timeout=5.0)
        with guard:
            running.pop()
        return scan(lines, patterns)

    cache = BlockCache(scanner=slow_scanner)
    first = threading.Thread(target=lambda: cache.get_or_scan("a.go", 1, LINES))
    second = threading.Thread(target=lambda: cache.get_or_scan("a.go", 1, LINES))

    first.start()
    assert started.wait(timeout=5.0)
    cache.close("a.go")
    second.start()
    second.join(timeout=0.2)
    release.set()
    first.join(timeout=5.0)
    second.join(timeout=5.0)

    assert len(peak) == 2
    assert max(peak) == 1
    entry = cache.peek("a.go")
    assert entry is not None
    assert entry.version == 1


@mark_cache
def test_shared_cache_is_explicit_and_disposable() -> None:
    dispose_shared_cache()
    shared: BlockCache = get_shared_cache()

    assert get_shared_cache() is shared
    shared.get_or_scan("a.go", 1, LINES)

    dispose_shared_cache()
    assert len(shared) == 0
    assert get_shared_cache() is not shared
    dispose_shared_cache()
