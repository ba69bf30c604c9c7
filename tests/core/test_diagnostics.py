# topmark:header:start
#
#   project      : ErrFold
#   file         : test_diagnostics.py
#   file_relpath : tests/core/test_diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

from __future__ import annotations

from errfold.core.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
)
from tests.conftest import mark_config


@mark_config
def test_log_collects_in_order() -> None:
    log = DiagnosticLog()
    log.add_info("a")
    log.add_warning("b")
    log.add_error("c")
    log.add_warning("d")

    assert [d.message for d in log] == ["a", "b", "c", "d"]
    assert len(log) == 4
    assert log.stats() == DiagnosticStats(n_info=1, n_warning=2, n_error=1)
    assert log.has_warning()
    assert log.has_error()


@mark_config
def test_empty_log() -> None:
    log = DiagnosticLog()

    assert not log.has_warning()
    assert not log.has_error()
    assert log.stats() == DiagnosticStats(0, 0, 0)


@mark_config
def test_from_iterable_copies() -> None:
    source: list[Diagnostic] = [Diagnostic(DiagnosticLevel.WARNING, "w")]
    log: DiagnosticLog = DiagnosticLog.from_iterable(source)
    log.add_info("i")

    assert len(source) == 1
    assert compute_diagnostic_stats(log).n_info == 1
