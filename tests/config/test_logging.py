# topmark:header:start
#
#   project      : ErrFold
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE-aware logger and environment log level resolution."""

from __future__ import annotations

import logging as std_logging

import pytest

from errfold.config import logging
from tests.conftest import mark_config, parametrize


@mark_config
@parametrize(
    "raw, expected",
    [
        ("TRACE", logging.TRACE_LEVEL),
        ("debug", std_logging.DEBUG),
        (" warn ", std_logging.WARNING),
        ("10", 10),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None
) -> None:
    monkeypatch.setenv("ERRFOLD_LOG_LEVEL", raw)

    assert logging.resolve_env_log_level() == expected


@mark_config
def test_resolve_env_log_level_unset() -> None:
    assert logging.resolve_env_log_level() is None


@mark_config
def test_get_logger_has_trace(caplog: pytest.LogCaptureFixture) -> None:
    log: logging.ErrfoldLogger = logging.get_logger("errfold.tests.trace")

    with caplog.at_level(logging.TRACE_LEVEL, logger="errfold.tests.trace"):
        log.trace("candidate at line %d", 3)

    assert any(
        r.levelno == logging.TRACE_LEVEL and r.getMessage() == "candidate at line 3"
        for r in caplog.records
    )
    assert std_logging.getLevelName(logging.TRACE_LEVEL) == "TRACE"
