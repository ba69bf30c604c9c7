# topmark:header:start
#
#   project      : ErrFold
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ErrFold test suite.

Sets up typed mark wrappers, TRACE logging for the whole run, and shared
fixtures for Go sources and fake time.

Notes:
    Build configs with `errfold.config.MutableConfig`, then `freeze()` into a
    `errfold.config.Config`. Do not mutate a frozen `Config`; call
    `Config.thaw()`, edit, and `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from errfold.config import MutableConfig, logging

if TYPE_CHECKING:
    from pathlib import Path

    from errfold.config import Config

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_scanner: DecoratorType[Any] = as_typed_mark(pytest.mark.scanner)
mark_cache: DecoratorType[Any] = as_typed_mark(pytest.mark.cache)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_api: DecoratorType[Any] = as_typed_mark(pytest.mark.api)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_errfold_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the developer's ERRFOLD_LOG_LEVEL does not leak into test runs."""
    monkeypatch.delenv("ERRFOLD_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point user-config discovery at an empty directory."""
    home: Path = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE so rejected candidates show up in failure output."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


def lines_of(text: str) -> list[str]:
    """Split a dedented Go snippet into scanner lines (without the trailing empty line)."""
    out: list[str] = text.split("\n")
    if out and out[-1] == "":
        out.pop()
    return out


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and field overrides."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0) -> None:
        self.now: float = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        """Move time forward by ``ms`` milliseconds."""
        self.now += ms / 1000.0


@dataclass
class FakeTimer:
    """Timer that fires only when the test says so."""

    interval: float
    function: Callable[[], None]
    started: bool = False
    cancelled: bool = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback as the timer thread would (unless cancelled)."""
        if not self.cancelled:
            self.function()


@dataclass
class FakeTimerFactory:
    """Records every timer it creates."""

    timers: list[FakeTimer] = field(default_factory=lambda: [])

    def __call__(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        """Return timers that were started and not cancelled."""
        return [t for t in self.timers if t.started and not t.cancelled]


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_timers() -> FakeTimerFactory:
    """Provide a recording timer factory."""
    return FakeTimerFactory()


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test inside an empty project directory marked as config root."""
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "errfold.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd
