# topmark:header:start
#
#   project      : ErrFold
#   file         : test_io.py
#   file_relpath : tests/config/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML I/O helpers: loaders, checked getters and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tomlkit

from errfold.config.io import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_table_value,
    is_str_list,
    load_defaults_dict,
    load_toml_dict,
    nest_toml_under_section,
    to_toml,
)
from errfold.config.logging import get_logger
from errfold.core.diagnostics import DiagnosticLevel, DiagnosticLog
from tests.conftest import mark_config

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)


@mark_config
def test_defaults_dict_is_fresh_each_call() -> None:
    first = load_defaults_dict()
    first["detector"]["error_patterns"].append("oops")

    assert load_defaults_dict()["detector"]["error_patterns"] == ["err", "error"]
    assert load_defaults_dict()["cache"] == {"ttl_ms": 5000, "debounce_ms": 150}


@mark_config
def test_load_toml_dict_reads_plain_values(tmp_path: Path) -> None:
    f: Path = tmp_path / "errfold.toml"
    f.write_text('[detector]\nerror_patterns = ["err"]\n[cache]\nttl_ms = 10\n', "utf-8")

    data = load_toml_dict(f)

    assert data == {"detector": {"error_patterns": ["err"]}, "cache": {"ttl_ms": 10}}
    assert type(data["detector"]) is dict


@mark_config
def test_load_toml_dict_failures_yield_empty(tmp_path: Path) -> None:
    bad: Path = tmp_path / "bad.toml"
    bad.write_text("[detector\nerror_patterns = ", "utf-8")
    binary: Path = tmp_path / "binary.toml"
    binary.write_bytes(b"\xff\xfe\x00bad")

    assert load_toml_dict(bad) == {}
    assert load_toml_dict(binary) == {}
    assert load_toml_dict(tmp_path / "missing.toml") == {}


@mark_config
def test_checked_getters_record_warnings() -> None:
    diags = DiagnosticLog()
    table = {"flag": 1, "count": True, "neg": -5, "ok": 7, "items": ["a", 3, "b"], "s": "x"}

    assert get_bool_value_or_none_checked(
        table, "flag", where="[t]", diagnostics=diags, logger=logger
    ) is None
    assert get_int_value_or_none_checked(
        table, "count", where="[t]", diagnostics=diags, logger=logger
    ) is None
    assert get_int_value_or_none_checked(
        table, "neg", where="[t]", diagnostics=diags, logger=logger, minimum=0
    ) is None
    assert get_int_value_or_none_checked(
        table, "ok", where="[t]", diagnostics=diags, logger=logger, minimum=0
    ) == 7
    assert get_string_list_value_or_none_checked(
        table, "items", where="[t]", diagnostics=diags, logger=logger
    ) == ["a", "b"]
    assert get_string_list_value_or_none_checked(
        table, "s", where="[t]", diagnostics=diags, logger=logger
    ) is None
    assert get_string_list_value_or_none_checked(
        table, "absent", where="[t]", diagnostics=diags, logger=logger
    ) is None

    assert len(diags) == 5
    assert all(d.level is DiagnosticLevel.WARNING for d in diags)
    assert diags.stats().n_warning == 5
    assert any("[t].neg" in d.message for d in diags)


@mark_config
def test_table_helpers() -> None:
    assert get_table_value({"a": {"b": 1}}, "a") == {"b": 1}
    assert get_table_value({"a": [1]}, "a") == {}
    assert get_table_value({}, "a") == {}
    assert is_str_list(["a", "b"])
    assert not is_str_list(["a", 1])


@mark_config
def test_to_toml_strips_none_and_round_trips() -> None:
    rendered: str = to_toml({"cache": {"ttl_ms": 10, "debounce_ms": None}})

    assert "debounce_ms" not in rendered
    assert tomlkit.parse(rendered).unwrap() == {"cache": {"ttl_ms": 10}}


@mark_config
def test_nest_under_section() -> None:
    rendered: str = nest_toml_under_section({"cache": {"ttl_ms": 1}}, "tool.errfold")

    assert tomlkit.parse(rendered).unwrap() == {"tool": {"errfold": {"cache": {"ttl_ms": 1}}}}
