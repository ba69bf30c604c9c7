# topmark:header:start
#
#   project      : ErrFold
#   file         : getters.py
#   file_relpath : src/errfold/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

Checked getters validate the expected shape and record **warnings** in a
`DiagnosticLog` (and also log a warning). They are used when parsing config
files so that user mistakes are surfaced without crashing or changing
defaulting behavior: a missing or invalid value yields ``None`` (or ``[]``),
which the merge layer treats as "not set".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from .guards import is_any_list

if TYPE_CHECKING:
    from errfold.config.logging import ErrfoldLogger
    from errfold.core.diagnostics import DiagnosticLog

    from .types import TomlTable


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: ErrfoldLogger,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`.

    Integers are **not** coerced.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected bool in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected bool in {loc}, got {type(value).__name__}: {value}")
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: ErrfoldLogger,
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` (when given) are rejected with a warning.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if isinstance(value, bool):
        logger.warning("Expected int in %s, got bool: %r", loc, value)
        diagnostics.add_warning(f"Expected int in {loc}, got bool: {value!r}")
        return None

    if not isinstance(value, int):
        logger.warning("Expected int in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected int in {loc}, got {type(value).__name__}: {value!r}")
        return None

    if minimum is not None and value < minimum:
        logger.warning("Value in %s must be >= %d, got %d", loc, minimum, value)
        diagnostics.add_warning(f"Value in {loc} must be >= {minimum}, got {value}")
        return None

    return value


def get_string_list_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: ErrfoldLogger,
) -> list[str] | None:
    """Extract a list of strings from a TOML table, recording a warning when the type is incorrect.

    Behavior:
        - If the key is missing, returns None.
        - If the value is not a list, warns and returns None.
        - Non-string items are ignored; each emits a warning and a diagnostic.

    Args:
        table (TomlTable): TOML table to query.
        key (str): Key to extract.
        where (str): TOML location prefix (e.g. "[detector]").
        diagnostics (DiagnosticLog): DiagnosticLog to record warnings.
        logger (ErrfoldLogger): Logger for emitting warnings.

    Returns:
        list[str] | None: Filtered list containing only string entries, or None.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if not is_any_list(value):
        logger.warning("Expected list in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected list in {loc}, got {type(value).__name__}: {value!r}")
        return None

    out: list[str] = []
    for v in value:
        if isinstance(v, str):
            out.append(v)
        else:
            logger.warning("Ignoring non-string entry in %s: %r", loc, v)
            diagnostics.add_warning(f"Ignoring non-string entry in {loc}: {v!r}")

    return out
