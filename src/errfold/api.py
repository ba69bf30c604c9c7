# topmark:header:start
#
#   project      : ErrFold
#   file         : api.py
#   file_relpath : src/errfold/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API for scanning text and files.

Use these helpers from Python code when you want a ready-made
[`BlockReport`][errfold.views.BlockReport] rather than bare descriptors:

```python
from errfold.api import scan_text

report = scan_text(source)
for block in report.blocks:
    print(block.start_line, block.collapsed_text)
```

`scan_path()` discovers configuration next to the file (``errfold.toml`` or
``pyproject.toml`` ``[tool.errfold]``) unless an explicit `Config` is given.
Read errors (`OSError`, `UnicodeDecodeError`) propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from errfold.config import load_config
from errfold.config.logging import get_logger
from errfold.constants import DEFAULT_ERROR_PATTERNS, ERRFOLD_VERSION
from errfold.scanner import scan, split_lines
from errfold.views import BlockReport, hints

if TYPE_CHECKING:
    from collections.abc import Iterable

    from errfold.config import Config
    from errfold.config.logging import ErrfoldLogger
    from errfold.scanner import ErrorBlock

logger: ErrfoldLogger = get_logger(__name__)

__all__: list[str] = [
    "scan_path",
    "scan_text",
    "version",
]


def scan_text(
    text: str,
    *,
    error_patterns: Iterable[str] | None = None,
    path: str = "<text>",
    with_hints: bool = True,
) -> BlockReport:
    """Scan source ``text`` and return a report.

    Args:
        text (str): Document text.
        error_patterns (Iterable[str] | None): Error-variable fragments;
            ``("err", "error")`` when None.
        path (str): Label stored in the report.
        with_hints (bool): Whether to compute inline hints.

    Returns:
        BlockReport: Detected blocks (and hints) for ``text``.
    """
    lines: list[str] = split_lines(text)
    patterns: Iterable[str] = DEFAULT_ERROR_PATTERNS if error_patterns is None else error_patterns
    blocks: list[ErrorBlock] = scan(lines, patterns)
    return BlockReport(
        path=path,
        blocks=tuple(blocks),
        hints=tuple(hints(blocks, lines)) if with_hints else (),
    )


def scan_path(path: Path | str, *, config: Config | None = None) -> BlockReport:
    """Read a UTF-8 file and return its report.

    Args:
        path (Path | str): File to scan.
        config (Config | None): Effective configuration; discovered from the
            file's directory when None.

    Returns:
        BlockReport: Detected blocks for the file.
    """
    file_path: Path = Path(path)
    if config is None:
        config = load_config(anchor=file_path)
    logger.debug("Scanning %s", file_path)
    text: str = file_path.read_text(encoding="utf-8")
    return scan_text(
        text,
        error_patterns=config.error_patterns,
        path=str(file_path),
        with_hints=config.show_collapsed_hint,
    )


def version() -> str:
    """Return the installed ErrFold version."""
    return ERRFOLD_VERSION
