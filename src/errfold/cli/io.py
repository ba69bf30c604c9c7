# topmark:header:start
#
#   project      : ErrFold
#   file         : io.py
#   file_relpath : src/errfold/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input resolution for the ``scan`` command.

Positional PATHS are expanded into sources: files are taken as given,
directories are searched recursively for Go files, and ``-`` stands for the
content of STDIN. Read failures are mapped to CLI errors here, at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from errfold.cli.errors import (
    ErrfoldEncodingError,
    ErrfoldFileNotFoundError,
    ErrfoldIOError,
    ErrfoldUsageError,
)
from errfold.config.logging import get_logger
from errfold.constants import GO_SOURCE_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Iterable

    from errfold.config.logging import ErrfoldLogger

logger: ErrfoldLogger = get_logger(__name__)

STDIN_MARKER = "-"
STDIN_LABEL = "<stdin>"


@dataclass(frozen=True)
class Source:
    """One document to scan.

    Attributes:
        label (str): Name used in output (path, or ``<stdin>``).
        path (Path | None): File path; None for STDIN.
    """

    label: str
    path: Path | None = None

    @property
    def is_stdin(self) -> bool:
        """Return True if this source reads from STDIN."""
        return self.path is None


def collect_sources(paths: Iterable[str]) -> list[Source]:
    """Expand positional PATHS into sources, preserving argument order.

    Duplicate files are reported once.

    Raises:
        ErrfoldUsageError: If ``-`` is given more than once.
        ErrfoldFileNotFoundError: If a path does not exist.
    """
    sources: list[Source] = []
    seen: set[Path] = set()
    stdin_seen = False
    for raw in paths:
        if raw == STDIN_MARKER:
            if stdin_seen:
                raise ErrfoldUsageError("'-' (STDIN) may be given only once.")
            stdin_seen = True
            sources.append(Source(label=STDIN_LABEL))
            continue

        p = Path(raw)
        if not p.exists():
            raise ErrfoldFileNotFoundError(f"No such file or directory: {raw}")

        candidates: list[Path] = (
            sorted(f for f in p.rglob(f"*{GO_SOURCE_SUFFIX}") if f.is_file())
            if p.is_dir()
            else [p]
        )
        logger.debug("Path %s expanded to %d file(s)", raw, len(candidates))
        for f in candidates:
            key: Path = f.resolve()
            if key in seen:
                continue
            seen.add(key)
            sources.append(Source(label=str(f), path=f))
    return sources


def read_source(source: Source) -> str:
    """Return the text of ``source`` decoded as UTF-8.

    Raises:
        ErrfoldEncodingError: If the content is not valid UTF-8.
        ErrfoldIOError: If the file cannot be read.
    """
    if source.path is None:
        return click.get_text_stream("stdin").read()
    try:
        return source.path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ErrfoldEncodingError(f"{source.label}: not valid UTF-8 ({e.reason})") from e
    except FileNotFoundError as e:
        raise ErrfoldFileNotFoundError(f"No such file: {source.label}") from e
    except OSError as e:
        raise ErrfoldIOError(f"{source.label}: {e.strerror or e}") from e
