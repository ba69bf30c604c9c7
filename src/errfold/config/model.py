# topmark:header:start
#
#   project      : ErrFold
#   file         : model.py
#   file_relpath : src/errfold/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot read by the scanner, the cache and the CLI.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Layering (lowest → highest precedence):
    1) Built-in defaults
    2) User config (XDG / legacy)
    3) Project configs discovered upward **root → current**; within a directory
       ``pyproject.toml`` (``[tool.errfold]``) is merged first, then ``errfold.toml``
    4) Extra config files passed explicitly (in the order provided)
    5) Programmatic / CLI overrides (`MutableConfig.apply_overrides`)

Fields of `MutableConfig` are tri-state: ``None`` means "not set by this layer"
so that `MutableConfig.merge_with` never clobbers a lower layer with an absent value.

Configuration is re-read on every `load_config` call; nothing here is memoized,
so edits to config files take effect on the next load.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from errfold.config.io import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from errfold.config.keys import Toml
from errfold.config.logging import get_logger
from errfold.constants import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_ERROR_PATTERNS,
    DEFAULT_TOML_CONFIG_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from errfold.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from errfold.config.io import TomlTable
    from errfold.config.logging import ErrfoldLogger

logger: ErrfoldLogger = get_logger(__name__)


def _now() -> str:
    return datetime.now().isoformat()


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for ErrFold.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the snapshot was created.
        config_files (tuple[Path | str, ...]): Config sources merged into this snapshot.
        error_patterns (tuple[str, ...]): Error-variable name fragments; a guard
            header matches when its variable name contains one of them.
        cache_ttl_ms (int): Time-to-live of cached scan results.
        debounce_ms (int): Inactivity delay before a debounced rescan fires.
        show_collapsed_hint (bool): Whether human output includes the inline hint text.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading,
            merging or sanitizing config.
    """

    timestamp: str
    config_files: tuple[Path | str, ...]
    error_patterns: tuple[str, ...]
    cache_ttl_ms: int
    debounce_ms: int
    show_collapsed_hint: bool
    diagnostics: tuple[Diagnostic, ...]

    def to_toml_dict(self) -> TomlTable:
        """Convert this immutable Config into a TOML-serializable dict."""
        return {
            Toml.SECTION_DETECTOR: {
                Toml.KEY_ERROR_PATTERNS: list(self.error_patterns),
            },
            Toml.SECTION_CACHE: {
                Toml.KEY_TTL_MS: self.cache_ttl_ms,
                Toml.KEY_DEBOUNCE_MS: self.debounce_ms,
            },
            Toml.SECTION_DISPLAY: {
                Toml.KEY_SHOW_COLLAPSED_HINT: self.show_collapsed_hint,
            },
        }

    def to_toml(self) -> str:
        """Render this Config as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Returns:
            MutableConfig: A mutable builder initialized from this snapshot.
        """
        return MutableConfig(
            timestamp=self.timestamp,
            config_files=list(self.config_files),
            error_patterns=list(self.error_patterns),
            cache_ttl_ms=self.cache_ttl_ms,
            debounce_ms=self.debounce_ms,
            show_collapsed_hint=self.show_collapsed_hint,
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the draft was created.
        config_files (list[Path | str]): Config sources merged so far.
        error_patterns (list[str] | None): Error-variable name fragments (None = not set).
        cache_ttl_ms (int | None): Cache TTL in milliseconds (None = not set).
        debounce_ms (int | None): Debounce delay in milliseconds (None = not set).
        show_collapsed_hint (bool | None): Inline hint toggle (None = not set).
        diagnostics (DiagnosticLog): Warnings collected so far.
    """

    timestamp: str = field(default_factory=_now)
    config_files: list[Path | str] = field(default_factory=lambda: [])
    error_patterns: list[str] | None = None
    cache_ttl_ms: int | None = None
    debounce_ms: int | None = None
    show_collapsed_hint: bool | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this mutable builder into an immutable Config.

        Applies final sanitation and fills unset fields with the built-in defaults.
        """
        self.sanitize()
        patterns: list[str] = (
            list(DEFAULT_ERROR_PATTERNS) if self.error_patterns is None else self.error_patterns
        )
        return Config(
            timestamp=self.timestamp,
            config_files=tuple(self.config_files),
            error_patterns=tuple(patterns),
            cache_ttl_ms=DEFAULT_CACHE_TTL_MS if self.cache_ttl_ms is None else self.cache_ttl_ms,
            debounce_ms=DEFAULT_DEBOUNCE_MS if self.debounce_ms is None else self.debounce_ms,
            show_collapsed_hint=(
                True if self.show_collapsed_hint is None else self.show_collapsed_hint
            ),
            diagnostics=tuple(self.diagnostics),
        )

    def sanitize(self) -> None:
        """Normalize field values in place, recording diagnostics for repairs.

        - Error patterns are stripped; blank entries are dropped (a blank fragment
          would match every identifier) and duplicates removed case-insensitively,
          keeping the first spelling.
        - Negative durations are reset to the defaults.
        """
        if self.error_patterns is not None:
            cleaned: list[str] = []
            seen: set[str] = set()
            for raw in self.error_patterns:
                frag: str = raw.strip()
                if not frag:
                    logger.warning("Ignoring blank error pattern %r", raw)
                    self.diagnostics.add_warning(f"Ignoring blank error pattern {raw!r}")
                    continue
                key: str = frag.casefold()
                if key in seen:
                    logger.debug("Dropping duplicate error pattern %r", frag)
                    continue
                seen.add(key)
                cleaned.append(frag)
            if self.error_patterns and not cleaned:
                self.diagnostics.add_warning("No usable error patterns; nothing will be detected")
            self.error_patterns = cleaned

        if self.cache_ttl_ms is not None and self.cache_ttl_ms < 0:
            self.diagnostics.add_warning(
                f"cache ttl_ms must be >= 0 (got {self.cache_ttl_ms}); "
                f"using {DEFAULT_CACHE_TTL_MS}"
            )
            self.cache_ttl_ms = DEFAULT_CACHE_TTL_MS
        if self.debounce_ms is not None and self.debounce_ms < 0:
            self.diagnostics.add_warning(
                f"cache debounce_ms must be >= 0 (got {self.debounce_ms}); "
                f"using {DEFAULT_DEBOUNCE_MS}"
            )
            self.debounce_ms = DEFAULT_DEBOUNCE_MS

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Build a draft from the runtime defaults.

        Returns:
            MutableConfig: A `MutableConfig` instance populated with default values.
        """
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown sections and keys are ignored. Values of the wrong type are
        reported through the draft's diagnostics and left unset.

        Args:
            data (TomlTable): The parsed TOML data as a dictionary.
            config_file (Path | None): Optional path to the source TOML file.

        Returns:
            MutableConfig: The resulting MutableConfig instance.
        """
        detector_tbl: TomlTable = get_table_value(data, Toml.SECTION_DETECTOR)
        logger.trace("TOML [detector]: %s", detector_tbl)

        cache_tbl: TomlTable = get_table_value(data, Toml.SECTION_CACHE)
        logger.trace("TOML [cache]: %s", cache_tbl)

        display_tbl: TomlTable = get_table_value(data, Toml.SECTION_DISPLAY)
        logger.trace("TOML [display]: %s", display_tbl)

        draft: MutableConfig = cls()
        draft.config_files = [config_file] if config_file else []
        diags: DiagnosticLog = draft.diagnostics

        draft.error_patterns = get_string_list_value_or_none_checked(
            detector_tbl,
            Toml.KEY_ERROR_PATTERNS,
            where=f"[{Toml.SECTION_DETECTOR}]",
            diagnostics=diags,
            logger=logger,
        )
        draft.cache_ttl_ms = get_int_value_or_none_checked(
            cache_tbl,
            Toml.KEY_TTL_MS,
            where=f"[{Toml.SECTION_CACHE}]",
            diagnostics=diags,
            logger=logger,
            minimum=0,
        )
        draft.debounce_ms = get_int_value_or_none_checked(
            cache_tbl,
            Toml.KEY_DEBOUNCE_MS,
            where=f"[{Toml.SECTION_CACHE}]",
            diagnostics=diags,
            logger=logger,
            minimum=0,
        )
        draft.show_collapsed_hint = get_bool_value_or_none_checked(
            display_tbl,
            Toml.KEY_SHOW_COLLAPSED_HINT,
            where=f"[{Toml.SECTION_DISPLAY}]",
            diagnostics=diags,
            logger=logger,
        )
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``errfold.toml`` and ``pyproject.toml`` files, extracting
        the ``[tool.errfold]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft if successful; None if a pyproject.toml
                has no ``[tool.errfold]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, "tool"), PYPROJECT_TOOL_SECTION
            )
            if not tool_section:
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most → nearest**; within one directory
        ``pyproject.toml`` comes before ``errfold.toml`` so that a later merge
        gives same-directory precedence to ``errfold.toml``. A config declaring
        ``root = true`` stops the upward walk after its directory.

        Args:
            start (Path): The Path instance where discovery starts.

        Returns:
            list[Path]: Discovered config file paths ordered for stable merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []

            for name in (PYPROJECT_TOML_NAME, DEFAULT_TOML_CONFIG_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == PYPROJECT_TOML_NAME:
                    data = get_table_value(get_table_value(data, "tool"), PYPROJECT_TOOL_SECTION)
                    if not data:
                        # A pyproject.toml without our section is not a config source
                        continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if data.get(Toml.KEY_ROOT) is True:
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return a user-scoped config path if it exists.

        Looks under XDG config (``$XDG_CONFIG_HOME/errfold/errfold.toml``) and a legacy
        fallback (``~/.errfold.toml``). The first existing path is returned.
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        xdg_path: Path = base / "errfold" / DEFAULT_TOML_CONFIG_NAME
        legacy: Path = Path.home() / f".{DEFAULT_TOML_CONFIG_NAME}"
        for p in (xdg_path, legacy):
            if p.is_file():
                return p
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            anchor (Path | None): Starting point for upward discovery (CWD if None).
                If it is a file, its parent directory is used.
            extra_config_files (Iterable[Path] | None): Explicit additional config
                files merged **after** discovery (in their given order).
            no_config (bool): If True, skip user and project discovery.

        Returns:
            MutableConfig: A mutable configuration draft ready to be frozen or further edited.
        """
        draft: MutableConfig = cls.from_defaults()

        start: Path = anchor if anchor is not None else Path.cwd()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            for cfg_path in cls.discover_local_config_files(start):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            extra_path: Path = Path(extra)
            if not extra_path.is_file():
                draft.diagnostics.add_error(f"Config file not found: {extra_path}")
                continue
            mc = cls.from_toml_file(extra_path)
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose set values take precedence.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """
        return MutableConfig(
            timestamp=self.timestamp,
            config_files=[*self.config_files, *other.config_files],
            error_patterns=(
                list(other.error_patterns)
                if other.error_patterns is not None
                else (None if self.error_patterns is None else list(self.error_patterns))
            ),
            cache_ttl_ms=(
                other.cache_ttl_ms if other.cache_ttl_ms is not None else self.cache_ttl_ms
            ),
            debounce_ms=other.debounce_ms if other.debounce_ms is not None else self.debounce_ms,
            show_collapsed_hint=(
                other.show_collapsed_hint
                if other.show_collapsed_hint is not None
                else self.show_collapsed_hint
            ),
            diagnostics=DiagnosticLog.from_iterable([*self.diagnostics, *other.diagnostics]),
        )

    def apply_overrides(
        self,
        *,
        error_patterns: Iterable[str] | None = None,
        show_collapsed_hint: bool | None = None,
    ) -> MutableConfig:
        """Apply programmatic (CLI/API) overrides in place; ``None`` leaves a field alone.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        if error_patterns is not None:
            self.error_patterns = list(error_patterns)
        if show_collapsed_hint is not None:
            self.show_collapsed_hint = show_collapsed_hint
        return self


def load_config(
    *,
    anchor: Path | None = None,
    extra_config_files: Iterable[Path] | None = None,
    no_config: bool = False,
    error_patterns: Iterable[str] | None = None,
    show_collapsed_hint: bool | None = None,
) -> Config:
    """Discover, merge, override and freeze the effective configuration.

    Args:
        anchor (Path | None): Starting point for upward discovery (CWD if None).
        extra_config_files (Iterable[Path] | None): Explicit config files, merged last.
        no_config (bool): Skip user and project discovery.
        error_patterns (Iterable[str] | None): Override for the error-variable fragments.
        show_collapsed_hint (bool | None): Override for the inline hint toggle.

    Returns:
        Config: The frozen runtime configuration.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=extra_config_files,
        no_config=no_config,
    )
    draft.apply_overrides(error_patterns=error_patterns, show_collapsed_hint=show_collapsed_hint)
    return draft.freeze()
