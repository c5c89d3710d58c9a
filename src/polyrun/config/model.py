# topmark:header:start
#
#   project      : Polyrun
#   file         : model.py
#   file_relpath : src/polyrun/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot consumed by the vendor loader, the
      compilers and the compiler registry.
    - `MutableConfig`: a mutable builder used during discovery/merge; it can be
      frozen into `Config` and thawed back for edits.

Layering (lowest → highest precedence):
    1) Built-in defaults (`polyrun.config.io.load_defaults_dict`)
    2) Project configs discovered upward from an anchor directory, root-most first;
       within a directory ``pyproject.toml`` is merged before ``polyrun.toml``
    3) Extra config files passed explicitly (in the order provided)

Field semantics:
    - On `MutableConfig`, ``None`` means *inherit* (not set by this layer).
    - On `Config`, every scalar is resolved; per-vendor attempt budgets and
      per-language compile options only contain explicitly configured entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from polyrun.config.io import (
    get_bool_value_or_none,
    get_positive_float_or_none,
    get_positive_int_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from polyrun.config.keys import Toml
from polyrun.config.logging import get_logger
from polyrun.constants import (
    DEFAULT_CACHE_SIZE,
    CONFIG_FILE_NAME,
    DEFAULT_MAX_CODE_LENGTH,
    DEFAULT_POLL_INTERVAL,
    PYPROJECT_FILE_NAME,
)
from polyrun.errors import ConfigurationError
from polyrun.languages.base import Language

if TYPE_CHECKING:
    from polyrun.config.io import TomlTable
    from polyrun.config.logging import PolyrunLogger

logger: PolyrunLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Polyrun.

    Attributes:
        poll_interval (float): Seconds between two vendor readiness checks.
        max_code_length (int): Maximum accepted source length in characters.
        cache_results (bool): Whether the compiler registry caches successful
            compile results.
        cache_size (int): Most compile results a registry keeps; the least
            recently used result is evicted first.
        vendor_attempts (Mapping[str, int]): Per-vendor retry budget overrides,
            keyed by vendor key.
        compile_options (Mapping[Language, Mapping[str, Any]]): Per-language compile
            option overrides, layered between compiler defaults and call-site options.
        config_files (tuple[Path | str, ...]): Provenance of merged config sources.
    """

    poll_interval: float
    max_code_length: int
    cache_results: bool
    cache_size: int
    vendor_attempts: Mapping[str, int]
    compile_options: Mapping[Language, Mapping[str, Any]]
    config_files: tuple[Path | str, ...]

    def attempts_for(self, key: str, default: int) -> int:
        """Return the configured retry budget for a vendor, or ``default``."""
        return self.vendor_attempts.get(key, default)

    def options_for(self, language: Language) -> Mapping[str, Any]:
        """Return the configured compile option overrides for a language."""
        return self.compile_options.get(language, MappingProxyType({}))

    def to_toml_dict(self) -> TomlTable:
        """Convert this immutable config into a TOML-compatible dict."""
        return {
            Toml.SECTION_RUNTIME: {
                Toml.KEY_POLL_INTERVAL: self.poll_interval,
                Toml.KEY_MAX_CODE_LENGTH: self.max_code_length,
                Toml.KEY_CACHE_RESULTS: self.cache_results,
                Toml.KEY_CACHE_SIZE: self.cache_size,
            },
            Toml.SECTION_VENDORS: {
                key: {Toml.KEY_MAX_ATTEMPTS: attempts}
                for key, attempts in self.vendor_attempts.items()
            },
            Toml.SECTION_OPTIONS: {
                lang.value: dict(opts) for lang, opts in self.compile_options.items()
            },
        }

    def to_toml(self) -> str:
        """Render this config as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Symmetry:
            Mirrors `MutableConfig.freeze`. Prefer thaw→edit→freeze rather
            than mutating a runtime `Config`.
        """
        return MutableConfig(
            poll_interval=self.poll_interval,
            max_code_length=self.max_code_length,
            cache_results=self.cache_results,
            cache_size=self.cache_size,
            vendor_attempts=dict(self.vendor_attempts),
            compile_options={lang: dict(opts) for lang, opts in self.compile_options.items()},
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        poll_interval (float | None): None = inherit.
        max_code_length (int | None): None = inherit.
        cache_results (bool | None): None = inherit.
        cache_size (int | None): None = inherit.
        vendor_attempts (dict[str, int]): Per-vendor retry budget overrides.
        compile_options (dict[Language, dict[str, Any]]): Per-language option overrides.
        config_files (list[Path | str]): Paths or identifiers for config sources used.
    """

    poll_interval: float | None = None
    max_code_length: int | None = None
    cache_results: bool | None = None
    cache_size: int | None = None

    vendor_attempts: dict[str, int] = field(default_factory=lambda: {})
    compile_options: dict[Language, dict[str, Any]] = field(default_factory=lambda: {})

    # Provenance
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this mutable builder into an immutable `Config`.

        Unset scalars fall back to the built-in defaults.
        """
        return Config(
            poll_interval=(
                self.poll_interval if self.poll_interval is not None else DEFAULT_POLL_INTERVAL
            ),
            max_code_length=(
                self.max_code_length
                if self.max_code_length is not None
                else DEFAULT_MAX_CODE_LENGTH
            ),
            cache_results=self.cache_results if self.cache_results is not None else True,
            cache_size=self.cache_size if self.cache_size is not None else DEFAULT_CACHE_SIZE,
            vendor_attempts=MappingProxyType(dict(self.vendor_attempts)),
            compile_options=MappingProxyType(
                {
                    lang: MappingProxyType(dict(opts))
                    for lang, opts in self.compile_options.items()
                }
            ),
            config_files=tuple(self.config_files),
        )

    # ------------------------------ Loaders ------------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Build a draft populated from the built-in defaults."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data (the ``[tool.polyrun]`` table for
                ``pyproject.toml``).

        Returns:
            MutableConfig: The resulting draft.

        Raises:
            ConfigurationError: If a value has the wrong type or range, or an
                ``[options.<language>]`` table names an unsupported language.
        """
        draft = cls()

        runtime_tbl: TomlTable = get_table_value(data, Toml.SECTION_RUNTIME)
        draft.poll_interval = get_positive_float_or_none(runtime_tbl, Toml.KEY_POLL_INTERVAL)
        draft.max_code_length = get_positive_int_or_none(runtime_tbl, Toml.KEY_MAX_CODE_LENGTH)
        draft.cache_results = get_bool_value_or_none(runtime_tbl, Toml.KEY_CACHE_RESULTS)
        draft.cache_size = get_positive_int_or_none(runtime_tbl, Toml.KEY_CACHE_SIZE)

        vendors_tbl: TomlTable = get_table_value(data, Toml.SECTION_VENDORS)
        for key in vendors_tbl:
            vendor_tbl: TomlTable = get_table_value(vendors_tbl, key)
            attempts: int | None = get_positive_int_or_none(vendor_tbl, Toml.KEY_MAX_ATTEMPTS)
            if attempts is not None:
                draft.vendor_attempts[str(key)] = attempts

        options_tbl: TomlTable = get_table_value(data, Toml.SECTION_OPTIONS)
        for tag in options_tbl:
            language: Language = Language.parse(tag)
            draft.compile_options[language] = get_table_value(options_tbl, tag)

        for key in data:
            if key not in (Toml.SECTION_RUNTIME, Toml.SECTION_VENDORS, Toml.SECTION_OPTIONS):
                logger.warning("Ignoring unknown configuration section: [%s]", key)

        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig:
        """Load configuration from a single TOML file.

        Supports both ``polyrun.toml`` and ``pyproject.toml`` (``[tool.polyrun]``).

        Raises:
            ConfigurationError: If the file content is invalid.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        try:
            draft: MutableConfig = cls.from_toml_dict(load_toml_dict(path))
        except ConfigurationError as e:
            raise ConfigurationError(f"{path}: {e}") from e
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned root-most first, nearest last. Within one directory
        ``pyproject.toml`` precedes ``polyrun.toml`` so the latter wins a merge.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            entries: list[Path] = [
                cur / name
                for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME)
                if (cur / name).is_file()
            ]
            if entries:
                logger.debug("Discovered config files: %s", entries)
                per_dir.append(entries)
            parent: Path = cur.parent
            if parent == cur:
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

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
            anchor (Path | None): Directory (or file) where upward discovery starts;
                defaults to the current working directory.
            extra_config_files (Iterable[Path] | None): Explicit files merged after
                discovery, in the given order.
            no_config (bool): If True, skip discovery (extra files still apply).

        Returns:
            MutableConfig: A draft ready to be frozen or further edited.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                draft = draft.merge_with(cls.from_toml_file(cfg_path))

        for extra in extra_config_files or ():
            draft = draft.merge_with(cls.from_toml_file(Path(extra)))

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values from ``other`` override this draft.

        Scalars use last-wins on non-None values. Vendor budgets are merged
        key-wise; compile options are merged key-wise per language.
        """
        options: dict[Language, dict[str, Any]] = {
            lang: dict(opts) for lang, opts in self.compile_options.items()
        }
        for lang, opts in other.compile_options.items():
            options.setdefault(lang, {}).update(opts)

        return MutableConfig(
            poll_interval=(
                other.poll_interval if other.poll_interval is not None else self.poll_interval
            ),
            max_code_length=(
                other.max_code_length
                if other.max_code_length is not None
                else self.max_code_length
            ),
            cache_results=(
                other.cache_results if other.cache_results is not None else self.cache_results
            ),
            cache_size=other.cache_size if other.cache_size is not None else self.cache_size,
            vendor_attempts={**self.vendor_attempts, **other.vendor_attempts},
            compile_options=options,
            config_files=self.config_files + other.config_files,
        )


def load_config(
    *,
    anchor: Path | None = None,
    extra_config_files: Iterable[Path] | None = None,
    no_config: bool = False,
) -> Config:
    """Discover, merge and freeze configuration in one call."""
    return MutableConfig.load_merged(
        anchor=anchor, extra_config_files=extra_config_files, no_config=no_config
    ).freeze()


def default_config() -> Config:
    """Return the frozen built-in defaults (no discovery)."""
    return MutableConfig.from_defaults().freeze()
