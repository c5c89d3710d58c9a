# topmark:header:start
#
#   project      : Polyrun
#   file         : io.py
#   file_relpath : src/polyrun/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load, query and render TOML configuration sources.

This module provides I/O helpers for reading Polyrun configuration from on-disk
TOML files (``polyrun.toml`` / ``pyproject.toml``), checked getters used while
parsing, and rendering back to TOML text for ``polyrun config dump``.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from polyrun.config.keys import Toml
from polyrun.config.logging import get_logger
from polyrun.constants import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_MAX_CODE_LENGTH,
    DEFAULT_POLL_INTERVAL,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from polyrun.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

    from polyrun.config.logging import PolyrunLogger

TomlTable = dict[str, Any]

logger: PolyrunLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return Polyrun's **runtime defaults** as a Python dict.

    This function intentionally performs **no I/O**. Per-vendor retry budgets are
    not listed here; they live on the vendor descriptors and are only overridden
    when a ``[vendors.<key>]`` table is present.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_RUNTIME: {
            Toml.KEY_POLL_INTERVAL: DEFAULT_POLL_INTERVAL,
            Toml.KEY_MAX_CODE_LENGTH: DEFAULT_MAX_CODE_LENGTH,
            Toml.KEY_CACHE_RESULTS: True,
            Toml.KEY_CACHE_SIZE: DEFAULT_CACHE_SIZE,
        },
        Toml.SECTION_VENDORS: {},
        Toml.SECTION_OPTIONS: {},
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``polyrun.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content. For ``pyproject.toml`` only the
            ``[tool.polyrun]`` table is returned (empty when absent).

    Raises:
        ConfigurationError: If the file is not valid TOML.

    Notes:
        - Read errors are logged and an empty dict is returned.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    data_any: Any = doc.unwrap()
    data: TomlTable = cast("TomlTable", data_any) if isinstance(data_any, dict) else {}

    if path.name == PYPROJECT_FILE_NAME:
        tool: Any = data.get("tool", {})
        section: Any = tool.get(PYPROJECT_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
        return cast("TomlTable", section) if isinstance(section, dict) else {}
    return data


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return a sub-table, or an empty dict when missing.

    Raises:
        ConfigurationError: If the key is present but not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"[{key}] must be a table, got {type(value).__name__}")
    return dict(cast("Mapping[str, Any]", value))


def get_positive_float_or_none(table: TomlTable, key: str) -> float | None:
    """Return a strictly positive number as float, or None when absent.

    Raises:
        ConfigurationError: If the value is not a number or not > 0.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"'{key}' must be greater than 0, got {value!r}")
    return float(value)


def get_positive_int_or_none(table: TomlTable, key: str) -> int | None:
    """Return a strictly positive integer, or None when absent.

    Raises:
        ConfigurationError: If the value is not an integer or not > 0.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"'{key}' must be greater than 0, got {value!r}")
    return value


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Return a boolean, or None when absent.

    Raises:
        ConfigurationError: If the value is present but not a boolean.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")
    return value


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings/lists (TOML has no `null`)."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none_for_toml(v) for k, v in m.items() if v is not None}
    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
