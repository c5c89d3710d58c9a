# topmark:header:start
#
#   project      : Polyrun
#   file         : cmd_common.py
#   file_relpath : src/polyrun/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands.
They avoid policy (exit code rules, messages) and only encapsulate plumbing
such as loading configuration, building a registry and reading sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from polyrun.cli.errors import (
    PolyrunConfigError,
    PolyrunFileNotFoundError,
    PolyrunIOError,
    PolyrunUsageError,
)
from polyrun.config import load_config
from polyrun.config.logging import get_logger
from polyrun.errors import ConfigurationError
from polyrun.languages.base import language_for_path
from polyrun.registry import CompilerRegistry

if TYPE_CHECKING:
    from polyrun.cli.console import ClickConsole
    from polyrun.config import Config
    from polyrun.languages.base import Language

logger = get_logger(__name__)

STDIN_SENTINEL = "-"


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console installed on the root context."""
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    return console


def get_config(ctx: click.Context) -> Config:
    """Load (once per invocation) the configuration selected by the root options.

    Raises:
        PolyrunConfigError: If a config file is malformed or holds invalid values.
    """
    ctx.ensure_object(dict)
    cached: Config | None = ctx.obj.get("config")
    if cached is not None:
        return cached
    try:
        config: Config = load_config(
            extra_config_files=[Path(p) for p in ctx.obj.get("config_files", ())],
            no_config=bool(ctx.obj.get("no_config", False)),
        )
    except ConfigurationError as e:
        raise PolyrunConfigError(str(e)) from e
    logger.debug("Config sources: %s", ", ".join(str(p) for p in config.config_files))
    ctx.obj["config"] = config
    return config


def build_registry(ctx: click.Context) -> CompilerRegistry:
    """Return a compiler registry configured for this invocation.

    The CLI has no script runtimes installed, so the registry's capability
    provider starts empty: vendor-backed languages report an unavailable
    vendor once their retry budget is spent.
    """
    return CompilerRegistry(config=get_config(ctx))


def read_source(path: str) -> str:
    """Read source text from a file path, or from STDIN when ``path`` is ``-``.

    Raises:
        PolyrunFileNotFoundError: If the path does not exist.
        PolyrunIOError: If the file cannot be read or decoded.
    """
    if path == STDIN_SENTINEL:
        return click.get_text_stream("stdin").read()
    source = Path(path)
    if not source.exists():
        raise PolyrunFileNotFoundError(f"No such file: {path}")
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PolyrunIOError(f"Cannot read {path}: {e}") from e


def resolve_language(language: Language | None, path: str | None) -> Language:
    """Return the explicit language, or the one inferred from the path's extension.

    Raises:
        PolyrunUsageError: If no language was given and none can be inferred.
    """
    if language is not None:
        return language
    if path and path != STDIN_SENTINEL:
        inferred: Language | None = language_for_path(Path(path))
        if inferred is not None:
            return inferred
    raise PolyrunUsageError(
        f"Cannot infer the language of '{path or STDIN_SENTINEL}'; pass --language."
    )
