# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for Polyrun.

Configuration is read from ``polyrun.toml`` or the ``[tool.polyrun]`` table of
``pyproject.toml``, layered over built-in defaults, and frozen into an immutable
`Config` snapshot.
"""

from __future__ import annotations

from polyrun.config.model import Config, MutableConfig, default_config, load_config

__all__ = [
    "Config",
    "MutableConfig",
    "default_config",
    "load_config",
]
