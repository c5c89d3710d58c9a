# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public compiler registry for Polyrun."""

from __future__ import annotations

from polyrun.registry.compilers import CompilerMeta, CompilerRegistry, RegistryStats

__all__ = [
    "CompilerMeta",
    "CompilerRegistry",
    "RegistryStats",
]
