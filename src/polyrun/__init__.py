# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun package.

Polyrun is a multi-language compile-and-execute pipeline. It routes source text
to a per-language compiler, gates compilation on the availability of injected
runtime engines ("vendors"), and normalizes every outcome into a preview
document plus an ordered stream of console messages.
"""

from __future__ import annotations
