# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across Polyrun.

Included modules:

- ``console``
  Console message types (levels, messages, aggregation) used to carry program
  output from an execution surface to a console view in temporal order.

Design goals:

- Keep this package free of pipeline and CLI dependencies.
- Maintain stable internal contracts that higher-level layers can rely on.
"""

from __future__ import annotations
