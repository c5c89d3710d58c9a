# topmark:header:start
#
#   project      : Polyrun
#   file         : surface.py
#   file_relpath : src/polyrun/pipeline/surface.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution surface boundary.

An execution surface runs compiled script code in isolation and reports a
`RawExecution`. Polyrun treats it as a black box.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from polyrun.compilers.types import RawExecution
from polyrun.languages.base import Language, get_language_spec


@runtime_checkable
class ExecutionSurface(Protocol):
    """Runs compiled script code and reports the raw outcome."""

    async def execute(self, language: Language, code: str) -> RawExecution:
        """Run ``code`` compiled from ``language``."""
        ...


class DeferredSurface:
    """Surface that defers running to the preview document itself.

    Code the document can run directly is echoed back as the output, so it ends
    up inline in the document. Other languages report an empty output.
    """

    async def execute(self, language: Language, code: str) -> RawExecution:
        if get_language_spec(language).runs_in_surface:
            return RawExecution(success=True, output=code, duration=0.0)
        return RawExecution(success=True, output="", duration=0.0)
