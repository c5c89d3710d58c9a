# topmark:header:start
#
#   project      : Polyrun
#   file         : passthrough.py
#   file_relpath : src/polyrun/compilers/passthrough.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Passthrough compiler for natively supported languages (HTML, CSS, JavaScript).

Compiling only trims surrounding whitespace. No vendor is involved, so these
languages never wait on the vendor loader.
"""

from __future__ import annotations

from typing import Any

from polyrun.compilers.base import Compiler, CompilerKind
from polyrun.compilers.types import CompileResult
from polyrun.languages.base import Language
from polyrun.languages.registry import register_compiler


@register_compiler(Language.HTML, Language.CSS, Language.JAVASCRIPT)
class PassthroughCompiler(Compiler):
    """Identity transform after trimming."""

    kind = CompilerKind.PASSTHROUGH

    @property
    def name(self) -> str:
        return f"{self.spec.display_name} Passthrough Compiler"

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        return CompileResult.success(source)
