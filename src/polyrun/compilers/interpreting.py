# topmark:header:start
#
#   project      : Polyrun
#   file         : interpreting.py
#   file_relpath : src/polyrun/compilers/interpreting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compiler for Python, interpreted by the Brython runtime.

Brython runs the Python source itself, so compiling only gates on the runtime
(``brython``) and its standard library (``brythonStdlib``) being ready and
returns the trimmed source. Program output is only observable as captured text,
so the preview receives a fixed completion marker and every non-blank output
line becomes one ``log`` console message.
"""

from __future__ import annotations

from typing import Any

from polyrun.compilers.base import Compiler, CompilerKind
from polyrun.compilers.types import CompileResult, ExecutionResult, RawExecution
from polyrun.constants import INTERPRETED_COMPLETION_MARKER
from polyrun.core.console import ConsoleMessage
from polyrun.languages.base import Language
from polyrun.languages.registry import register_compiler
from polyrun.vendors import specs as vendor_keys


@register_compiler(Language.PYTHON)
class PythonCompiler(Compiler):
    """Python through the Brython runtime and standard library."""

    kind = CompilerKind.INTERPRETING
    vendor_keys_declared = (vendor_keys.BRYTHON, vendor_keys.BRYTHON_STDLIB)

    @property
    def name(self) -> str:
        return "Python Interpreter (Brython)"

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        return CompileResult.success(source)

    def execution_success(self, raw: RawExecution) -> ExecutionResult:
        return ExecutionResult(
            success=True,
            preview_code=INTERPRETED_COMPLETION_MARKER,
            console_messages=tuple(
                ConsoleMessage.log(line) for line in raw.output.splitlines() if line.strip()
            ),
            duration=raw.duration,
        )
