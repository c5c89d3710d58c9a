# topmark:header:start
#
#   project      : Polyrun
#   file         : types.py
#   file_relpath : src/polyrun/compilers/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Result shapes exchanged between compilers, execution surfaces and the pipeline.

- `CompileResult`: outcome of `Compiler.compile`. ``code`` is always a string
  (empty on failure) so callers can concatenate without checks.
- `RawExecution`: what an execution surface reports after running compiled code.
- `ExecutionResult`: the canonical, normalized execution outcome of a script
  language, ready for the preview document and the console view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from polyrun.core.console import ConsoleMessage
from polyrun.errors import ErrorKind


@dataclass(frozen=True)
class CompileResult:
    """Outcome of one compile call.

    Attributes:
        code (str): Compiled output; empty when ``error`` is set.
        error (str | None): Human-readable failure message, or None on success.
        source_map (str | None): Optional source map produced by the transform.
        error_kind (ErrorKind | None): Failure category matching ``error``.
    """

    code: str = ""
    error: str | None = None
    source_map: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, code: str, source_map: str | None = None) -> CompileResult:
        return cls(code=code, source_map=source_map)

    @classmethod
    def failure(cls, error: str, kind: ErrorKind = ErrorKind.COMPILE) -> CompileResult:
        return cls(code="", error=error, error_kind=kind)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this result."""
        return {
            "code": self.code,
            "error": self.error,
            "source_map": self.source_map,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }


@dataclass(frozen=True)
class RawExecution:
    """Raw outcome reported by an execution surface.

    Attributes:
        success (bool): Whether the runtime completed without failure.
        output (str): Program output; for surfaces that run code directly this
            is the code that was run.
        error (str | None): Runtime failure message.
        console_output (str): Captured console text, one entry per line, optionally
            prefixed with ``[ERROR]``, ``[WARN]`` or ``[INFO]``.
        duration (float | None): Execution time in milliseconds.
    """

    success: bool
    output: str = ""
    error: str | None = None
    console_output: str = ""
    duration: float | None = None


@dataclass(frozen=True)
class ExecutionResult:
    """Normalized execution outcome of a script language.

    Attributes:
        success (bool): Whether execution succeeded.
        preview_code (str): Script text handed to the preview document.
        console_messages (tuple[ConsoleMessage, ...]): Messages in arrival order.
        duration (float | None): Execution time in milliseconds.
        error (str | None): Failure message when ``success`` is False.
    """

    success: bool
    preview_code: str
    console_messages: tuple[ConsoleMessage, ...] = field(default_factory=tuple)
    duration: float | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this result."""
        return {
            "success": self.success,
            "preview_code": self.preview_code,
            "console_messages": [m.to_dict() for m in self.console_messages],
            "duration": self.duration,
            "error": self.error,
        }
