# topmark:header:start
#
#   project      : Polyrun
#   file         : errors.py
#   file_relpath : src/polyrun/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions for the Polyrun pipeline.

Usage:
    Compilers raise `ValidationError`, `VendorUnavailable` and `CompileError`
    internally and convert them to a `CompileResult` before returning. None of
    them escapes a compiler's public methods.

    Execution surfaces may raise `ExecutionError`; the playground wraps any
    other surface exception in one and reports it as a failed `RawExecution`.

    `ConfigurationError` is different: it signals a programming-time mistake
    (an unknown language tag, an invalid configuration value) and propagates to
    the caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Stable identifiers for the failure taxonomy surfaced as data.

    Attributes:
        VALIDATION: Malformed input (not a string, too long).
        VENDOR_UNAVAILABLE: A required vendor never became ready.
        COMPILE: The underlying transform rejected the source.
        EXECUTION: The runtime failed while running valid compiled output.
    """

    VALIDATION = "validation"
    VENDOR_UNAVAILABLE = "vendor_unavailable"
    COMPILE = "compile"
    EXECUTION = "execution"


class PolyrunError(Exception):
    """Base class for all Polyrun errors."""

    kind: ErrorKind | None = None


class ValidationError(PolyrunError):
    """Source input is not a string or exceeds the configured maximum length."""

    kind = ErrorKind.VALIDATION


class VendorUnavailable(PolyrunError):
    """A vendor runtime did not become ready within its retry budget.

    Attributes:
        key (str): The vendor key that failed to load.
        hint (str): Human-readable hint naming the resource that failed to load.
        attempts (int): Number of readiness checks performed before giving up.
    """

    kind = ErrorKind.VENDOR_UNAVAILABLE

    def __init__(self, key: str, hint: str = "", *, attempts: int = 0) -> None:
        self.key = key
        self.hint = hint
        self.attempts = attempts
        if attempts:
            message = f"Vendor '{key}' load timed out after {attempts} attempts"
        else:
            message = f"Vendor '{key}' is not available"
        if hint:
            message = f"{message}: {hint}"
        super().__init__(message)


class CompileError(PolyrunError):
    """The underlying transform rejected the source."""

    kind = ErrorKind.COMPILE


class ExecutionError(PolyrunError):
    """The runtime failed while running valid compiled output.

    Raised by execution surfaces. `Playground` also wraps any other exception a
    surface raises in this type before turning it into data.
    """

    kind = ErrorKind.EXECUTION


class ConfigurationError(PolyrunError):
    """Programming-time configuration mistake (unknown language, invalid setting)."""
