# topmark:header:start
#
#   project      : Polyrun
#   file         : outcomes.py
#   file_relpath : src/polyrun/pipeline/outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure outcome classification for compile/run cycles.

Maps a slot's `CompileResult` (and, for script languages, its `ExecutionResult`)
to a stable `RunOutcome` key and a short human-facing reason.

Presentation-free: no chalk/yachalk, no console logic. Coloring is layered on
top by the CLI.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from polyrun.errors import ErrorKind

if TYPE_CHECKING:
    from polyrun.compilers.types import CompileResult, ExecutionResult


class RunOutcome(Enum):
    """Classification of one compile/run cycle."""

    SUCCEEDED = "succeeded"
    INVALID_INPUT = "invalid_input"
    VENDOR_UNAVAILABLE = "vendor_unavailable"
    COMPILE_FAILED = "compile_failed"
    EXECUTION_FAILED = "execution_failed"

    @property
    def is_failure(self) -> bool:
        return self is not RunOutcome.SUCCEEDED


_OUTCOME_BY_KIND: dict[ErrorKind, RunOutcome] = {
    ErrorKind.VALIDATION: RunOutcome.INVALID_INPUT,
    ErrorKind.VENDOR_UNAVAILABLE: RunOutcome.VENDOR_UNAVAILABLE,
    ErrorKind.COMPILE: RunOutcome.COMPILE_FAILED,
    ErrorKind.EXECUTION: RunOutcome.EXECUTION_FAILED,
}


@dataclass(frozen=True)
class OutcomeBucket:
    """Outcome plus an optional human-facing reason."""

    outcome: RunOutcome
    reason: str | None = None


def classify(
    compiled: CompileResult, executed: ExecutionResult | None = None
) -> OutcomeBucket:
    """Classify a cycle from its compile result and optional execution result.

    Args:
        compiled (CompileResult): Result of the compile step.
        executed (ExecutionResult | None): Normalized execution result, when the
            language ran on an execution surface.

    Returns:
        OutcomeBucket: The classified outcome with the failure message as reason.
    """
    if compiled.error is not None:
        outcome: RunOutcome = _OUTCOME_BY_KIND.get(
            compiled.error_kind or ErrorKind.COMPILE, RunOutcome.COMPILE_FAILED
        )
        return OutcomeBucket(outcome, compiled.error)
    if executed is not None and not executed.success:
        return OutcomeBucket(RunOutcome.EXECUTION_FAILED, executed.error)
    return OutcomeBucket(RunOutcome.SUCCEEDED)


def count_outcomes(outcomes: Iterable[RunOutcome]) -> dict[RunOutcome, int]:
    """Count outcomes, listing them in enumeration order."""
    counts: Counter[RunOutcome] = Counter(outcomes)
    return {o: counts[o] for o in RunOutcome if counts[o]}
