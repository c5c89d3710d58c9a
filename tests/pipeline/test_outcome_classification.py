# topmark:header:start
#
#   project      : Polyrun
#   file         : test_outcome_classification.py
#   file_relpath : tests/pipeline/test_outcome_classification.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for cycle outcome bucketing in `polyrun.pipeline.outcomes.classify`.

These tests assert the stable contract (error kind → outcome) without running
any compiler, by synthesizing minimal results.
"""

from __future__ import annotations

import pytest

from polyrun.compilers.types import CompileResult, ExecutionResult
from polyrun.errors import ErrorKind
from polyrun.pipeline.outcomes import RunOutcome, classify, count_outcomes


@pytest.mark.parametrize(
    ("kind", "outcome"),
    [
        (ErrorKind.VALIDATION, RunOutcome.INVALID_INPUT),
        (ErrorKind.VENDOR_UNAVAILABLE, RunOutcome.VENDOR_UNAVAILABLE),
        (ErrorKind.COMPILE, RunOutcome.COMPILE_FAILED),
        (ErrorKind.EXECUTION, RunOutcome.EXECUTION_FAILED),
    ],
)
def test_compile_failures_map_by_kind(kind: ErrorKind, outcome: RunOutcome) -> None:
    bucket = classify(CompileResult.failure("nope", kind))

    assert bucket.outcome is outcome
    assert bucket.reason == "nope"
    assert bucket.outcome.is_failure


def test_execution_failure_after_successful_compile() -> None:
    executed = ExecutionResult(success=False, preview_code="", error="died")

    bucket = classify(CompileResult.success("x"), executed)

    assert bucket.outcome is RunOutcome.EXECUTION_FAILED
    assert bucket.reason == "died"


def test_success() -> None:
    bucket = classify(CompileResult.success("x"), ExecutionResult(success=True, preview_code="x"))

    assert bucket.outcome is RunOutcome.SUCCEEDED
    assert bucket.reason is None
    assert not bucket.outcome.is_failure


def test_count_outcomes_in_enum_order() -> None:
    counts = count_outcomes(
        [RunOutcome.COMPILE_FAILED, RunOutcome.SUCCEEDED, RunOutcome.COMPILE_FAILED]
    )

    assert list(counts.items()) == [(RunOutcome.SUCCEEDED, 1), (RunOutcome.COMPILE_FAILED, 2)]
