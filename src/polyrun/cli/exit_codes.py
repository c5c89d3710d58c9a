# topmark:header:start
#
#   project      : Polyrun
#   file         : exit_codes.py
#   file_relpath : src/polyrun/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Polyrun CLI.

Polyrun aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. A failed compile (the source was
rejected) uses the generic ``FAILURE`` code.
"""

from __future__ import annotations

from enum import IntEnum

from polyrun.pipeline.outcomes import RunOutcome


class ExitCode(IntEnum):
    """Standardized exit codes for the Polyrun CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure; also used when a compiler rejects the source.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        INVALID_INPUT: Source text failed validation. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        VENDOR_UNAVAILABLE: A vendor runtime never became ready. Mirrors BSD
            ``EX_UNAVAILABLE (69)``.
        EXECUTION_FAILED: The runtime failed running compiled output. Mirrors BSD
            ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (unknown language, invalid config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    INVALID_INPUT = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    VENDOR_UNAVAILABLE = 69  # EX_UNAVAILABLE
    EXECUTION_FAILED = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255


_EXIT_BY_OUTCOME: dict[RunOutcome, ExitCode] = {
    RunOutcome.SUCCEEDED: ExitCode.SUCCESS,
    RunOutcome.INVALID_INPUT: ExitCode.INVALID_INPUT,
    RunOutcome.VENDOR_UNAVAILABLE: ExitCode.VENDOR_UNAVAILABLE,
    RunOutcome.COMPILE_FAILED: ExitCode.FAILURE,
    RunOutcome.EXECUTION_FAILED: ExitCode.EXECUTION_FAILED,
}


def exit_code_for(outcome: RunOutcome) -> ExitCode:
    """Return the exit code reporting a cycle outcome."""
    return _EXIT_BY_OUTCOME[outcome]
