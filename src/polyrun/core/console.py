# topmark:header:start
#
#   project      : Polyrun
#   file         : console.py
#   file_relpath : src/polyrun/core/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console message support.

A console message is one normalized unit of program output with a severity
tag. Messages produced during a compile cycle keep their insertion order,
which reflects the temporal order of the program's output.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import cast

from yachalk import chalk


class ConsoleLevel(Enum):
    """Console message types relayed from an execution surface.

    The values match the console methods a preview surface intercepts.
    """

    LOG = "log"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function for this level.
        """
        return cast(
            "Callable[[str], str]",
            {
                ConsoleLevel.LOG: chalk.white,
                ConsoleLevel.INFO: chalk.blue,
                ConsoleLevel.WARN: chalk.yellow,
                ConsoleLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class ConsoleMessage:
    """One line of console output with its severity."""

    type: ConsoleLevel
    message: str

    @classmethod
    def log(cls, message: str) -> ConsoleMessage:
        """Return a `log` message."""
        return cls(ConsoleLevel.LOG, message)

    @classmethod
    def info(cls, message: str) -> ConsoleMessage:
        """Return an `info` message."""
        return cls(ConsoleLevel.INFO, message)

    @classmethod
    def warn(cls, message: str) -> ConsoleMessage:
        """Return a `warn` message."""
        return cls(ConsoleLevel.WARN, message)

    @classmethod
    def error(cls, message: str) -> ConsoleMessage:
        """Return an `error` message."""
        return cls(ConsoleLevel.ERROR, message)

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-friendly mapping of this message."""
        return {"type": self.type.value, "message": self.message}


@dataclass(frozen=True)
class ConsoleStats:
    """Aggregated counts for console messages by level."""

    n_log: int
    n_info: int
    n_warn: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of messages."""
        return self.n_log + self.n_info + self.n_warn + self.n_error


def compute_console_stats(messages: Sequence[ConsoleMessage]) -> ConsoleStats:
    """Return per-level counts for a sequence of console messages."""
    return ConsoleStats(
        n_log=sum(1 for m in messages if m.type == ConsoleLevel.LOG),
        n_info=sum(1 for m in messages if m.type == ConsoleLevel.INFO),
        n_warn=sum(1 for m in messages if m.type == ConsoleLevel.WARN),
        n_error=sum(1 for m in messages if m.type == ConsoleLevel.ERROR),
    )
