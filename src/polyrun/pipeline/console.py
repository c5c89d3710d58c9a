# topmark:header:start
#
#   project      : Polyrun
#   file         : console.py
#   file_relpath : src/polyrun/pipeline/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared console history for a playground session."""

from __future__ import annotations

from collections.abc import Iterable

from polyrun.core.console import ConsoleMessage, ConsoleStats, compute_console_stats


class ConsoleView:
    """Ordered console history; messages keep their arrival order."""

    def __init__(self) -> None:
        self._messages: list[ConsoleMessage] = []

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> tuple[ConsoleMessage, ...]:
        return tuple(self._messages)

    def append(self, message: ConsoleMessage) -> None:
        self._messages.append(message)

    def extend(self, messages: Iterable[ConsoleMessage]) -> None:
        self._messages.extend(messages)

    def reset(self, messages: Iterable[ConsoleMessage] = ()) -> None:
        """Start a fresh history, optionally seeded with ``messages``."""
        self._messages = list(messages)

    def clear(self) -> None:
        self._messages.clear()

    def stats(self) -> ConsoleStats:
        return compute_console_stats(self._messages)
