# topmark:header:start
#
#   project      : Polyrun
#   file         : helpers.py
#   file_relpath : tests/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared test helpers: a counting fake sleep and registry builders."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from polyrun.config import Config, MutableConfig
from polyrun.registry import CompilerRegistry
from polyrun.vendors import SlotCapabilityProvider, VendorLoader


class FakeSleep:
    """Awaitable stand-in for `asyncio.sleep` that records every tick.

    Args:
        on_tick (Callable[[int], None] | None): Called with the 1-based tick number
            after each sleep, e.g. to install a vendor mid-poll.
    """

    def __init__(self, on_tick: Callable[[int], None] | None = None) -> None:
        self.calls: list[float] = []
        self.on_tick = on_tick

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        if self.on_tick is not None:
            self.on_tick(len(self.calls))

    @property
    def count(self) -> int:
        return len(self.calls)


def make_config(**overrides: Any) -> Config:
    """Return the default config with selected `MutableConfig` fields replaced."""
    draft: MutableConfig = MutableConfig.from_defaults()
    for name, value in overrides.items():
        setattr(draft, name, value)
    return draft.freeze()


def noop_transpile(source: str, options: dict[str, Any]) -> str:
    """Mock TypeScript transpiler that returns its input unchanged."""
    return source


def build_registry(
    slots: dict[str, Any] | None = None,
    *,
    sleep: FakeSleep | None = None,
    **config_overrides: Any,
) -> tuple[CompilerRegistry, SlotCapabilityProvider, FakeSleep]:
    """Build a registry over pre-filled capability slots and a fake sleep."""
    sleep = sleep or FakeSleep()
    config = make_config(**config_overrides)
    provider = SlotCapabilityProvider(slots)
    loader = VendorLoader(provider, config=config, sleep=sleep)
    return CompilerRegistry(loader, config=config), provider, sleep
