# topmark:header:start
#
#   project      : Polyrun
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Polyrun test suite.

Provides a capability provider, a counting fake sleep for vendor polling, and
loader/registry fixtures built on them. Async code is driven with
`asyncio.run` from synchronous tests.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `polyrun.config.MutableConfig`, then `freeze()` it into a `Config`. To tweak
    a frozen `Config`, call `Config.thaw()`, edit, and `freeze()` again.
"""

from __future__ import annotations

import pytest

from polyrun.config import logging as polyrun_logging
from polyrun.registry import CompilerRegistry
from polyrun.vendors import SlotCapabilityProvider, VendorLoader
from tests.helpers import FakeSleep


@pytest.fixture(autouse=True)
def silence_polyrun_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure POLYRUN_LOG_LEVEL from the developer's shell does not leak into tests."""
    monkeypatch.delenv("POLYRUN_LOG_LEVEL", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failing tests show every vendor poll."""
    polyrun_logging.setup_logging(level=polyrun_logging.TRACE_LEVEL)


@pytest.fixture
def provider() -> SlotCapabilityProvider:
    """An empty capability provider."""
    return SlotCapabilityProvider()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def loader(provider: SlotCapabilityProvider, fake_sleep: FakeSleep) -> VendorLoader:
    """A vendor loader over ``provider`` that never waits on the wall clock."""
    return VendorLoader(provider, sleep=fake_sleep)


@pytest.fixture
def registry(loader: VendorLoader) -> CompilerRegistry:
    """A registry of the built-in compilers sharing ``loader``."""
    return CompilerRegistry(loader)
