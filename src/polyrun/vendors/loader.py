# topmark:header:start
#
#   project      : Polyrun
#   file         : loader.py
#   file_relpath : src/polyrun/vendors/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Vendor loader: gate compilation on vendor readiness.

The loader polls a `CapabilityProvider` until every vendor a language depends
on is ready, bounded by a per-vendor retry budget:

1. Check the readiness predicate once.
2. While not ready and attempts remain: sleep one polling interval, re-check.
3. On exhaustion raise `VendorUnavailable` carrying the vendor's hint.

Once a vendor is ready its one-time initializer runs exactly once for the
lifetime of the loader. Concurrent waiters on the same vendor share a single
poll loop and all receive its outcome.

The sleep function is injected so tests can count polling ticks without waiting
on the wall clock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from polyrun.config.logging import get_logger
from polyrun.config.model import Config, default_config
from polyrun.errors import VendorUnavailable
from polyrun.languages.base import Language
from polyrun.vendors.specs import BUILTIN_VENDORS, VendorSpec, vendor_spec_for
from polyrun.vendors.state import LoaderStats, LoadingState, LoadingStatus

if TYPE_CHECKING:
    from polyrun.config.logging import PolyrunLogger
    from polyrun.vendors.provider import CapabilityProvider

logger: PolyrunLogger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]
StateListener = Callable[[LoadingState], None]


class VendorLoader:
    """Tracks vendor readiness and per-language loading state.

    Args:
        provider (CapabilityProvider): Source of vendor capabilities.
        config (Config | None): Runtime configuration (poll interval, budget
            overrides). Defaults to the built-in defaults.
        specs (Mapping[str, VendorSpec] | None): Vendor descriptors; defaults to
            the built-in vendors. Unknown keys get a generic descriptor.
        sleep (SleepFn): Coroutine function used between two readiness checks.
    """

    def __init__(
        self,
        provider: CapabilityProvider,
        *,
        config: Config | None = None,
        specs: Mapping[str, VendorSpec] | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._provider: CapabilityProvider = provider
        self._config: Config = config or default_config()
        self._specs: dict[str, VendorSpec] = dict(specs if specs is not None else BUILTIN_VENDORS)
        self._sleep: SleepFn = sleep

        self._ready: set[str] = set()
        self._initialized: set[str] = set()
        self._inflight: dict[str, asyncio.Future[None]] = {}

        self._declared: dict[Language, tuple[str, ...]] = {}
        self._states: dict[Language, LoadingState] = {}
        self._listeners: list[StateListener] = []

    @property
    def provider(self) -> CapabilityProvider:
        return self._provider

    def spec_for(self, key: str) -> VendorSpec:
        """Return the descriptor used for ``key``."""
        return self._specs.get(key) or vendor_spec_for(key)

    def attempts_for(self, key: str) -> int:
        """Return the effective retry budget for ``key`` (configuration wins)."""
        return self._config.attempts_for(key, self.spec_for(key).max_attempts)

    def declare(self, language: Language, keys: Iterable[str]) -> None:
        """Record which vendors a language depends on."""
        self._declared[language] = tuple(keys)

    def capability(self, key: str) -> Any:
        """Return the capability attached to ``key``.

        Raises:
            KeyError: If the slot is empty.
        """
        return self._provider.get(key)

    def invalidate(self, key: str) -> None:
        """Forget that ``key`` was ready.

        Languages that depend on ``key`` and were ``loaded`` move to ``error``,
        so their next compile polls the slot again.
        """
        self._ready.discard(key)
        reason: str = str(VendorUnavailable(key, self.spec_for(key).hint))
        for language, keys in self._declared.items():
            if key in keys and self.snapshot(language).is_loaded:
                self._set_state(language, LoadingStatus.ERROR, reason)
        logger.warning("Vendor '%s' disappeared after becoming ready", key)

    # ----------------------------- Observers -----------------------------

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every new `LoadingState` snapshot."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_state(
        self, language: Language, status: LoadingStatus, error: str | None = None
    ) -> None:
        state = LoadingState(language=language, status=status, error=error)
        self._states[language] = state
        logger.debug("Loading state for '%s': %s", language.value, status.value)
        for listener in list(self._listeners):
            listener(state)

    def snapshot(self, language: Language) -> LoadingState:
        """Return the current loading state of a language.

        Languages declared without vendors report ``loaded`` immediately.
        """
        state: LoadingState | None = self._states.get(language)
        if state is not None:
            return state
        if language in self._declared and not self._declared[language]:
            return LoadingState(language=language, status=LoadingStatus.LOADED)
        return LoadingState(language=language)

    def snapshots(self) -> tuple[LoadingState, ...]:
        """Return the loading state of every language."""
        return tuple(self.snapshot(lang) for lang in Language)

    def stats(self) -> LoaderStats:
        """Group languages by loading status (unloaded languages are omitted)."""
        states = self.snapshots()
        return LoaderStats(
            loaded=tuple(s.language for s in states if s.status is LoadingStatus.LOADED),
            loading=tuple(s.language for s in states if s.status is LoadingStatus.LOADING),
            errored=tuple(s.language for s in states if s.status is LoadingStatus.ERROR),
        )

    def retry(self, language: Language) -> bool:
        """Clear a language's error state so the next attempt starts fresh.

        Returns:
            bool: True if an error state was cleared.
        """
        state: LoadingState | None = self._states.get(language)
        if state is None or state.status is not LoadingStatus.ERROR:
            return False
        self._set_state(language, LoadingStatus.UNLOADED)
        return True

    # ----------------------------- Readiness -----------------------------

    def is_vendor_ready(self, key: str) -> bool:
        """Return True if ``key`` has been observed ready and initialized."""
        return key in self._ready

    async def ensure_ready(self, language: Language, keys: Iterable[str] | None = None) -> None:
        """Wait until every vendor ``language`` depends on is ready.

        Args:
            language (Language): The language being compiled.
            keys (Iterable[str] | None): Vendor keys to wait for; defaults to the
                keys declared for the language.

        Raises:
            VendorUnavailable: If a vendor exhausts its retry budget.
        """
        vendor_keys: tuple[str, ...] = (
            tuple(keys) if keys is not None else self._declared.get(language, ())
        )
        if not vendor_keys:
            if not self.snapshot(language).is_loaded:
                self._set_state(language, LoadingStatus.LOADED)
            return
        if self.snapshot(language).is_loaded:
            return

        self._set_state(language, LoadingStatus.LOADING)
        try:
            for key in vendor_keys:
                await self._wait_for(key)
        except VendorUnavailable as e:
            self._set_state(language, LoadingStatus.ERROR, str(e))
            raise
        self._set_state(language, LoadingStatus.LOADED)

    async def _wait_for(self, key: str) -> None:
        if key in self._ready:
            return
        fut: asyncio.Future[None] | None = self._inflight.get(key)
        if fut is None:
            fut = asyncio.ensure_future(self._poll(key))
            self._inflight[key] = fut
            fut.add_done_callback(lambda done, k=key: self._forget(k, done))
        else:
            logger.debug("Joining in-flight poll loop for vendor '%s'", key)
        await asyncio.shield(fut)

    def _forget(self, key: str, fut: asyncio.Future[None]) -> None:
        if self._inflight.get(key) is fut:
            del self._inflight[key]

    async def _poll(self, key: str) -> None:
        spec: VendorSpec = self.spec_for(key)
        budget: int = self.attempts_for(key)
        interval: float = self._config.poll_interval

        ready: bool = self._provider.is_ready(key, spec.entry_point)
        attempt = 0
        while not ready and attempt < budget:
            await self._sleep(interval)
            attempt += 1
            ready = self._provider.is_ready(key, spec.entry_point)
            logger.trace("Vendor '%s' poll %d/%d: ready=%s", key, attempt, budget, ready)

        if not ready:
            logger.warning("Vendor '%s' not ready after %d attempts", key, budget)
            raise VendorUnavailable(key, spec.hint, attempts=budget)

        self._initialize(spec)
        self._ready.add(key)
        logger.info("Vendor '%s' ready", key)

    def _initialize(self, spec: VendorSpec) -> None:
        if spec.key in self._initialized or spec.initializer is None:
            return
        try:
            spec.initializer(self._provider.get(spec.key))
        except Exception as e:
            raise VendorUnavailable(spec.key, f"initialization failed: {e}") from e
        self._initialized.add(spec.key)
        logger.debug("Vendor '%s' initialized", spec.key)
