# topmark:header:start
#
#   project      : Polyrun
#   file         : provider.py
#   file_relpath : src/polyrun/vendors/provider.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Capability providers for vendor runtimes.

A vendor runtime is attached out-of-band to a named *slot* (for example the
TypeScript engine under ``"typescript"``). Polyrun never touches global state
directly; it asks a `CapabilityProvider` whether a slot is ready and fetches the
capability through it.

A slot is *ready* when it exists and exposes its entry point, either as an
attribute (objects, modules) or as a key (mappings).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from polyrun.config.logging import get_logger

if TYPE_CHECKING:
    from polyrun.config.logging import PolyrunLogger

logger: PolyrunLogger = get_logger(__name__)


@runtime_checkable
class CapabilityProvider(Protocol):
    """Structural interface the vendor loader depends on."""

    def is_ready(self, key: str, entry_point: str | None = None) -> bool:
        """Return True if the slot ``key`` exists and exposes ``entry_point``."""
        ...

    def get(self, key: str) -> Any:
        """Return the capability attached to slot ``key``.

        Raises:
            KeyError: If the slot is empty.
        """
        ...


def has_entry_point(capability: Any, entry_point: str | None) -> bool:
    """Return True if ``capability`` exposes ``entry_point``.

    A ``None`` entry point only requires the capability to exist.
    """
    if capability is None:
        return False
    if entry_point is None:
        return True
    if isinstance(capability, Mapping):
        return entry_point in capability
    return hasattr(capability, entry_point)


def get_entry_point(capability: Any, entry_point: str) -> Any:
    """Return the entry point of a capability (attribute or mapping key).

    Raises:
        KeyError: If the capability does not expose the entry point.
    """
    if isinstance(capability, Mapping):
        return capability[entry_point]
    try:
        return getattr(capability, entry_point)
    except AttributeError:
        raise KeyError(entry_point) from None


class SlotCapabilityProvider:
    """In-memory capability provider whose slots can change at runtime.

    Example:
        ```python
        provider = SlotCapabilityProvider()
        provider.install("typescript", {"transpile": my_transpile})
        provider.is_ready("typescript", "transpile")  # True
        ```
    """

    def __init__(self, slots: Mapping[str, Any] | None = None) -> None:
        self._slots: dict[str, Any] = dict(slots or {})

    def install(self, key: str, capability: Any) -> None:
        """Attach a capability to a slot, replacing any previous one."""
        logger.debug("Installing capability into slot '%s'", key)
        self._slots[key] = capability

    def remove(self, key: str) -> None:
        """Detach the capability from a slot (no-op when empty)."""
        self._slots.pop(key, None)

    def keys(self) -> tuple[str, ...]:
        """Return the occupied slot names."""
        return tuple(self._slots)

    def is_ready(self, key: str, entry_point: str | None = None) -> bool:
        return has_entry_point(self._slots.get(key), entry_point)

    def get(self, key: str) -> Any:
        return self._slots[key]
