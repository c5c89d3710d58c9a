# topmark:header:start
#
#   project      : Polyrun
#   file         : specs.py
#   file_relpath : src/polyrun/vendors/specs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Vendor descriptors.

Each `VendorSpec` names a capability slot, the entry point that proves the slot
is ready, the default retry budget, and a hint used in the failure message when
the vendor never shows up. Budgets can be overridden per vendor from the
``[vendors.<key>]`` configuration tables.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Mapping

from polyrun.constants import DEFAULT_VENDOR_ATTEMPTS
from polyrun.vendors.provider import get_entry_point


@dataclass(frozen=True)
class VendorSpec:
    """Describes a vendor runtime consulted through a capability slot.

    Attributes:
        key (str): Capability slot name.
        entry_point (str | None): Attribute or key the slot must expose to count as
            ready; None only requires the slot to exist.
        max_attempts (int): Number of re-checks (one per polling interval) before
            giving up.
        hint (str): Human-readable hint naming the resource that failed to load.
        initializer (Callable[[Any], None] | None): One-time setup run with the
            capability after it first becomes ready.
    """

    key: str
    entry_point: str | None = None
    max_attempts: int = DEFAULT_VENDOR_ATTEMPTS
    hint: str = ""
    initializer: Callable[[Any], None] | None = None


# Keys used by the built-in compilers
TYPESCRIPT: Final[str] = "typescript"
BRYTHON: Final[str] = "brython"
BRYTHON_STDLIB: Final[str] = "brythonStdlib"
MARKED: Final[str] = "marked"
SASS: Final[str] = "sass"
LESS: Final[str] = "less"


def prime_brython(capability: Any) -> None:
    """Prime the Brython runtime's global environment without running any script."""
    run = get_entry_point(capability, "brython")
    run({"debug": 1, "indexedDB": False, "pythonpath": [], "ids": []})


BUILTIN_VENDORS: Final[Mapping[str, VendorSpec]] = MappingProxyType(
    {
        spec.key: spec
        for spec in (
            VendorSpec(
                key=TYPESCRIPT,
                entry_point="transpile",
                max_attempts=30,
                hint="the TypeScript compiler script (typescript.js) did not load",
            ),
            VendorSpec(
                key=BRYTHON,
                entry_point="brython",
                max_attempts=50,
                hint="the Brython runtime script (brython.js) did not load",
                initializer=prime_brython,
            ),
            VendorSpec(
                key=BRYTHON_STDLIB,
                entry_point="VFS",
                max_attempts=50,
                hint="the Brython standard library (brython_stdlib.js) did not load",
            ),
            VendorSpec(
                key=MARKED,
                entry_point="parse",
                max_attempts=30,
                hint="the Markdown renderer script (marked.js) did not load",
            ),
            VendorSpec(
                key=SASS,
                entry_point="compile",
                max_attempts=30,
                hint="the Sass compiler script (sass.js) did not load",
            ),
            VendorSpec(
                key=LESS,
                entry_point="render",
                max_attempts=30,
                hint="the Less compiler script (less.js) did not load",
            ),
        )
    }
)


def vendor_spec_for(key: str) -> VendorSpec:
    """Return the built-in descriptor for ``key``, or a generic one for unknown keys."""
    spec: VendorSpec | None = BUILTIN_VENDORS.get(key)
    if spec is not None:
        return spec
    return VendorSpec(key=key, hint=f"no runtime is installed in slot '{key}'")
