# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/vendors/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Vendor runtimes: capability providers, descriptors and the readiness loader."""

from __future__ import annotations

from polyrun.vendors.loader import VendorLoader
from polyrun.vendors.provider import CapabilityProvider, SlotCapabilityProvider
from polyrun.vendors.specs import BUILTIN_VENDORS, VendorSpec
from polyrun.vendors.state import LoaderStats, LoadingState, LoadingStatus

__all__ = [
    "BUILTIN_VENDORS",
    "CapabilityProvider",
    "LoaderStats",
    "LoadingState",
    "LoadingStatus",
    "SlotCapabilityProvider",
    "VendorLoader",
    "VendorSpec",
]
