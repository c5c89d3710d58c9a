# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/compilers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Auto-import all compiler modules in the current package."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from polyrun.config.logging import get_logger

logger = get_logger(__name__)

# Modules that hold shared machinery rather than registered compilers
_SUPPORT_MODULES: frozenset[str] = frozenset({"base", "types"})


def register_all_compilers() -> None:
    """Import all compiler modules in the current package (idempotent)."""
    package_dir = Path(__file__).parent
    for module_info in pkgutil.iter_modules([str(package_dir)]):
        if not module_info.ispkg and module_info.name not in _SUPPORT_MODULES:
            # Importing the module runs its @register_compiler decorators
            importlib.import_module(f"{__name__}.{module_info.name}")
