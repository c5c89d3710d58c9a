# topmark:header:start
#
#   project      : Polyrun
#   file         : constants.py
#   file_relpath : src/polyrun/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

POLYRUN_VERSION: str = get_version("polyrun")

# Configuration discovery
CONFIG_FILE_NAME: Final[str] = "polyrun.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "polyrun"

# Vendor polling (one tick every 100 ms)
DEFAULT_POLL_INTERVAL: Final[float] = 0.1
DEFAULT_VENDOR_ATTEMPTS: Final[int] = 30

# Upper bound on accepted source text (characters)
DEFAULT_MAX_CODE_LENGTH: Final[int] = 1_000_000

# Most compile results kept by a registry (least recently used evicted first)
DEFAULT_CACHE_SIZE: Final[int] = 256

# Synthetic statement handed to the preview surface once an interpreted
# language has finished running; its output already lives in the console.
INTERPRETED_COMPLETION_MARKER: Final[str] = (
    "// Python code executed, output is shown in the console\n"
    "console.log('Python execution finished');"
)
