# topmark:header:start
#
#   project      : Polyrun
#   file         : keys.py
#   file_relpath : src/polyrun/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for Polyrun configuration.

This module defines the authoritative string constants used when reading and
writing Polyrun configuration from TOML sources (``polyrun.toml`` and
``[tool.polyrun]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Polyrun configuration.

    Example:
        ```toml
        [runtime]
        poll_interval = 0.1
        max_code_length = 1000000
        cache_results = true
        cache_size = 256

        [vendors.typescript]
        max_attempts = 30

        [options.typescript]
        target = "ES2022"
        ```
    """

    # [runtime]
    SECTION_RUNTIME: Final[str] = "runtime"

    KEY_POLL_INTERVAL: Final[str] = "poll_interval"
    KEY_MAX_CODE_LENGTH: Final[str] = "max_code_length"
    KEY_CACHE_RESULTS: Final[str] = "cache_results"
    KEY_CACHE_SIZE: Final[str] = "cache_size"

    # [vendors.<key>]
    SECTION_VENDORS: Final[str] = "vendors"

    KEY_MAX_ATTEMPTS: Final[str] = "max_attempts"

    # [options.<language>]
    SECTION_OPTIONS: Final[str] = "options"
