# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/languages/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Supported languages, their categories and descriptors."""

from __future__ import annotations

from .base import (
    Language,
    LanguageCategory,
    LanguageSpec,
    get_language_spec,
    language_for_path,
    languages_in,
)

__all__ = [
    "Language",
    "LanguageCategory",
    "LanguageSpec",
    "get_language_spec",
    "language_for_path",
    "languages_in",
]
