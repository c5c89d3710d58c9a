# topmark:header:start
#
#   project      : Polyrun
#   file         : registry.py
#   file_relpath : src/polyrun/languages/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Class table mapping languages to compiler classes.

This module provides a decorator to register `Compiler` implementations for one
or more languages. Only classes are recorded here; instances are created lazily
by an explicitly constructed `polyrun.registry.CompilerRegistry`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from polyrun.config.logging import get_logger
from polyrun.languages.base import Language

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from polyrun.compilers.base import Compiler

logger = get_logger(__name__)

C = TypeVar("C", bound="type[Compiler]")

_registry: dict[Language, type[Compiler]] = {}


def register_compiler(*languages: Language) -> Callable[[C], C]:
    """Class decorator to register a `Compiler` for one or more languages.

    Args:
        *languages (Language): Languages compiled by the decorated class.

    Returns:
        Callable[[C], C]: A decorator that records the class in the table.

    Raises:
        ValueError: If no language is given or a language already has a compiler.
    """
    if not languages:
        raise ValueError("register_compiler() requires at least one language")

    def decorator(cls: C) -> C:
        for language in languages:
            logger.debug("Registering compiler %s for language: %s", cls.__name__, language.value)
            if language in _registry:
                raise ValueError(f"Language '{language.value}' already has a registered compiler.")
            _registry[language] = cls
        return cls

    return decorator


def get_compiler_class_registry() -> Mapping[Language, type[Compiler]]:
    """Return a read-only view of the language → compiler class table."""
    return MappingProxyType(_registry)
