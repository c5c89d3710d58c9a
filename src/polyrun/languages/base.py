# topmark:header:start
#
#   project      : Polyrun
#   file         : base.py
#   file_relpath : src/polyrun/languages/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Language definitions for Polyrun.

Defines the closed `Language` enumeration, the `LanguageCategory` each language
belongs to, and the `LanguageSpec` descriptor carrying display metadata and the
file extensions used to infer a language from a path.

A language belongs to exactly one category. The category decides how compiled
output enters the generated preview document:

- ``markup``: merged into the document body,
- ``style``: injected as stylesheet text,
- ``script``: executed as program text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from polyrun.config.logging import PolyrunLogger, get_logger
from polyrun.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

logger: PolyrunLogger = get_logger(__name__)


class LanguageCategory(Enum):
    """Editor slot a language is compiled for.

    Attributes:
        MARKUP: Output becomes document body content.
        STYLE: Output becomes a stylesheet block.
        SCRIPT: Output is executed as program text.
    """

    MARKUP = "markup"
    STYLE = "style"
    SCRIPT = "script"


class Language(Enum):
    """Closed enumeration of supported source languages."""

    HTML = "html"
    MARKDOWN = "markdown"
    CSS = "css"
    SCSS = "scss"
    LESS = "less"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"

    @classmethod
    def parse(cls, tag: str | Language) -> Language:
        """Return the `Language` for a tag.

        Args:
            tag (str | Language): A language tag (case-insensitive) or a member.

        Returns:
            Language: The matching language.

        Raises:
            ConfigurationError: If the tag is outside the closed enumeration.
        """
        if isinstance(tag, Language):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported language: {tag!r}") from None

    @property
    def category(self) -> LanguageCategory:
        """Return the category (editor slot) of this language."""
        return get_language_spec(self).category


@dataclass(frozen=True)
class LanguageSpec:
    """Describes a language recognized by Polyrun.

    Attributes:
        language (Language): The language this descriptor belongs to.
        category (LanguageCategory): The editor slot the language compiles for.
        display_name (str): Human-readable name (e.g. ``"TypeScript"``).
        description (str): Short description of how the language is handled.
        extensions (tuple[str, ...]): Filename extensions (with leading dot) used to
            infer the language from a path.
        runs_in_surface (bool): Whether the preview surface can execute the compiled
            output directly (JavaScript and transpiled TypeScript can; Python only
            contributes a completion marker).
    """

    language: Language
    category: LanguageCategory
    display_name: str
    description: str = ""
    extensions: tuple[str, ...] = field(default_factory=tuple)
    runs_in_surface: bool = False

    @property
    def name(self) -> str:
        """Return the language tag."""
        return self.language.value

    def matches(self, path: Path) -> bool:
        """Return True if the path's suffix is one of this language's extensions."""
        return path.suffix.lower() in self.extensions


def get_language_spec(language: Language) -> LanguageSpec:
    """Return the built-in `LanguageSpec` for a language."""
    from polyrun.languages.builtins import LANGUAGE_SPECS

    return LANGUAGE_SPECS[language]


def language_for_path(path: Path) -> Language | None:
    """Infer a language from a file path's extension.

    Args:
        path (Path): The path to inspect.

    Returns:
        Language | None: The first language whose extensions match, or None.
    """
    from polyrun.languages.builtins import LANGUAGE_SPECS

    for spec in LANGUAGE_SPECS.values():
        if spec.matches(path):
            logger.debug("Language '%s' detected for file: %s", spec.name, path)
            return spec.language
    logger.warning("File '%s' cannot be resolved to a supported language", path)
    return None


def languages_in(category: LanguageCategory) -> tuple[Language, ...]:
    """Return all languages belonging to a category, in declaration order."""
    return tuple(lang for lang in Language if lang.category is category)
