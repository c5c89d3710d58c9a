# topmark:header:start
#
#   project      : Polyrun
#   file         : builtins.py
#   file_relpath : src/polyrun/languages/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in language descriptors.

Exports:
    LANGUAGE_SPECS (Mapping[Language, LanguageSpec]): One descriptor per member of
        the closed `Language` enumeration.

Notes:
    - Every `Language` member must have exactly one entry here; the registry and
      the orchestration layer rely on the mapping being exhaustive.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from polyrun.languages.base import Language, LanguageCategory, LanguageSpec

_SPECS: Final[tuple[LanguageSpec, ...]] = (
    LanguageSpec(
        language=Language.HTML,
        category=LanguageCategory.MARKUP,
        display_name="HTML",
        description="HyperText Markup Language, inserted verbatim into the document body",
        extensions=(".html", ".htm"),
    ),
    LanguageSpec(
        language=Language.MARKDOWN,
        category=LanguageCategory.MARKUP,
        display_name="Markdown",
        description="Markdown rendered to HTML by the 'marked' vendor",
        extensions=(".md", ".markdown"),
    ),
    LanguageSpec(
        language=Language.CSS,
        category=LanguageCategory.STYLE,
        display_name="CSS",
        description="Cascading Style Sheets, injected verbatim as a stylesheet",
        extensions=(".css",),
    ),
    LanguageSpec(
        language=Language.SCSS,
        category=LanguageCategory.STYLE,
        display_name="SCSS",
        description="Sass SCSS syntax compiled to CSS by the 'sass' vendor",
        extensions=(".scss",),
    ),
    LanguageSpec(
        language=Language.LESS,
        category=LanguageCategory.STYLE,
        display_name="Less",
        description="Less stylesheets compiled to CSS by the 'less' vendor",
        extensions=(".less",),
    ),
    LanguageSpec(
        language=Language.JAVASCRIPT,
        category=LanguageCategory.SCRIPT,
        display_name="JavaScript",
        description="JavaScript executed directly by the preview surface",
        extensions=(".js", ".mjs", ".cjs"),
        runs_in_surface=True,
    ),
    LanguageSpec(
        language=Language.TYPESCRIPT,
        category=LanguageCategory.SCRIPT,
        display_name="TypeScript",
        description="TypeScript transpiled to JavaScript by the 'typescript' vendor",
        extensions=(".ts", ".mts", ".cts"),
        runs_in_surface=True,
    ),
    LanguageSpec(
        language=Language.PYTHON,
        category=LanguageCategory.SCRIPT,
        display_name="Python",
        description="Python interpreted by the Brython runtime and standard library",
        extensions=(".py",),
    ),
)

LANGUAGE_SPECS: Final[Mapping[Language, LanguageSpec]] = MappingProxyType(
    {spec.language: spec for spec in _SPECS}
)
