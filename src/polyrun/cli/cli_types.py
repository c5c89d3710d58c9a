# topmark:header:start
#
#   project      : Polyrun
#   file         : cli_types.py
#   file_relpath : src/polyrun/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and output helpers for Polyrun.

Defines the `--format` output formats, a generic Click parameter type for
Enum-valued options, a parameter type accepting language tags, and a small
Markdown table renderer used by listing commands.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Generic, NoReturn, Protocol, TypeVar, cast

import click

from polyrun.errors import ConfigurationError
from polyrun.languages.base import Language

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable).
      MARKDOWN: Markdown tables, for listing commands.

    Notes:
      - Machine formats must not include ANSI color.
      - Use with `EnumChoiceParam` to parse ``--format`` from Click.
    """

    DEFAULT = "default"
    JSON = "json"
    MARKDOWN = "markdown"


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Converts a string to a member of the Enum."""
        if value is None:
            return None
        if isinstance(value, self.enum_cls):
            return value

        # Case-insensitive lookup by the enum's string value
        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }

        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_POLYRUN_COMPLETE=bash_source polyrun)"`
        Zsh: `eval "$(_POLYRUN_COMPLETE=zsh_source polyrun)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        return [
            RuntimeCompletionItem(str(getattr(e, "value", e)))
            for e in cast("Iterable[E]", self.enum_cls)
            if str(getattr(e, "value", e)).lower().startswith(prefix)
        ]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumParam({self.enum_cls.__name__})"


class LanguageParam(EnumChoiceParam[Language]):
    """Language tag option, accepting the same spellings as `Language.parse`."""

    def __init__(self) -> None:
        super().__init__(Language)
        self.name = "language"

    def convert(
        self,
        value: str | Language | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> Language | None:
        if value is None:
            return None
        try:
            return Language.parse(value)
        except ConfigurationError as e:
            self._fail_noreturn(f"{e}. Must be one of: {', '.join(self.choices)}", param, ctx)


def render_markdown_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    align: Mapping[int, str] | None = None,
) -> str:
    """Render a GitHub-flavoured Markdown table with padded columns.

    Args:
      headers: Column headers.
      rows: A sequence of row sequences (each row same length as ``headers``).
      align: Optional mapping of column index to alignment: ``"left"`` (default),
        ``"right"``, or ``"center"``.

    Returns:
      The Markdown table as a single string (ending with a newline).
    """
    if not headers:
        return ""
    ncols = len(headers)
    for r in rows:
        if len(r) != ncols:
            raise ValueError("All rows must have the same number of columns as headers")

    widths = [len(str(h)) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(str(cell)))

    def _rule(i: int) -> str:
        mode = (align or {}).get(i, "left")
        w = max(widths[i], 3)
        if mode == "right":
            return "-" * (w - 1) + ":"
        if mode == "center":
            return ":" + "-" * (w - 2) + ":"
        return ":" + "-" * (w - 1)

    lines: list[str] = [
        "| " + " | ".join(f"{str(headers[i]):<{widths[i]}}" for i in range(ncols)) + " |",
        "| " + " | ".join(_rule(i) for i in range(ncols)) + " |",
    ]
    for r in rows:
        lines.append("| " + " | ".join(f"{str(r[i]):<{widths[i]}}" for i in range(ncols)) + " |")
    return "\n".join(lines) + "\n"
