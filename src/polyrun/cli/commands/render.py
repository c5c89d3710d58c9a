# topmark:header:start
#
#   project      : Polyrun
#   file         : render.py
#   file_relpath : src/polyrun/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun `render` command.

Runs one playground cycle over up to three source files (markup, style and
script) and writes the assembled preview document. Console messages of the
cycle go to stderr. On failure no document is written and the exit status
reports the first failing slot's outcome.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from polyrun.cli.cli_types import EnumChoiceParam, LanguageParam, OutputFormat
from polyrun.cli.cmd_common import build_registry, get_console, read_source, resolve_language
from polyrun.cli.errors import PolyrunConfigError, PolyrunIOError, PolyrunUsageError
from polyrun.cli.exit_codes import ExitCode, exit_code_for
from polyrun.errors import ConfigurationError
from polyrun.languages.base import Language, LanguageCategory
from polyrun.pipeline import EditorSlot, Playground

if TYPE_CHECKING:
    from polyrun.pipeline import RunReport


def _slot(
    category: LanguageCategory, path: str | None, language: Language | None
) -> EditorSlot | None:
    if path is None:
        return None
    lang: Language = resolve_language(language, path)
    if lang.category is not category:
        raise PolyrunUsageError(
            f"'{lang.value}' is a {lang.category.value} language, "
            f"not a {category.value} language ({path})"
        )
    return EditorSlot(lang, read_source(path))


def _report_to_dict(report: RunReport) -> dict[str, object]:
    return {
        "outcome": report.outcome.value,
        "slots": [
            {
                "language": r.slot.language.value,
                "category": r.category.value,
                "outcome": r.outcome.value,
                "reason": r.bucket.reason,
            }
            for r in report.slots
        ],
        "console_messages": [m.to_dict() for m in report.console_messages],
        "document": report.document if report.succeeded else None,
    }


@click.command(
    name="render",
    help="Compile markup, style and script sources into one preview document.",
)
@click.option("--markup", type=click.Path(dir_okay=False), help="Markup source (HTML, Markdown).")
@click.option("--style", type=click.Path(dir_okay=False), help="Style source (CSS, SCSS, Less).")
@click.option(
    "--script", type=click.Path(dir_okay=False), help="Script source (JavaScript, TypeScript, Python)."
)
@click.option("--markup-lang", type=LanguageParam(), default=None, help="Override markup language.")
@click.option("--style-lang", type=LanguageParam(), default=None, help="Override style language.")
@click.option("--script-lang", type=LanguageParam(), default=None, help="Override script language.")
@click.option("--title", default=None, help="Preview document title.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the document to this file instead of stdout.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help="Output format (default or json).",
)
@click.pass_context
def render_command(
    ctx: click.Context,
    *,
    markup: str | None = None,
    style: str | None = None,
    script: str | None = None,
    markup_lang: Language | None = None,
    style_lang: Language | None = None,
    script_lang: Language | None = None,
    title: str | None = None,
    output: str | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Render a preview document from up to three editor slots."""
    console = get_console(ctx)
    slots = [
        s
        for s in (
            _slot(LanguageCategory.MARKUP, markup, markup_lang),
            _slot(LanguageCategory.STYLE, style, style_lang),
            _slot(LanguageCategory.SCRIPT, script, script_lang),
        )
        if s is not None
    ]
    if not slots:
        raise PolyrunUsageError("Nothing to render; pass at least one of --markup/--style/--script.")

    playground = Playground(build_registry(ctx), title=title)
    try:
        report: RunReport = asyncio.run(playground.run(slots))
    except ConfigurationError as e:
        raise PolyrunConfigError(str(e)) from e

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(_report_to_dict(report), indent=2))
    else:
        for msg in report.console_messages:
            console.message(msg)
        if report.succeeded and report.document is not None:
            if output:
                try:
                    Path(output).write_text(report.document, encoding="utf-8")
                except OSError as e:
                    raise PolyrunIOError(f"Cannot write {output}: {e}") from e
            else:
                console.print(report.document)

    exit_code: ExitCode = exit_code_for(report.outcome)
    if exit_code != ExitCode.SUCCESS:
        ctx.exit(int(exit_code))
