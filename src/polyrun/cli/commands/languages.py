# topmark:header:start
#
#   project      : Polyrun
#   file         : languages.py
#   file_relpath : src/polyrun/cli/commands/languages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun `languages` command.

Lists every language with a registered compiler, its editor slot and the
vendor runtimes it depends on.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from polyrun.cli.cli_types import EnumChoiceParam, OutputFormat, render_markdown_table
from polyrun.cli.cmd_common import build_registry, get_console
from polyrun.constants import POLYRUN_VERSION

if TYPE_CHECKING:
    from polyrun.registry import CompilerMeta


@click.command(
    name="languages",
    help="List all supported languages.",
    epilog="""
Lists the languages Polyrun can compile, grouped by editor slot (markup, style,
script). Use these tags with 'polyrun compile --language' and in [options.<tag>]
config tables.
""",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Show extended information (compiler, kind, vendors).",
)
@click.pass_context
def languages_command(
    ctx: click.Context,
    *,
    show_details: bool = False,
    output_format: OutputFormat | None = None,
) -> None:
    """List supported languages.

    Args:
        ctx (click.Context): Current Click context.
        show_details (bool): If True, show the compiler name, kind and vendor keys.
        output_format (OutputFormat | None): Output format to use; human-readable
            text when ``None``.
    """
    console = get_console(ctx)
    metas: list[CompilerMeta] = list(build_registry(ctx).iter_meta())
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt == OutputFormat.JSON:
        payload = (
            [m.to_dict() for m in metas]
            if show_details
            else [{"language": m.language, "category": m.category} for m in metas]
        )
        console.print(json.dumps(payload, indent=2))
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print("# Supported Languages\n")
        console.print(f"Polyrun version **{POLYRUN_VERSION}** supports the following languages:\n")
        if show_details:
            headers = ["Language", "Slot", "Compiler", "Kind", "Vendors", "Description"]
            rows = [
                [
                    f"`{m.language}`",
                    m.category,
                    m.name,
                    m.kind,
                    ", ".join(m.vendor_keys),
                    m.description,
                ]
                for m in metas
            ]
        else:
            headers = ["Language", "Slot", "Description"]
            rows = [[f"`{m.language}`", m.category, m.description] for m in metas]
        console.print(render_markdown_table(headers, rows))
        return

    console.print(console.styled("Supported languages:\n", bold=True, underline=True))
    width = max((len(m.language) for m in metas), default=0)
    for m in metas:
        line = f"  {console.styled(m.language.ljust(width), bold=True)}  [{m.category}]"
        if show_details:
            vendors = ", ".join(m.vendor_keys) or "none"
            line += f"  {m.name} ({m.kind}; vendors: {vendors})"
        else:
            line += f"  {m.description}"
        console.print(line)
