# topmark:header:start
#
#   project      : Polyrun
#   file         : version.py
#   file_relpath : src/polyrun/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun `version` command.

Prints the current Polyrun version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from polyrun.cli.cli_types import EnumChoiceParam, OutputFormat
from polyrun.cli.cmd_common import get_console
from polyrun.constants import POLYRUN_VERSION


@click.command(
    name="version",
    help="Show the current version of Polyrun.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@click.pass_context
def version_command(ctx: click.Context, *, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Polyrun."""
    console = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": POLYRUN_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Polyrun Version\n")
        console.print(f"**Polyrun version: {POLYRUN_VERSION}**")
    else:
        console.print(console.styled(POLYRUN_VERSION, bold=True))
