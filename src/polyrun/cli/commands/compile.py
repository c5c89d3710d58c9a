# topmark:header:start
#
#   project      : Polyrun
#   file         : compile.py
#   file_relpath : src/polyrun/cli/commands/compile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun `compile` command.

Compiles a single source file (or STDIN) with the compiler registered for its
language and writes the compiled text to stdout. The exit status reports the
outcome: invalid input, unavailable vendor runtime, or a rejected source each
have their own code.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import click

from polyrun.cli.cli_types import EnumChoiceParam, LanguageParam, OutputFormat
from polyrun.cli.cmd_common import build_registry, get_console, read_source, resolve_language
from polyrun.cli.exit_codes import ExitCode, exit_code_for
from polyrun.config.logging import get_logger
from polyrun.pipeline.outcomes import classify

if TYPE_CHECKING:
    from polyrun.compilers.types import CompileResult
    from polyrun.languages.base import Language
    from polyrun.pipeline.outcomes import OutcomeBucket

logger = get_logger(__name__)


@click.command(
    name="compile",
    help="Compile one source file and print the result.",
    epilog="""
The language is taken from --language or inferred from the file extension.
Use '-' to read the source from STDIN (requires --language).
""",
)
@click.argument("source", required=False, default="-", metavar="[FILE|-]")
@click.option(
    "-l",
    "--language",
    type=LanguageParam(),
    default=None,
    help="Source language tag (see 'polyrun languages').",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help="Output format (default or json).",
)
@click.pass_context
def compile_command(
    ctx: click.Context,
    *,
    source: str,
    language: Language | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Compile a single source and print the compiled text.

    Args:
        ctx (click.Context): Current Click context.
        source (str): Path to the source file, or ``-`` for STDIN.
        language (Language | None): Explicit language; inferred from ``source`` if None.
        output_format (OutputFormat | None): ``json`` for a machine-readable result.
    """
    console = get_console(ctx)
    lang: Language = resolve_language(language, source)
    code: str = read_source(source)
    registry = build_registry(ctx)

    logger.info("Compiling %s as %s", source, lang.value)
    result: CompileResult = asyncio.run(registry.compile(code, lang))
    bucket: OutcomeBucket = classify(result)

    if output_format == OutputFormat.JSON:
        payload = {"language": lang.value, "outcome": bucket.outcome.value, **result.to_dict()}
        console.print(json.dumps(payload, indent=2))
    elif result.ok:
        console.print(result.code)
    else:
        console.error(f"[{lang.value}] {result.error}")

    exit_code: ExitCode = exit_code_for(bucket.outcome)
    if exit_code != ExitCode.SUCCESS:
        ctx.exit(int(exit_code))
