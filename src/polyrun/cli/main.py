# topmark:header:start
#
#   project      : Polyrun
#   file         : main.py
#   file_relpath : src/polyrun/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun command-line entry point.

Defines the root Click group and registers the subcommands. Global options
(verbosity, color and configuration sources) are resolved once here and
stored on ``ctx.obj`` for the subcommands.
"""

from __future__ import annotations

import click

from polyrun.cli.commands.compile import compile_command
from polyrun.cli.commands.config import config_group
from polyrun.cli.commands.languages import languages_command
from polyrun.cli.commands.render import render_command
from polyrun.cli.commands.version import version_command
from polyrun.cli.console import ClickConsole
from polyrun.cli.options import (
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from polyrun.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_files: tuple[str, ...] = (),
    no_config: bool = False,
) -> None:
    """Initialize shared state on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_files (tuple[str, ...]): Extra config files from ``--config``.
        no_config (bool): Whether ``--no-config`` was passed.
    """
    ctx.obj = ctx.obj or {}

    level_cli = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbose

    # POLYRUN_LOG_LEVEL wins; otherwise -v/-q select the level
    level_env = resolve_env_log_level()
    log_level = level_env if level_env is not None else (level_cli if verbose or quiet else None)
    ctx.obj["log_level"] = log_level

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode)
    setup_logging(level=log_level, color=enable_color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    ctx.obj["config_files"] = tuple(config_files)
    ctx.obj["no_config"] = no_config


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Polyrun: compile markup, style and script sources for a live preview.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_files: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the Polyrun CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
        config_files=config_files,
        no_config=no_config,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'polyrun compile FILE' to compile a single source.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(languages_command)

cli.add_command(compile_command)

cli.add_command(render_command)

cli.add_command(config_group)

if __name__ == "__main__":
    cli()
