# topmark:header:start
#
#   project      : Polyrun
#   file         : config.py
#   file_relpath : src/polyrun/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Polyrun `config` commands.

``config dump`` emits the effective configuration as TOML after merging the
defaults, discovered config files and any ``--config`` files. The output is
wrapped between ``# === BEGIN ===`` and ``# === END ===`` markers for easy
parsing in tests or tooling.

``config defaults`` shows the built-in defaults, including the retry budget of
every known vendor runtime.
"""

from __future__ import annotations

import click

from polyrun.cli.cmd_common import get_config, get_console
from polyrun.config import default_config
from polyrun.config.logging import get_logger
from polyrun.vendors.specs import BUILTIN_VENDORS

logger = get_logger(__name__)

BEGIN_MARKER = "# === BEGIN ==="
END_MARKER = "# === END ==="


@click.group(name="config", help="Inspect Polyrun configuration.")
def config_group() -> None:
    """Group for configuration inspection commands."""


@config_group.command(name="dump", help="Dump the merged Polyrun configuration as TOML.")
@click.pass_context
def dump_config_command(ctx: click.Context) -> None:
    """Print the merged configuration between BEGIN/END markers."""
    console = get_console(ctx)
    config = get_config(ctx)
    logger.trace("Effective config: %s", config)

    console.print(console.styled("# Merged Polyrun config (TOML)", bold=True))
    for source in config.config_files:
        console.print(f"# source: {source}")
    console.print(BEGIN_MARKER)
    console.print(console.styled(config.to_toml().rstrip("\n"), fg="cyan"))
    console.print(END_MARKER)


@config_group.command(name="defaults", help="Display the built-in default configuration.")
@click.pass_context
def show_defaults_command(ctx: click.Context) -> None:
    """Print the built-in defaults, with per-vendor retry budgets filled in."""
    console = get_console(ctx)
    draft = default_config().thaw()
    draft.vendor_attempts = {key: spec.max_attempts for key, spec in BUILTIN_VENDORS.items()}
    console.print(console.styled(draft.freeze().to_toml().rstrip("\n"), fg="cyan"))
