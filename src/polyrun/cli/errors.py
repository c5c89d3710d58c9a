# topmark:header:start
#
#   project      : Polyrun
#   file         : errors.py
#   file_relpath : src/polyrun/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Polyrun CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from polyrun.cli.exit_codes import ExitCode


class PolyrunCliError(click.ClickException):
    """Base class for all Polyrun CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class PolyrunUsageError(PolyrunCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class PolyrunConfigError(PolyrunCliError):
    """Error for configuration errors (unknown language, invalid config)."""

    exit_code = ExitCode.CONFIG_ERROR


class PolyrunFileNotFoundError(PolyrunCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class PolyrunIOError(PolyrunCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR
