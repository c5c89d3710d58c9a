# topmark:header:start
#
#   project      : Polyrun
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Polyrun through Click's test runner.

`run_cli()` always passes ``--no-color`` and ``--no-config`` so that results do
not depend on the terminal or on config files found above the test directory.
The `fast_config` fixture writes a config file that shortens vendor polling, so
commands targeting vendor-backed languages fail quickly (the CLI ships no
script runtimes).
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Sequence

import pytest
from click.testing import CliRunner, Result

from polyrun.cli.exit_codes import ExitCode
from polyrun.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


FAST_CONFIG = """\
[runtime]
poll_interval = 0.001

[vendors.typescript]
max_attempts = 1

[vendors.brython]
max_attempts = 1

[vendors.brythonStdlib]
max_attempts = 1
"""


def run_cli(
    argv: Sequence[str],
    *,
    input_text: str | bytes | IO[Any] | None = None,
    config: Path | None = None,
) -> Result:
    """Invoke the CLI with color and config discovery disabled.

    Args:
        argv (Sequence[str]): Arguments following the global options, e.g.
            ``["compile", "page.html"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.
        config (Path | None): Extra config file passed via ``--config``.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    prefix: list[str] = ["--no-color", "--no-config"]
    if config is not None:
        prefix += ["--config", str(config)]
    return CliRunner().invoke(cli, [*prefix, *argv], input=input_text)


@pytest.fixture
def fast_config(tmp_path: Path) -> Path:
    """Config file with a one-attempt vendor budget and a tiny poll interval."""
    path = tmp_path / "fast.toml"
    path.write_text(FAST_CONFIG, encoding="utf-8")
    return path


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output
