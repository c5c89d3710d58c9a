# topmark:header:start
#
#   project      : Polyrun
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output and the bare group invocation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from polyrun.constants import POLYRUN_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli

if TYPE_CHECKING:
    from click.testing import Result

pytestmark = pytest.mark.cli


def test_version_outputs_version() -> None:
    result: Result = run_cli(["version"])

    assert_SUCCESS(result)
    assert result.output.strip() == POLYRUN_VERSION


def test_version_json_format() -> None:
    """`version --format json` returns parseable JSON with the version."""
    result: Result = run_cli(["version", "--format", "json"])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": POLYRUN_VERSION}


def test_version_markdown_format() -> None:
    result: Result = run_cli(["version", "--format", "markdown"])

    assert_SUCCESS(result)
    assert result.output.startswith("# Polyrun Version")
    assert POLYRUN_VERSION in result.output


def test_no_subcommand_prints_hint_and_help() -> None:
    result: Result = run_cli([])

    assert_SUCCESS(result)
    assert "polyrun compile FILE" in result.output
    assert "Commands:" in result.output
