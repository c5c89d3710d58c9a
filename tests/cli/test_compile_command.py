# topmark:header:start
#
#   project      : Polyrun
#   file         : test_compile_command.py
#   file_relpath : tests/cli/test_compile_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `compile` output, language resolution and exit codes."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from polyrun.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

pytestmark = pytest.mark.cli


def test_html_file_is_trimmed(tmp_path: Path) -> None:
    page: Path = tmp_path / "page.html"
    page.write_text("\n  <div>  Hi </div>  \n", encoding="utf-8")

    result: Result = run_cli(["compile", str(page)])

    assert_SUCCESS(result)
    assert result.output == "<div>  Hi </div>\n"


def test_stdin_with_explicit_language() -> None:
    result: Result = run_cli(["compile", "-l", "css"], input_text="  a { color: red; }  \n")

    assert_SUCCESS(result)
    assert result.output == "a { color: red; }\n"


def test_json_format(tmp_path: Path) -> None:
    script: Path = tmp_path / "app.js"
    script.write_text("let a = 1;", encoding="utf-8")

    result: Result = run_cli(["compile", str(script), "--format", "json"])

    assert_SUCCESS(result)
    payload = json.loads(result.output)
    assert payload["language"] == "javascript"
    assert payload["outcome"] == "succeeded"
    assert payload["code"] == "let a = 1;"
    assert payload["error"] is None


def test_missing_vendor_exits_unavailable(tmp_path: Path, fast_config: Path) -> None:
    """Without a TypeScript runtime the compile fails once the budget is spent."""
    source: Path = tmp_path / "main.ts"
    source.write_text("let x: number = 1", encoding="utf-8")

    result: Result = run_cli(["compile", str(source)], config=fast_config)

    assert result.exit_code == ExitCode.VENDOR_UNAVAILABLE, result.output
    assert "[typescript] Vendor 'typescript' load timed out after 1 attempts" in result.output


def test_missing_vendor_json_reports_outcome(tmp_path: Path, fast_config: Path) -> None:
    source: Path = tmp_path / "main.py"
    source.write_text("print(1)", encoding="utf-8")

    result: Result = run_cli(["compile", str(source), "--format", "json"], config=fast_config)

    assert result.exit_code == ExitCode.VENDOR_UNAVAILABLE
    payload = json.loads(result.output)
    assert payload["outcome"] == "vendor_unavailable"
    assert payload["error_kind"] == "vendor_unavailable"


def test_oversized_source_is_invalid_input(tmp_path: Path) -> None:
    config: Path = tmp_path / "small.toml"
    config.write_text("[runtime]\nmax_code_length = 4\n", encoding="utf-8")
    page: Path = tmp_path / "page.html"
    page.write_text("<p>too long</p>", encoding="utf-8")

    result: Result = run_cli(["compile", str(page)], config=config)

    assert result.exit_code == ExitCode.INVALID_INPUT, result.output


def test_missing_file(tmp_path: Path) -> None:
    result: Result = run_cli(["compile", str(tmp_path / "nope.html")])

    assert result.exit_code == ExitCode.FILE_NOT_FOUND
    assert "No such file" in result.output


def test_uninferable_language_is_a_usage_error(tmp_path: Path) -> None:
    source: Path = tmp_path / "notes.txt"
    source.write_text("hello", encoding="utf-8")

    result: Result = run_cli(["compile", str(source)])

    assert_USAGE_ERROR(result)
    assert "--language" in result.output


def test_stdin_requires_language() -> None:
    result: Result = run_cli(["compile"], input_text="x")

    assert_USAGE_ERROR(result)


def test_unknown_language_option_is_rejected_by_click() -> None:
    result: Result = run_cli(["compile", "-l", "cobol"], input_text="x")

    assert result.exit_code == 2
    assert "Unsupported language" in result.output


def test_invalid_config_file_exits_config_error(tmp_path: Path) -> None:
    config: Path = tmp_path / "bad.toml"
    config.write_text("[runtime]\npoll_interval = -1\n", encoding="utf-8")

    result: Result = run_cli(["compile", "-l", "css"], input_text="a{}", config=config)

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "poll_interval" in result.output
