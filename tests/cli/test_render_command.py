# topmark:header:start
#
#   project      : Polyrun
#   file         : test_render_command.py
#   file_relpath : tests/cli/test_render_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `render` assembles a preview document from editor slot files."""

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


@pytest.fixture
def sources(tmp_path: Path) -> dict[str, Path]:
    files = {
        "markup": tmp_path / "index.html",
        "style": tmp_path / "site.css",
        "script": tmp_path / "app.js",
    }
    files["markup"].write_text("<h1>Hello</h1>\n", encoding="utf-8")
    files["style"].write_text("h1 { color: teal; }\n", encoding="utf-8")
    files["script"].write_text("console.log('ready');\n", encoding="utf-8")
    return files


def test_document_goes_to_stdout(sources: dict[str, Path]) -> None:
    result: Result = run_cli(
        [
            "render",
            "--markup",
            str(sources["markup"]),
            "--style",
            str(sources["style"]),
            "--script",
            str(sources["script"]),
            "--title",
            "Demo",
        ]
    )

    assert_SUCCESS(result)
    assert result.output.startswith("<!DOCTYPE html>")
    assert "<title>Demo</title>" in result.output
    assert "<h1>Hello</h1>" in result.output
    assert "h1 { color: teal; }" in result.output
    assert "console.log('ready');" in result.output


def test_document_written_to_output_file(sources: dict[str, Path], tmp_path: Path) -> None:
    target: Path = tmp_path / "preview.html"

    result: Result = run_cli(["render", "--markup", str(sources["markup"]), "-o", str(target)])

    assert_SUCCESS(result)
    assert result.output == ""
    assert "<h1>Hello</h1>" in target.read_text(encoding="utf-8")


def test_json_report(sources: dict[str, Path]) -> None:
    result: Result = run_cli(
        ["render", "--style", str(sources["style"]), "--format", "json"]
    )

    assert_SUCCESS(result)
    payload = json.loads(result.output)
    assert payload["outcome"] == "succeeded"
    assert payload["slots"] == [
        {"language": "css", "category": "style", "outcome": "succeeded", "reason": None}
    ]
    assert "h1 { color: teal; }" in payload["document"]


def test_failed_slot_writes_no_document(tmp_path: Path, fast_config: Path) -> None:
    script: Path = tmp_path / "main.ts"
    script.write_text("const n: number = 1", encoding="utf-8")
    target: Path = tmp_path / "preview.html"

    result: Result = run_cli(
        ["render", "--script", str(script), "-o", str(target)], config=fast_config
    )

    assert result.exit_code == ExitCode.VENDOR_UNAVAILABLE, result.output
    assert "[error] [typescript] Vendor 'typescript'" in result.output
    assert not target.exists()


def test_category_mismatch_is_a_usage_error(sources: dict[str, Path]) -> None:
    result: Result = run_cli(["render", "--style", str(sources["script"])])

    assert_USAGE_ERROR(result)
    assert "not a style language" in result.output


def test_language_override(tmp_path: Path) -> None:
    style: Path = tmp_path / "theme.txt"
    style.write_text("body { margin: 0; }", encoding="utf-8")

    result: Result = run_cli(["render", "--style", str(style), "--style-lang", "css"])

    assert_SUCCESS(result)
    assert "body { margin: 0; }" in result.output


def test_nothing_to_render() -> None:
    assert_USAGE_ERROR(run_cli(["render"]))
