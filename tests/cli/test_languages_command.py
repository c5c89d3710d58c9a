# topmark:header:start
#
#   project      : Polyrun
#   file         : test_languages_command.py
#   file_relpath : tests/cli/test_languages_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `languages` listing in text, JSON and Markdown."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from polyrun.languages.base import Language
from tests.cli.conftest import assert_SUCCESS, run_cli

if TYPE_CHECKING:
    from click.testing import Result

pytestmark = pytest.mark.cli


def test_text_lists_every_language() -> None:
    result: Result = run_cli(["languages"])

    assert_SUCCESS(result)
    assert result.output.startswith("Supported languages:")
    for lang in Language:
        assert lang.value in result.output


def test_json_lists_language_and_slot() -> None:
    result: Result = run_cli(["languages", "--format", "json"])

    assert_SUCCESS(result)
    payload = json.loads(result.output)
    by_lang = {entry["language"]: entry for entry in payload}
    assert set(by_lang) == {lang.value for lang in Language}
    assert by_lang["less"] == {"language": "less", "category": "style"}


def test_json_long_includes_vendor_keys() -> None:
    result: Result = run_cli(["languages", "--format", "json", "--long"])

    assert_SUCCESS(result)
    by_lang = {entry["language"]: entry for entry in json.loads(result.output)}
    assert by_lang["python"]["vendor_keys"] == ["brython", "brythonStdlib"]
    assert by_lang["css"]["vendor_keys"] == []


def test_markdown_table() -> None:
    result: Result = run_cli(["languages", "--format", "markdown", "--long"])

    assert_SUCCESS(result)
    assert "# Supported Languages" in result.output
    assert "| `typescript`" in result.output
    assert "Vendors" in result.output
