# topmark:header:start
#
#   project      : Polyrun
#   file         : test_preview_document.py
#   file_relpath : tests/pipeline/test_preview_document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Preview document assembly and console bridge messages."""

from __future__ import annotations

from typing import Any

import pytest

from polyrun.core.console import ConsoleLevel, ConsoleMessage
from polyrun.pipeline import build_preview_document, parse_bridge_message
from polyrun.pipeline.document import DEFAULT_TITLE


def test_document_places_each_slot() -> None:
    doc = build_preview_document(markup="<main>x</main>", style="main{}", script="go();")

    assert doc.startswith("<!DOCTYPE html>")
    assert f"<title>{DEFAULT_TITLE}</title>" in doc
    assert doc.index("main{}") < doc.index("<main>x</main>") < doc.index("go();")
    assert "window.parent.postMessage" in doc
    assert "unhandledrejection" in doc


@pytest.mark.parametrize(
    ("style_tag", "script_tag"),
    [("style", "script"), ("STYLE", "SCRIPT"), ("Style", "Script")],
)
def test_closing_tags_cannot_escape_their_blocks(style_tag: str, script_tag: str) -> None:
    doc = build_preview_document(
        style=f"a{{}}</{style_tag}><b>",
        script=f"console.log('</{script_tag}><b>x</b>');",
    )

    assert doc.lower().count("</style>") == 1
    assert doc.lower().count("</script>") == 1
    assert f"<\\/{style_tag}>" in doc
    assert f"<\\/{script_tag}>" in doc


def test_empty_document_is_well_formed() -> None:
    doc = build_preview_document()

    assert "<body>" in doc and "</html>" in doc


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"type": "console", "level": "warn", "args": ["a", "1"]}, ConsoleMessage.warn("a 1")),
        ({"type": "console", "level": "error", "args": "x"}, ConsoleMessage.error("x")),
        ({"type": "console", "args": []}, ConsoleMessage.log("")),
        ({"type": "console", "level": "debug", "args": ["d"]}, ConsoleMessage.log("d")),
    ],
)
def test_bridge_messages_become_console_messages(
    data: dict[str, Any], expected: ConsoleMessage
) -> None:
    assert parse_bridge_message(data) == expected


def test_foreign_messages_are_ignored() -> None:
    assert parse_bridge_message({"type": "resize", "height": 10}) is None


def test_message_to_dict() -> None:
    assert ConsoleMessage(ConsoleLevel.INFO, "hi").to_dict() == {"type": "info", "message": "hi"}
