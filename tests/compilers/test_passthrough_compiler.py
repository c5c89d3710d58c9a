# topmark:header:start
#
#   project      : Polyrun
#   file         : test_passthrough_compiler.py
#   file_relpath : tests/compilers/test_passthrough_compiler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Passthrough compilers for HTML, CSS and JavaScript."""

from __future__ import annotations

import asyncio

import pytest

from polyrun.compilers.passthrough import PassthroughCompiler
from polyrun.compilers.types import RawExecution
from polyrun.languages.base import Language
from polyrun.registry import CompilerRegistry
from tests.helpers import FakeSleep


@pytest.mark.parametrize("language", [Language.HTML, Language.CSS, Language.JAVASCRIPT])
def test_passthrough_trims_and_never_waits(
    registry: CompilerRegistry, fake_sleep: FakeSleep, language: Language
) -> None:
    result = asyncio.run(registry.compile("\n\t  body { }  \n", language))

    assert result.ok
    assert result.code == "body { }"
    assert result.error is None
    assert fake_sleep.count == 0


def test_html_inner_whitespace_is_kept(registry: CompilerRegistry) -> None:
    result = asyncio.run(registry.compile("<div>  Hi </div>", "html"))

    assert result.code == "<div>  Hi </div>"
    assert result.error is None


def test_passthrough_metadata(registry: CompilerRegistry) -> None:
    compiler = registry.get(Language.CSS)

    assert isinstance(compiler, PassthroughCompiler)
    assert compiler.name == "CSS Passthrough Compiler"
    assert compiler.needs_vendor() is False
    assert compiler.info() == {
        "name": "CSS Passthrough Compiler",
        "language": "css",
        "category": "style",
        "kind": "passthrough",
        "needs_vendor": False,
        "vendor_keys": [],
    }
    assert registry.loading_state(Language.CSS).is_loaded


def test_javascript_preview_is_what_the_surface_ran(registry: CompilerRegistry) -> None:
    compiler = registry.get(Language.JAVASCRIPT)

    executed = compiler.normalize_execution_result(
        RawExecution(success=True, output="console.log(1)", duration=1.5)
    )

    assert executed.success
    assert executed.preview_code == "console.log(1)"
    assert executed.console_messages == ()
    assert executed.duration == 1.5
