# topmark:header:start
#
#   project      : Polyrun
#   file         : test_compiler_registry.py
#   file_relpath : tests/registry/test_compiler_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `CompilerRegistry`: lookup, lazy instances, result cache and metadata."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from polyrun.compilers.base import Compiler
from polyrun.compilers.passthrough import PassthroughCompiler
from polyrun.compilers.types import CompileResult
from polyrun.errors import ConfigurationError
from polyrun.languages.base import Language
from polyrun.registry import CompilerRegistry
from tests.helpers import build_registry


def test_every_language_is_registered(registry: CompilerRegistry) -> None:
    assert set(registry.languages()) == set(Language)
    assert all(registry.is_registered(lang) for lang in Language)
    assert registry.is_registered("TypeScript")
    assert not registry.is_registered("cobol")


def test_unknown_tag_raises_and_caches_nothing(registry: CompilerRegistry) -> None:
    with pytest.raises(ConfigurationError, match="Unsupported language"):
        asyncio.run(registry.compile("x", "cobol"))

    stats = registry.stats()
    assert stats.cached_results == 0
    assert stats.instantiated == 0


def test_instances_are_created_lazily_and_reused(registry: CompilerRegistry) -> None:
    assert not registry.is_instantiated(Language.HTML)

    first = registry.get("html")
    second = registry.get(Language.HTML)

    assert first is second
    assert registry.is_instantiated("html")
    assert dict(registry.as_mapping()) == {Language.HTML: first}


def test_successful_results_are_cached(registry: CompilerRegistry) -> None:
    async def three() -> list[CompileResult]:
        return [
            await registry.compile("<p>hi</p>", "html"),
            await registry.compile("<p>hi</p>", "html"),
            await registry.compile("<p>hi</p>", "html", {"x": 1}),
        ]

    results = asyncio.run(three())

    assert results[0] is results[1]
    stats = registry.stats()
    assert stats.cache_hits == 1
    assert stats.cached_results == 2

    registry.clear_cache()
    assert registry.stats().cached_results == 0
    assert registry.stats().cache_hits == 0


def test_cache_evicts_least_recently_used_result() -> None:
    registry, _provider, _sleep = build_registry(cache_size=2)

    async def cycle() -> dict[str, CompileResult]:
        first = {"a": await registry.compile("a", "html"), "b": await registry.compile("b", "html")}
        await registry.compile("a", "html")  # refresh "a"
        await registry.compile("c", "html")  # evicts "b"
        return first

    first = asyncio.run(cycle())

    assert registry.stats().cached_results == 2
    assert asyncio.run(registry.compile("a", "html")) is first["a"]
    assert asyncio.run(registry.compile("b", "html")) is not first["b"]


def test_cache_stays_bounded_under_many_distinct_sources() -> None:
    registry, _provider, _sleep = build_registry(cache_size=16)

    async def many() -> None:
        for i in range(500):
            await registry.compile(f"<p>{i}</p>", "html")

    asyncio.run(many())

    assert registry.stats().cached_results == 16


def test_failures_are_not_cached() -> None:
    registry, provider, _sleep = build_registry(vendor_attempts={"marked": 1})

    first = asyncio.run(registry.compile("# hi", "markdown"))
    provider.install("marked", {"parse": lambda s, o: "<h1>hi</h1>"})
    second = asyncio.run(registry.compile("# hi", "markdown"))

    assert not first.ok
    assert second.code == "<h1>hi</h1>"
    assert registry.stats().cache_hits == 0


def test_cache_can_be_disabled() -> None:
    registry, _provider, _sleep = build_registry(cache_results=False)

    asyncio.run(registry.compile("a", "css"))
    asyncio.run(registry.compile("a", "css"))

    assert registry.stats().cached_results == 0


def test_register_overrides_and_drops_cached_state(registry: CompilerRegistry) -> None:
    class ShoutingCompiler(PassthroughCompiler):
        async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
            return CompileResult.success(source.upper())

    asyncio.run(registry.compile("<b>x</b>", "html"))
    registry.register(Language.HTML, ShoutingCompiler)

    result = asyncio.run(registry.compile("<b>x</b>", "html"))

    assert result.code == "<B>X</B>"
    assert isinstance(registry.get("html"), ShoutingCompiler)


def test_unregister_makes_language_unknown(registry: CompilerRegistry) -> None:
    assert registry.unregister(Language.LESS) is True
    assert registry.unregister(Language.LESS) is False
    with pytest.raises(ConfigurationError, match="No compiler registered"):
        registry.get("less")


def test_registry_with_explicit_class_table() -> None:
    registry = CompilerRegistry(classes={Language.CSS: PassthroughCompiler})

    assert registry.languages() == (Language.CSS,)
    assert not registry.is_registered(Language.HTML)


def test_meta_describes_every_compiler(registry: CompilerRegistry) -> None:
    metas = {m.language: m for m in registry.iter_meta()}

    assert metas["html"].kind == "passthrough"
    assert metas["html"].needs_vendor is False
    assert metas["typescript"].vendor_keys == ("typescript",)
    assert metas["scss"].category == "style"
    assert metas["markdown"].to_dict()["vendor_keys"] == ["marked"]
    assert registry.stats().instantiated == len(Language)


def test_loading_state_of_vendor_language(registry: CompilerRegistry) -> None:
    compiler: Compiler = registry.get("typescript")

    assert compiler.needs_vendor()
    assert not registry.loading_state("typescript").is_loaded
