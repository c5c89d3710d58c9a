# topmark:header:start
#
#   project      : Polyrun
#   file         : test_compiler_contract.py
#   file_relpath : tests/compilers/test_compiler_contract.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Behavior shared by every compiler: validation, vendor gating, error normalization."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from polyrun.compilers import register_all_compilers
from polyrun.compilers.base import Compiler, CompilerKind
from polyrun.compilers.types import CompileResult
from polyrun.errors import ErrorKind
from polyrun.languages.base import Language
from polyrun.languages.registry import get_compiler_class_registry, register_compiler
from polyrun.registry import CompilerRegistry
from polyrun.vendors import SlotCapabilityProvider, VendorLoader
from tests.helpers import FakeSleep, build_registry, make_config, noop_transpile


class MissingEngineCompiler(Compiler):
    """Compiler depending on a vendor nobody installs."""

    kind = CompilerKind.TRANSPILING
    vendor_keys_declared = ("missingEngine",)

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        return CompileResult.success(source)


def test_missing_engine_yields_empty_code_and_names_engine(
    loader: VendorLoader, fake_sleep: FakeSleep
) -> None:
    compiler = MissingEngineCompiler(Language.JAVASCRIPT, loader)

    result = asyncio.run(compiler.compile("x"))

    assert result.code == ""
    assert result.error is not None and "missingEngine" in result.error
    assert result.error_kind is ErrorKind.VENDOR_UNAVAILABLE
    assert fake_sleep.count == 30


@pytest.mark.parametrize("code", [None, 42, b"bytes", ["x"]])
def test_non_string_input_is_a_validation_error(registry: CompilerRegistry, code: object) -> None:
    result = asyncio.run(registry.compile(code, Language.HTML))

    assert result.code == ""
    assert result.error_kind is ErrorKind.VALIDATION
    assert "must be a string" in (result.error or "")


def test_oversized_input_is_rejected_before_vendor_wait() -> None:
    registry, _provider, sleep = build_registry(max_code_length=8)

    result = asyncio.run(registry.compile("let x = 1000;", Language.TYPESCRIPT))

    assert result.error_kind is ErrorKind.VALIDATION
    assert "too long" in (result.error or "")
    assert sleep.count == 0


def test_repeated_compiles_are_idempotent_after_readiness() -> None:
    provider = SlotCapabilityProvider({"typescript": {"transpile": noop_transpile}})
    sleep = FakeSleep()
    config = make_config(cache_results=False)
    compiler = CompilerRegistry(
        VendorLoader(provider, config=config, sleep=sleep), config=config
    ).get("typescript")

    async def twice() -> tuple[CompileResult, CompileResult]:
        return await compiler.compile(" let a = 1 "), await compiler.compile(" let a = 1 ")

    first, second = asyncio.run(twice())

    assert first == second == CompileResult.success("let a = 1")


def test_config_options_sit_between_defaults_and_call_site() -> None:
    config = make_config(compile_options={Language.TYPESCRIPT: {"target": "ES2017", "strict": True}})
    loader = VendorLoader(SlotCapabilityProvider(), config=config, sleep=FakeSleep())
    compiler = CompilerRegistry(loader, config=config).get(Language.TYPESCRIPT)

    merged = compiler.merge_options({"strict": False})

    assert merged["target"] == "ES2017"
    assert merged["strict"] is False
    assert merged["module"] == "ES2020"


def test_duplicate_registration_is_rejected() -> None:
    register_all_compilers()
    with pytest.raises(ValueError):
        register_compiler(Language.HTML)(MissingEngineCompiler)
    assert get_compiler_class_registry()[Language.HTML].__name__ == "PassthroughCompiler"


def test_base_transform_is_abstract(loader: VendorLoader) -> None:
    result = asyncio.run(Compiler(Language.HTML, loader).compile("<p>"))

    assert result.error_kind is ErrorKind.COMPILE
    assert result.error == "NotImplementedError"
