# topmark:header:start
#
#   project      : Polyrun
#   file         : test_compile_properties.py
#   file_relpath : tests/compilers/test_compile_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for passthrough compiles and interpreted output normalization.

Asserts over generated inputs that:
1) passthrough compilers return exactly the trimmed source,
2) compiling compiled output again changes nothing, and
3) each printed line becomes one log message, in order.
"""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from polyrun.compilers.types import RawExecution
from polyrun.core.console import ConsoleMessage
from polyrun.languages.base import Language
from tests.helpers import build_registry
from tests.strategies_polyrun import s_output_lines, s_padded_source

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

PASSTHROUGH = st.sampled_from([Language.HTML, Language.CSS])


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(source=s_padded_source(), language=PASSTHROUGH)
def test_passthrough_returns_trimmed_source(source: str, language: Language) -> None:
    registry, _provider, sleep = build_registry(cache_results=False)

    result = asyncio.run(registry.compile(source, language))

    assert result.ok
    assert result.code == source.strip()
    assert sleep.count == 0


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(source=s_padded_source(), language=PASSTHROUGH)
def test_compiling_compiled_output_is_stable(source: str, language: Language) -> None:
    registry, _provider, _sleep = build_registry(cache_results=False)

    async def twice() -> tuple[str, str]:
        first = await registry.compile(source, language)
        second = await registry.compile(first.code, language)
        return first.code, second.code

    first_code, second_code = asyncio.run(twice())

    assert first_code == second_code


@settings(deadline=None, max_examples=60)
@given(lines=s_output_lines(), trailing_newline=st.booleans())
def test_python_output_lines_become_logs_in_order(
    lines: list[str], trailing_newline: bool
) -> None:
    registry, _provider, _sleep = build_registry()
    output: str = "\n".join(lines) + ("\n" if trailing_newline else "")

    executed = registry.get(Language.PYTHON).normalize_execution_result(
        RawExecution(success=True, output=output)
    )

    assert executed.success
    assert executed.console_messages == tuple(ConsoleMessage.log(line) for line in lines)
