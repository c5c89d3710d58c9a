# topmark:header:start
#
#   project      : Polyrun
#   file         : transpiling.py
#   file_relpath : src/polyrun/compilers/transpiling.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compilers that convert source into another language through a vendor engine.

Vendor entry points:

| Language   | Slot         | Entry point                         | Result                     |
|------------|--------------|-------------------------------------|----------------------------|
| TypeScript | ``typescript`` | ``transpile(source, options)``    | JS text, or a mapping with ``outputText``/``sourceMapText`` |
| Markdown   | ``marked``   | ``parse(source, options)``          | HTML text                  |
| SCSS       | ``sass``     | ``compile(source, options)``        | CSS text, or a mapping with ``status``/``text``/``message`` |
| Less       | ``less``     | ``render(source, options)`` (may be awaitable) | CSS text, or a mapping with ``css`` |
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from polyrun.compilers.base import Compiler, CompilerKind
from polyrun.compilers.types import CompileResult, ExecutionResult, RawExecution
from polyrun.config.logging import get_logger
from polyrun.core.console import ConsoleLevel, ConsoleMessage
from polyrun.errors import CompileError
from polyrun.languages.base import Language
from polyrun.languages.registry import register_compiler
from polyrun.vendors import specs as vendor_keys

logger = get_logger(__name__)

# Console line prefixes relayed by the preview surface
_PREFIXES: tuple[tuple[str, ConsoleLevel], ...] = (
    ("[ERROR]", ConsoleLevel.ERROR),
    ("[WARN]", ConsoleLevel.WARN),
    ("[INFO]", ConsoleLevel.INFO),
)


def parse_console_line(line: str) -> ConsoleMessage:
    """Map one captured console line to a message, honoring severity prefixes."""
    for prefix, level in _PREFIXES:
        if line.startswith(prefix):
            return ConsoleMessage(level, line[len(prefix) :].strip())
    return ConsoleMessage.log(line)


def _require_text(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise CompileError(f"{what} returned {type(value).__name__}, expected text")
    return value


@register_compiler(Language.TYPESCRIPT)
class TypeScriptCompiler(Compiler):
    """TypeScript → JavaScript through the ``typescript`` vendor."""

    kind = CompilerKind.TRANSPILING
    vendor_keys_declared = (vendor_keys.TYPESCRIPT,)

    default_options = MappingProxyType(
        {
            "target": "ES2020",
            "module": "ES2020",
            "strict": False,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "allowJs": True,
            "sourceMap": False,
        }
    )
    required_options = MappingProxyType({"noEmit": False, "isolatedModules": True})

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        result: Any = await self.call_vendor(vendor_keys.TYPESCRIPT, "transpile", source, options)
        if isinstance(result, Mapping):
            return CompileResult.success(
                _require_text(result.get("outputText"), "TypeScript transpile"),
                source_map=result.get("sourceMapText"),
            )
        return CompileResult.success(_require_text(result, "TypeScript transpile"))

    def execution_success(self, raw: RawExecution) -> ExecutionResult:
        messages: list[ConsoleMessage] = [
            ConsoleMessage.info("TypeScript compiled successfully, running the JavaScript output")
        ]
        messages.extend(
            parse_console_line(line) for line in raw.console_output.splitlines() if line.strip()
        )
        return ExecutionResult(
            success=True,
            preview_code=raw.output,
            console_messages=tuple(messages),
            duration=raw.duration,
        )


@register_compiler(Language.MARKDOWN)
class MarkdownCompiler(Compiler):
    """Markdown → HTML through the ``marked`` vendor."""

    kind = CompilerKind.TRANSPILING
    vendor_keys_declared = (vendor_keys.MARKED,)

    default_options = MappingProxyType({"breaks": True, "gfm": True})

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        html: Any = await self.call_vendor(vendor_keys.MARKED, "parse", source, options)
        return CompileResult.success(_require_text(html, "Markdown parse"))


@register_compiler(Language.SCSS)
class ScssCompiler(Compiler):
    """SCSS → CSS through the ``sass`` vendor."""

    kind = CompilerKind.TRANSPILING
    vendor_keys_declared = (vendor_keys.SASS,)

    default_options = MappingProxyType({"style": "expanded"})

    def merge_options(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        merged: dict[str, Any] = super().merge_options(options)
        if merged.pop("minify", False):
            merged["style"] = "compressed"
        return merged

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        result: Any = await self.call_vendor(vendor_keys.SASS, "compile", source, options)
        if isinstance(result, Mapping):
            if result.get("status", 0) != 0:
                raise CompileError(str(result.get("message") or "Sass compilation failed"))
            result = result.get("text", result.get("css"))
        return CompileResult.success(_require_text(result, "Sass compile"))


@register_compiler(Language.LESS)
class LessCompiler(Compiler):
    """Less → CSS through the ``less`` vendor."""

    kind = CompilerKind.TRANSPILING
    vendor_keys_declared = (vendor_keys.LESS,)

    default_options = MappingProxyType({"compress": False})

    def merge_options(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        merged: dict[str, Any] = super().merge_options(options)
        if merged.pop("minify", False):
            merged["compress"] = True
        return merged

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        result: Any = await self.call_vendor(vendor_keys.LESS, "render", source, options)
        if isinstance(result, Mapping):
            result = result.get("css")
        return CompileResult.success(_require_text(result, "Less render"))
