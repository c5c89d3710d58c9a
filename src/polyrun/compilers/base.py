# topmark:header:start
#
#   project      : Polyrun
#   file         : base.py
#   file_relpath : src/polyrun/compilers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compiler base module for Polyrun's compile-and-execute pipeline.

This module defines the `Compiler` base class: the contract every language
compiler implements, plus the shared machinery behind it.

Responsibilities:
    - **Validation:** reject non-string input and input longer than the configured
      maximum (see `Compiler.validate`).
    - **Vendor gating:** wait for every declared vendor through the
      `VendorLoader` before transforming (see `Compiler.vendor_keys`).
    - **Preprocessing:** trim surrounding whitespace (see `Compiler.preprocess`).
    - **Transformation:** the per-language step (see `Compiler.transform`).
    - **Error normalization:** every failure becomes a `CompileResult` with an
      ``error`` (see `Compiler.handle_error`); `Compiler.compile` never raises.
    - **Execution normalization:** map a surface's `RawExecution` to the canonical
      `ExecutionResult` (see `Compiler.normalize_execution_result`).

Option layering (lowest → highest precedence):
    1) ``default_options`` declared by the compiler
    2) ``[options.<language>]`` from configuration
    3) options passed to `Compiler.compile`
    4) ``required_options`` declared by the compiler (always win)
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from polyrun.compilers.types import CompileResult, ExecutionResult, RawExecution
from polyrun.config.logging import get_logger
from polyrun.config.model import Config, default_config
from polyrun.core.console import ConsoleMessage
from polyrun.errors import ErrorKind, PolyrunError, ValidationError, VendorUnavailable
from polyrun.languages.base import Language, LanguageSpec, get_language_spec
from polyrun.vendors.provider import get_entry_point

if TYPE_CHECKING:
    from polyrun.config.logging import PolyrunLogger
    from polyrun.vendors.loader import VendorLoader

logger: PolyrunLogger = get_logger(__name__)


class CompilerKind(Enum):
    """Execution model of a compiler."""

    PASSTHROUGH = "passthrough"
    TRANSPILING = "transpiling"
    INTERPRETING = "interpreting"


class Compiler:
    """Base class for language compilers.

    Subclasses set ``kind``, ``vendor_keys_declared``, option tables, and
    implement `transform`. A compiler instance is bound to one `Language`; the
    registry creates at most one instance per language.

    Args:
        language (Language): The language this instance compiles.
        loader (VendorLoader): Vendor readiness gate shared by all compilers.
        config (Config | None): Runtime configuration; defaults to built-ins.
    """

    kind: CompilerKind = CompilerKind.PASSTHROUGH

    # Vendor slots whose readiness gates `compile`
    vendor_keys_declared: tuple[str, ...] = ()

    default_options: Mapping[str, Any] = MappingProxyType({})
    required_options: Mapping[str, Any] = MappingProxyType({})

    def __init__(
        self,
        language: Language,
        loader: VendorLoader,
        *,
        config: Config | None = None,
    ) -> None:
        self.language: Language = language
        self.spec: LanguageSpec = get_language_spec(language)
        self.loader: VendorLoader = loader
        self.config: Config = config or default_config()
        loader.declare(language, self.vendor_keys())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(language={self.language.value!r})"

    @property
    def name(self) -> str:
        """Human-readable compiler name."""
        return f"{self.spec.display_name} Compiler"

    # ----------------------------- Declarations -----------------------------

    def needs_vendor(self) -> bool:
        return bool(self.vendor_keys())

    def vendor_keys(self) -> tuple[str, ...]:
        return self.vendor_keys_declared

    def info(self) -> dict[str, Any]:
        """Return stable metadata describing this compiler."""
        return {
            "name": self.name,
            "language": self.language.value,
            "category": self.spec.category.value,
            "kind": self.kind.value,
            "needs_vendor": self.needs_vendor(),
            "vendor_keys": list(self.vendor_keys()),
        }

    # ------------------------------- Compile -------------------------------

    def validate(self, code: object) -> str:
        """Return ``code`` if it is acceptable source text.

        Raises:
            ValidationError: If ``code`` is not a string or is too long.
        """
        if not isinstance(code, str):
            raise ValidationError(f"Source code must be a string, got {type(code).__name__}")
        limit: int = self.config.max_code_length
        if len(code) > limit:
            raise ValidationError(
                f"Source code is too long ({len(code)} characters, maximum is {limit})"
            )
        return code

    def preprocess(self, code: str) -> str:
        return code.strip()

    def merge_options(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Layer compile options; required options always win."""
        merged: dict[str, Any] = dict(self.default_options)
        merged.update(self.config.options_for(self.language))
        merged.update(options or {})
        merged.update(self.required_options)
        return merged

    async def compile(self, code: object, options: Mapping[str, Any] | None = None) -> CompileResult:
        """Compile source text into a `CompileResult`.

        Args:
            code (object): Source text; anything other than ``str`` fails validation.
            options (Mapping[str, Any] | None): Call-site compile options.

        Returns:
            CompileResult: The compiled output, or an empty ``code`` with ``error``
                set. This method never raises.
        """
        try:
            source: str = self.validate(code)
            if self.needs_vendor():
                await self.loader.ensure_ready(self.language, self.vendor_keys())
            result: CompileResult = await self.transform(
                self.preprocess(source), self.merge_options(options)
            )
        except Exception as e:
            return self.handle_error(e)
        logger.debug("%s produced %d characters", self.name, len(result.code))
        return result

    async def transform(self, source: str, options: dict[str, Any]) -> CompileResult:
        """Transform preprocessed source; raise on failure.

        Subclasses must override this method.
        """
        raise NotImplementedError

    def handle_error(self, exc: BaseException) -> CompileResult:
        """Convert an exception into a failed `CompileResult`."""
        kind: ErrorKind = ErrorKind.COMPILE
        if isinstance(exc, PolyrunError) and exc.kind is not None:
            kind = exc.kind
        message: str = str(exc) or exc.__class__.__name__
        logger.error("[%s] %s error: %s", self.name, kind.value, message)
        return CompileResult.failure(message, kind)

    # ----------------------------- Vendor access -----------------------------

    def entry_point(self, key: str, name: str) -> Any:
        """Return the entry point ``name`` of the vendor capability ``key``.

        Raises:
            VendorUnavailable: If the slot was emptied (or lost its entry point)
                after the vendor became ready.
        """
        try:
            return get_entry_point(self.loader.capability(key), name)
        except KeyError:
            self.loader.invalidate(key)
            raise VendorUnavailable(key, self.loader.spec_for(key).hint) from None

    async def call_vendor(self, key: str, name: str, *args: Any) -> Any:
        """Call a vendor entry point, awaiting the result when it is awaitable."""
        result: Any = self.entry_point(key, name)(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    # ---------------------------- Execution results ----------------------------

    def normalize_execution_result(self, raw: RawExecution) -> ExecutionResult:
        """Map a surface's raw outcome to the canonical `ExecutionResult`."""
        if not raw.success:
            return self.execution_failure(raw)
        return self.execution_success(raw)

    def execution_success(self, raw: RawExecution) -> ExecutionResult:
        """Surface-run code: the preview is exactly what the surface ran."""
        return ExecutionResult(
            success=True,
            preview_code=raw.output,
            console_messages=(),
            duration=raw.duration,
        )

    def execution_failure(self, raw: RawExecution) -> ExecutionResult:
        error: str = raw.error or f"{self.spec.display_name} execution failed"
        return ExecutionResult(
            success=False,
            preview_code=(
                f"// {self.spec.display_name} execution failed\n"
                f"console.error({json.dumps(error)});"
            ),
            console_messages=(ConsoleMessage.error(error),),
            duration=raw.duration,
            error=error,
        )
