# topmark:header:start
#
#   project      : Polyrun
#   file         : runner.py
#   file_relpath : src/polyrun/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution orchestration for the three editor slots.

A `Playground` compiles the markup, style and script slots through a
`CompilerRegistry`, runs script output on an `ExecutionSurface`, normalizes the
raw outcome with the script compiler, and assembles the preview document.

Cycle semantics:
    - Any failing slot makes the cycle terminal: the previous document and
      console history stay intact and the failure is appended as ``error``
      console messages.
    - A successful cycle replaces the document and starts a fresh console
      history holding the script's console messages.
    - Cycles are not serialized: state is applied when a cycle resolves, so the
      last cycle to resolve wins. There is no cancellation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from polyrun.compilers.types import CompileResult, ExecutionResult, RawExecution
from polyrun.config.logging import get_logger
from polyrun.core.console import ConsoleMessage
from polyrun.errors import ConfigurationError, ExecutionError
from polyrun.languages.base import Language, LanguageCategory
from polyrun.pipeline.console import ConsoleView
from polyrun.pipeline.document import build_preview_document
from polyrun.pipeline.outcomes import OutcomeBucket, RunOutcome, classify
from polyrun.pipeline.surface import DeferredSurface

if TYPE_CHECKING:
    from polyrun.compilers.base import Compiler
    from polyrun.config.logging import PolyrunLogger
    from polyrun.pipeline.surface import ExecutionSurface
    from polyrun.registry.compilers import CompilerRegistry

logger: PolyrunLogger = get_logger(__name__)

# Document assembly order
SLOT_ORDER: tuple[LanguageCategory, ...] = (
    LanguageCategory.MARKUP,
    LanguageCategory.STYLE,
    LanguageCategory.SCRIPT,
)


@dataclass(frozen=True)
class EditorSlot:
    """Source text of one editor slot, as emitted by the editor."""

    language: Language
    code: str

    @classmethod
    def of(cls, language: str | Language, code: str) -> EditorSlot:
        return cls(Language.parse(language), code)

    @property
    def category(self) -> LanguageCategory:
        return self.language.category


@dataclass(frozen=True)
class SlotResult:
    """Outcome of compiling (and, for scripts, running) one slot."""

    slot: EditorSlot
    compiled: CompileResult
    executed: ExecutionResult | None = None
    bucket: OutcomeBucket = field(default_factory=lambda: OutcomeBucket(RunOutcome.SUCCEEDED))

    @property
    def category(self) -> LanguageCategory:
        return self.slot.category

    @property
    def outcome(self) -> RunOutcome:
        return self.bucket.outcome

    @property
    def content(self) -> str:
        """Text contributed to the preview document."""
        if self.executed is not None:
            return self.executed.preview_code
        return self.compiled.code

    def failure_messages(self) -> tuple[ConsoleMessage, ...]:
        """Console messages reporting this slot's failure (empty on success)."""
        if not self.outcome.is_failure:
            return ()
        if self.executed is not None and not self.executed.success:
            return self.executed.console_messages
        name: str = self.slot.language.value
        return (ConsoleMessage.error(f"[{name}] {self.bucket.reason}"),)


@dataclass(frozen=True)
class RunReport:
    """Result of one playground cycle.

    Attributes:
        outcome (RunOutcome): Succeeded, or the first failure in slot order.
        slots (tuple[SlotResult, ...]): Per-slot results of this cycle.
        document (str | None): The current preview document after the cycle
            (unchanged on failure; None before the first success).
        console_messages (tuple[ConsoleMessage, ...]): Messages this cycle produced.
    """

    outcome: RunOutcome
    slots: tuple[SlotResult, ...]
    document: str | None
    console_messages: tuple[ConsoleMessage, ...]

    @property
    def succeeded(self) -> bool:
        return self.outcome is RunOutcome.SUCCEEDED


class Playground:
    """Compile-and-run session over the markup, style and script slots.

    Args:
        registry (CompilerRegistry): Source of compilers.
        surface (ExecutionSurface | None): Runs script output; defaults to a
            `DeferredSurface` that leaves running to the preview document.
        title (str | None): Preview document title.
    """

    def __init__(
        self,
        registry: CompilerRegistry,
        surface: ExecutionSurface | None = None,
        *,
        title: str | None = None,
    ) -> None:
        self.registry: CompilerRegistry = registry
        self.surface: ExecutionSurface = surface or DeferredSurface()
        self.console: ConsoleView = ConsoleView()
        self._title: str | None = title
        self._slots: dict[LanguageCategory, SlotResult] = {}
        self._document: str | None = None

    @property
    def document(self) -> str | None:
        """The last successfully assembled preview document."""
        return self._document

    def slot_result(self, category: LanguageCategory) -> SlotResult | None:
        """Return the result currently shown for a slot."""
        return self._slots.get(category)

    # ------------------------------ Single slot ------------------------------

    async def compile_slot(self, slot: EditorSlot) -> SlotResult:
        """Compile one slot and, for scripts, run and normalize it.

        Raises:
            ConfigurationError: If the language has no compiler.
        """
        compiler: Compiler = self.registry.get(slot.language)
        compiled: CompileResult = await self.registry.compile(slot.code, slot.language)
        if not compiled.ok:
            logger.info("Compile of '%s' failed: %s", slot.language.value, compiled.error)
            return SlotResult(slot, compiled, bucket=classify(compiled))
        if slot.category is not LanguageCategory.SCRIPT:
            return SlotResult(slot, compiled)

        raw: RawExecution = await self._execute(slot.language, compiled.code)
        executed: ExecutionResult = compiler.normalize_execution_result(raw)
        return SlotResult(slot, compiled, executed, classify(compiled, executed))

    async def _execute(self, language: Language, code: str) -> RawExecution:
        try:
            return await self.surface.execute(language, code)
        except ExecutionError as e:
            failure: ExecutionError = e
        except Exception as e:
            failure = ExecutionError(str(e) or e.__class__.__name__)
            failure.__cause__ = e
        logger.error("[%s] %s error: %s", language.value, failure.kind.value, failure)
        return RawExecution(success=False, error=str(failure))

    # ------------------------------ Cycles ------------------------------

    async def update(self, language: str | Language, code: str) -> RunReport:
        """Recompile one slot after an editor change; other slots are kept."""
        result: SlotResult = await self.compile_slot(EditorSlot.of(language, code))
        return self._apply((result,))

    async def run(self, slots: Iterable[EditorSlot] | Mapping[str | Language, str]) -> RunReport:
        """Compile all given slots concurrently and apply them as one cycle.

        Args:
            slots (Iterable[EditorSlot] | Mapping[str | Language, str]): Editor slots,
                or a ``{language: code}`` mapping. At most one slot per category.

        Raises:
            ConfigurationError: If two slots share a category or a language is
                unsupported.
        """
        if isinstance(slots, Mapping):
            editor_slots = [EditorSlot.of(lang, code) for lang, code in slots.items()]
        else:
            editor_slots = list(slots)

        seen: set[LanguageCategory] = set()
        for slot in editor_slots:
            if slot.category in seen:
                raise ConfigurationError(f"More than one {slot.category.value} slot given")
            seen.add(slot.category)

        results = await asyncio.gather(*(self.compile_slot(s) for s in editor_slots))
        return self._apply(tuple(results))

    def _apply(self, results: tuple[SlotResult, ...]) -> RunReport:
        ordered = tuple(sorted(results, key=lambda r: SLOT_ORDER.index(r.category)))
        failures = [r for r in ordered if r.outcome.is_failure]
        if failures:
            messages: list[ConsoleMessage] = []
            for failure in failures:
                messages.extend(failure.failure_messages())
            self.console.extend(messages)
            return RunReport(failures[0].outcome, ordered, self._document, tuple(messages))

        for result in ordered:
            self._slots[result.category] = result
        self._document = self._assemble()

        script: SlotResult | None = self._slots.get(LanguageCategory.SCRIPT)
        fresh: tuple[ConsoleMessage, ...] = (
            script.executed.console_messages if script and script.executed else ()
        )
        self.console.reset(fresh)
        return RunReport(RunOutcome.SUCCEEDED, ordered, self._document, fresh)

    def _assemble(self) -> str:
        parts: dict[LanguageCategory, str] = {
            category: result.content for category, result in self._slots.items()
        }
        kwargs: dict[str, str] = {}
        if self._title is not None:
            kwargs["title"] = self._title
        return build_preview_document(
            markup=parts.get(LanguageCategory.MARKUP, ""),
            style=parts.get(LanguageCategory.STYLE, ""),
            script=parts.get(LanguageCategory.SCRIPT, ""),
            **kwargs,
        )
