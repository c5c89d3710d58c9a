# topmark:header:start
#
#   project      : Polyrun
#   file         : compilers.py
#   file_relpath : src/polyrun/registry/compilers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compiler registry: one lazily created compiler per language.

The registry is an explicitly constructed object, passed to the call sites that
need it; there is no process-wide instance. The first request for a language
instantiates its compiler class (from the `register_compiler` class table) and
caches it; later requests reuse the instance.

Typical usage:
    ```python
    from polyrun.registry import CompilerRegistry
    from polyrun.vendors import SlotCapabilityProvider

    provider = SlotCapabilityProvider()
    registry = CompilerRegistry(provider=provider)
    result = await registry.compile("<p>hi</p>", "html")
    ```

Unknown tags raise `ConfigurationError`; they are programming-time mistakes
since the language set is closed.
"""

from __future__ import annotations

import json
from collections import OrderedDict
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from polyrun.compilers import register_all_compilers
from polyrun.config.logging import get_logger
from polyrun.config.model import Config, default_config
from polyrun.errors import ConfigurationError
from polyrun.languages.base import Language
from polyrun.languages.registry import get_compiler_class_registry
from polyrun.vendors.loader import VendorLoader
from polyrun.vendors.provider import SlotCapabilityProvider

if TYPE_CHECKING:
    from polyrun.compilers.base import Compiler
    from polyrun.compilers.types import CompileResult
    from polyrun.config.logging import PolyrunLogger
    from polyrun.vendors.provider import CapabilityProvider
    from polyrun.vendors.state import LoadingState

logger: PolyrunLogger = get_logger(__name__)

CacheKey = tuple[Language, str, str]


@dataclass(frozen=True)
class CompilerMeta:
    """Stable, serializable metadata about a registered compiler."""

    language: str
    name: str
    category: str
    kind: str
    needs_vendor: bool
    vendor_keys: tuple[str, ...] = ()
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "name": self.name,
            "category": self.category,
            "kind": self.kind,
            "needs_vendor": self.needs_vendor,
            "vendor_keys": list(self.vendor_keys),
            "description": self.description,
        }


@dataclass(frozen=True)
class RegistryStats:
    """Registry counters."""

    registered: int
    instantiated: int
    cached_results: int
    cache_hits: int


class CompilerRegistry:
    """Maps languages to cached compiler instances.

    Args:
        loader (VendorLoader | None): Vendor gate shared by all compilers. Built
            from ``provider`` and ``config`` when omitted.
        provider (CapabilityProvider | None): Capability provider for a new loader;
            an empty `SlotCapabilityProvider` when omitted.
        config (Config | None): Runtime configuration; defaults to built-ins.
        classes (Mapping[Language, type[Compiler]] | None): Class table; defaults to
            the table filled by `register_compiler`.
    """

    def __init__(
        self,
        loader: VendorLoader | None = None,
        *,
        provider: CapabilityProvider | None = None,
        config: Config | None = None,
        classes: Mapping[Language, type[Compiler]] | None = None,
    ) -> None:
        self.config: Config = config or default_config()
        self.loader: VendorLoader = loader or VendorLoader(
            provider if provider is not None else SlotCapabilityProvider(),
            config=self.config,
        )
        if classes is None:
            register_all_compilers()
            classes = get_compiler_class_registry()
        self._classes: dict[Language, type[Compiler]] = dict(classes)
        self._instances: dict[Language, Compiler] = {}
        self._results: OrderedDict[CacheKey, CompileResult] = OrderedDict()
        self._cache_hits: int = 0

    # ------------------------------ Lookup ------------------------------

    def _resolve(self, language: str | Language) -> Language:
        lang: Language = Language.parse(language)
        if lang not in self._classes:
            raise ConfigurationError(f"No compiler registered for language: {lang.value!r}")
        return lang

    def get(self, language: str | Language) -> Compiler:
        """Return the compiler for a language, creating it on first request.

        Raises:
            ConfigurationError: If the tag is unsupported or has no compiler.
        """
        lang: Language = self._resolve(language)
        compiler: Compiler | None = self._instances.get(lang)
        if compiler is None:
            compiler = self._classes[lang](lang, self.loader, config=self.config)
            self._instances[lang] = compiler
            logger.debug("Instantiated %r", compiler)
        return compiler

    def is_registered(self, language: str | Language) -> bool:
        """Return True if ``language`` is a supported tag with a compiler."""
        try:
            self._resolve(language)
        except ConfigurationError:
            return False
        return True

    def is_instantiated(self, language: str | Language) -> bool:
        """Return True if a compiler instance is cached for ``language``."""
        try:
            return Language.parse(language) in self._instances
        except ConfigurationError:
            return False

    def languages(self) -> tuple[Language, ...]:
        """Return the languages with a registered compiler, in declaration order."""
        return tuple(lang for lang in Language if lang in self._classes)

    def as_mapping(self) -> Mapping[Language, Compiler]:
        """Return a read-only view of the compilers instantiated so far."""
        return MappingProxyType(self._instances)

    def iter_meta(self) -> Iterator[CompilerMeta]:
        """Iterate over stable metadata for every registered compiler.

        Yields:
            CompilerMeta: Serializable metadata (instantiates compilers on demand).
        """
        for lang in self.languages():
            compiler: Compiler = self.get(lang)
            info: dict[str, Any] = compiler.info()
            yield CompilerMeta(
                language=info["language"],
                name=info["name"],
                category=info["category"],
                kind=info["kind"],
                needs_vendor=info["needs_vendor"],
                vendor_keys=tuple(info["vendor_keys"]),
                description=compiler.spec.description,
            )

    # Optional: mutation
    def register(self, language: Language, compiler_class: type[Compiler]) -> None:
        """Bind ``compiler_class`` to ``language`` for this registry only.

        Any cached instance and cached results for the language are dropped.
        """
        self._classes[language] = compiler_class
        self._instances.pop(language, None)
        self._drop_results(language)

    def unregister(self, language: Language) -> bool:
        """Remove a language from this registry. Returns True if it was present."""
        existed: bool = self._classes.pop(language, None) is not None
        self._instances.pop(language, None)
        self._drop_results(language)
        return existed

    # ------------------------------ Compile ------------------------------

    async def compile(
        self,
        code: object,
        language: str | Language,
        options: Mapping[str, Any] | None = None,
    ) -> CompileResult:
        """Compile ``code`` with the compiler registered for ``language``.

        Successful results are cached on ``(language, code, options)`` when
        ``cache_results`` is enabled, up to ``cache_size`` entries with the
        least recently used evicted first; failures are never cached.

        Raises:
            ConfigurationError: If the language tag is unsupported.
        """
        compiler: Compiler = self.get(language)
        key: CacheKey | None = self._cache_key(compiler.language, code, options)
        if key is not None and key in self._results:
            self._cache_hits += 1
            self._results.move_to_end(key)
            logger.debug("Compile cache hit for '%s'", compiler.language.value)
            return self._results[key]

        result: CompileResult = await compiler.compile(code, options)
        if key is not None and result.ok:
            self._results[key] = result
            while len(self._results) > self.config.cache_size:
                evicted, _ = self._results.popitem(last=False)
                logger.trace("Evicted cached '%s' result", evicted[0].value)
        return result

    def _cache_key(
        self, language: Language, code: object, options: Mapping[str, Any] | None
    ) -> CacheKey | None:
        if not self.config.cache_results or not isinstance(code, str):
            return None
        try:
            opts: str = json.dumps(dict(options or {}), sort_keys=True)
        except (TypeError, ValueError):
            return None
        return (language, code, opts)

    def _drop_results(self, language: Language) -> None:
        for key in [k for k in self._results if k[0] is language]:
            del self._results[key]

    def clear_cache(self) -> None:
        """Drop all cached compile results (compiler instances are kept)."""
        self._results.clear()
        self._cache_hits = 0

    # ------------------------------ Introspection ------------------------------

    def loading_state(self, language: str | Language) -> LoadingState:
        """Return the vendor loading state of a language."""
        return self.loader.snapshot(self.get(language).language)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            registered=len(self._classes),
            instantiated=len(self._instances),
            cached_results=len(self._results),
            cache_hits=self._cache_hits,
        )
