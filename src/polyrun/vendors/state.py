# topmark:header:start
#
#   project      : Polyrun
#   file         : state.py
#   file_relpath : src/polyrun/vendors/state.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-language vendor loading state.

Lifecycle: ``unloaded -> loading -> {loaded | error}``. ``loaded`` never reverts;
``error`` holds for the failed attempt until the next attempt or an explicit
retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from polyrun.languages.base import Language


class LoadingStatus(Enum):
    """Vendor loading status of a language."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class LoadingState:
    """Read-only snapshot handed to observers."""

    language: Language
    status: LoadingStatus = LoadingStatus.UNLOADED
    error: str | None = None

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadingStatus.LOADED

    @property
    def is_loading(self) -> bool:
        return self.status is LoadingStatus.LOADING

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping of this snapshot."""
        return {
            "language": self.language.value,
            "is_loaded": self.is_loaded,
            "is_loading": self.is_loading,
            "error": self.error,
        }


@dataclass(frozen=True)
class LoaderStats:
    """Languages grouped by loading status."""

    loaded: tuple[Language, ...]
    loading: tuple[Language, ...]
    errored: tuple[Language, ...]

    @property
    def total(self) -> int:
        return len(self.loaded) + len(self.loading) + len(self.errored)
