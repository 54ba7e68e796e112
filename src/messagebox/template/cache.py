"""Compiled-template caches keyed by template text and markers."""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING, Dict, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .compiler import Renderer
    from .markers import Markers


class TemplateCache(Protocol):
    def get(self, template: str, markers: "Markers") -> Optional["Renderer"]: ...

    def set(self, template: str, markers: "Markers", renderer: "Renderer") -> None: ...

    def clear(self) -> None: ...


class NoOpTemplateCache:
    """Never stores anything, so every resolution recompiles."""

    def get(self, template: str, markers: "Markers") -> Optional["Renderer"]:
        return None

    def set(self, template: str, markers: "Markers", renderer: "Renderer") -> None:
        return None

    def clear(self) -> None:
        return None


class InMemoryTemplateCache:
    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._store: Dict[Tuple[str, "Markers"], "Renderer"] = {}
        self._lock = RLock()
        self.max_entries = max_entries

    def get(self, template: str, markers: "Markers") -> Optional["Renderer"]:
        with self._lock:
            return self._store.get((template, markers))

    def set(self, template: str, markers: "Markers", renderer: "Renderer") -> None:
        with self._lock:
            if self.max_entries is not None and len(self._store) >= self.max_entries:
                # Evict the oldest insertion.
                self._store.pop(next(iter(self._store)))
            self._store[(template, markers)] = renderer

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
