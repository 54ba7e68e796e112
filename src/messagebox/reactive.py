"""
Reactive dependency tracking for language switches.

A MessageBox accepts a factory for objects implementing ``Tracker`` and builds
its own tracker from it. ``Dependency`` is a
small synchronous implementation: functions run through ``autorun`` re-run
immediately whenever a dependency they read reports a change.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Callable, List, Optional, Protocol

from .utils import get_logger

logger = get_logger("reactive")

_active_computation: ContextVar[Optional["Computation"]] = ContextVar(
    "active_computation", default=None
)


class Tracker(Protocol):
    def depend(self) -> object: ...

    def changed(self) -> None: ...


# Called once per MessageBox; ``Dependency`` itself is the usual factory.
TrackerFactory = Callable[[], Tracker]


class Computation:
    """
    A re-runnable unit of work that records the dependencies it reads.
    """

    def __init__(self, func: Callable[["Computation"], None]) -> None:
        self.func = func
        self.stopped = False
        self.run_count = 0
        self._dependencies: List["Dependency"] = []
        self._running = False

    def run(self) -> None:
        if self.stopped or self._running:
            return
        self._running = True
        token = _active_computation.set(self)
        try:
            self.run_count += 1
            self.func(self)
        finally:
            _active_computation.reset(token)
            self._running = False

    def invalidate(self) -> None:
        # A computation does not re-trigger itself.
        if self.stopped or self._running:
            return
        self._detach()
        self.run()

    def stop(self) -> None:
        self.stopped = True
        self._detach()

    def _track(self, dependency: "Dependency") -> None:
        if dependency not in self._dependencies:
            self._dependencies.append(dependency)

    def _detach(self) -> None:
        for dependency in self._dependencies:
            dependency._dependents.remove(self)
        self._dependencies.clear()


class Dependency:
    """
    Tracker implementation linking readers (``depend``) to writers (``changed``).
    """

    def __init__(self) -> None:
        self._dependents: List[Computation] = []

    def depend(self, computation: Optional[Computation] = None) -> bool:
        computation = computation or _active_computation.get()
        if computation is None:
            return False
        if computation not in self._dependents:
            self._dependents.append(computation)
            computation._track(self)
        return True

    def changed(self) -> None:
        dependents = list(self._dependents)
        logger.debug("Dependency changed; re-running %s computation(s)", len(dependents))
        for computation in dependents:
            computation.invalidate()

    @property
    def has_dependents(self) -> bool:
        return bool(self._dependents)


def autorun(func: Callable[[Computation], None]) -> Computation:
    computation = Computation(func)
    computation.run()
    return computation
