"""
Concurrency wrappers around the single engine instance.

The service builds exactly one engine at startup and keeps it for the life
of the process. How concurrent requests share it is a deployment choice:

- ``SharedEngineHandle``: the engine is safe to call from any number of
  threads at once, so no coordination happens.
- ``ExclusiveEngineHandle``: the engine reuses internal scratch state, so a
  lock serializes every session. There is no acquisition timeout and
  waiters are not guaranteed to be served in arrival order.

A session covers one ``tokenize`` call plus every lookup that depends on its
tokens, which keeps the tokens' engine-side data valid while they are read.

Example:
    >>> handle = create_handle(engine, EnginePolicy.EXCLUSIVE)
    >>> with handle.session() as locked_engine:
    ...     tokens = locked_engine.tokenize("テスト")
    ...     details = [locked_engine.word_detail(t) for t in tokens]
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator, List

from .config import EnginePolicy


class EngineHandle:
    """Base class for engine sharing policies."""

    policy: EnginePolicy

    def __init__(self, engine: Any):
        self._engine = engine

    @property
    def engine(self) -> Any:
        """The engine instance this handle guards."""
        return self._engine

    def session(self):
        """Context manager yielding the engine for one request."""
        raise NotImplementedError

    def tokenize(self, text: str) -> List[Any]:
        """Tokenize text in a session of its own."""
        with self.session() as engine:
            return engine.tokenize(text)


class SharedEngineHandle(EngineHandle):
    """Hands the engine to every caller without coordination."""

    policy = EnginePolicy.SHARED

    @contextmanager
    def session(self) -> Iterator[Any]:
        yield self._engine


class ExclusiveEngineHandle(EngineHandle):
    """Serializes engine sessions with a mutual-exclusion lock."""

    policy = EnginePolicy.EXCLUSIVE

    def __init__(self, engine: Any):
        super().__init__(engine)
        self._lock = threading.Lock()

    @contextmanager
    def session(self) -> Iterator[Any]:
        with self._lock:
            yield self._engine


def create_handle(engine: Any, policy: EnginePolicy) -> EngineHandle:
    """
    Wrap an engine according to the configured sharing policy.

    Args:
        engine: The constructed engine.
        policy: ``EnginePolicy.SHARED`` or ``EnginePolicy.EXCLUSIVE``.

    Returns:
        EngineHandle: The handle that owns the engine from now on.
    """
    if policy is EnginePolicy.SHARED:
        return SharedEngineHandle(engine)
    return ExclusiveEngineHandle(engine)


__all__ = [
    "EngineHandle",
    "SharedEngineHandle",
    "ExclusiveEngineHandle",
    "create_handle",
]
