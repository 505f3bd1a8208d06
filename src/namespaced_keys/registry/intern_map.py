"""Thread-safe get-or-create map backing every level of the registry.

``InternMap`` maps canonical strings to the single entry built for them.
Each map is guarded by its own :class:`ReadWriteLock`, so contention is
scoped to one namespace's key table (or to the namespace table itself).

Double-checked creation
-----------------------
::

    get_or_create(key)
        read lock   → hit?  return entry            (fast path, readers share)
        write lock  → hit?  return entry            (another thread won the race)
                      miss  → factory(key) once, insert, return

The factory runs while the write lock is held, which linearises every
concurrent caller for one key with respect to that key's single
construction.  Factories must not call back into the same map.

No eviction: a map only ever grows.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager
import logging
import threading
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ReadWriteLock:
    """Many readers or one writer; waiting writers block new readers.

    Not re-entrant: a thread holding either side must not acquire again.

    Example::

        lock = ReadWriteLock()
        with lock.read():
            ...  # shared with other readers
        with lock.write():
            ...  # exclusive
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the shared side of the lock for the duration of the block."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the exclusive side of the lock for the duration of the block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InternMap(Generic[K, V]):
    """Get-or-create mapping that builds at most one value per key.

    Args:
        factory: Called with the key, under the write lock, the first time a
            key is requested.  Runs exactly once per key.
        name: Label used in log records.

    Example::

        counts = InternMap(lambda k: object(), name="demo")
        a = counts.get_or_create("x")
        assert counts.get_or_create("x") is a
        assert counts.get("y") is None
    """

    def __init__(self, factory: Callable[[K], V], *, name: str = "intern-map") -> None:
        self._factory = factory
        self._name = name
        self._entries: dict[K, V] = {}
        self._lock = ReadWriteLock()

    ########
    # Read #
    ########

    def get(self, key: K) -> V | None:
        """Return the entry for *key*, or ``None``.  Never creates."""
        with self._lock.read():
            return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def values(self) -> list[V]:
        """Return a snapshot list of all entries in insertion order."""
        with self._lock.read():
            return list(self._entries.values())

    #########
    # Write #
    #########

    def get_or_create(self, key: K) -> V:
        """Return the entry for *key*, building it on first request.

        Every caller for the same *key* receives the identical object, no
        matter how the calls interleave.

        Args:
            key: Canonical key string.

        Returns:
            The single entry for *key*.
        """
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is not None:
            return entry

        with self._lock.write():
            entry = self._entries.get(key)
            if entry is None:
                entry = self._factory(key)
                self._entries[key] = entry
                logger.debug(
                    "%s: interned new entry (total=%d)", self._name, len(self._entries)
                )
            return entry


__all__ = ["InternMap", "ReadWriteLock"]
