"""
Synchronized key-value store.

Guards a dict with a reader/writer lock: any number of concurrent readers, or
one writer. Used for the reconciler's declared-state maps, which may be
populated by several ingests running in parallel.
"""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class ReadWriteLock:
    """Reader/writer lock built on a condition variable."""

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writer:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writer or self._readers:
                self._condition.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._condition:
                self._writer = False
                self._condition.notify_all()


class SynchronizedMap(Generic[K, V]):
    """
    Dict guarded by a ReadWriteLock.

    Example:
        entrypoints: SynchronizedMap[str, str] = SynchronizedMap()
        with entrypoints.write() as data:
            data["/plugins/lib.so"] = "registerExtensions"
    """

    def __init__(self, initial: dict[K, V] | None = None) -> None:
        self._data: dict[K, V] = dict(initial or {})
        self._lock = ReadWriteLock()

    @contextmanager
    def read(self) -> Iterator[dict[K, V]]:
        """Hold the read lock; the yielded dict must not be mutated."""
        with self._lock.read_locked():
            yield self._data

    @contextmanager
    def write(self) -> Iterator[dict[K, V]]:
        """Hold the write lock and yield the underlying dict."""
        with self._lock.write_locked():
            yield self._data

    def update_many(self, apply: Callable[[dict[K, V]], None]) -> None:
        """Apply a batch of changes under a single write lock."""
        with self.write() as data:
            apply(data)

    def snapshot(self) -> dict[K, V]:
        """Return a shallow copy of the current contents."""
        with self.read() as data:
            return dict(data)

    def get(self, key: K, default: V | None = None) -> V | None:
        with self.read() as data:
            return data.get(key, default)

    def clear(self) -> None:
        with self.write() as data:
            data.clear()

    def __contains__(self, key: object) -> bool:
        with self.read() as data:
            return key in data

    def __len__(self) -> int:
        with self.read() as data:
            return len(data)
