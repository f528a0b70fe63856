from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from throttlegate.core.interfaces import WindowState


class _Entry:
    __slots__ = ("lock", "state", "removed")

    def __init__(self, state: WindowState) -> None:
        self.lock = threading.Lock()
        self.state = state
        self.removed = False


class WindowStore:
    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._map_lock = threading.Lock()

    @contextmanager
    def acquire(self, identity: str, now: float) -> Iterator[WindowState]:
        while True:
            with self._map_lock:
                entry = self._entries.get(identity)
                if entry is None:
                    entry = _Entry(WindowState(count=0, window_start=now))
                    self._entries[identity] = entry
            with entry.lock:
                if entry.removed:
                    continue
                yield entry.state
                return

    def remove(self, identity: str) -> bool:
        with self._map_lock:
            entry = self._entries.pop(identity, None)
        if entry is None:
            return False
        with entry.lock:
            entry.removed = True
        return True

    def clear(self) -> int:
        with self._map_lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for entry in entries:
            with entry.lock:
                entry.removed = True
        return len(entries)

    def evict(self, predicate: Callable[[WindowState], bool]) -> int:
        # Entries currently held by a caller are skipped.
        evicted = 0
        with self._map_lock:
            for identity, entry in list(self._entries.items()):
                if not entry.lock.acquire(blocking=False):
                    continue
                try:
                    if predicate(entry.state):
                        entry.removed = True
                        del self._entries[identity]
                        evicted += 1
                finally:
                    entry.lock.release()
        return evicted

    def count(self) -> int:
        with self._map_lock:
            return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        with self._map_lock:
            return identity in self._entries
