"""Per-key mutual exclusion for in-process critical sections.

A ``KeyedLock`` hands out one re-entrant lock per key. Callers holding
different keys never block each other; callers on the same key run one at a
time. Entries are reference-counted and dropped once no thread holds or waits
on them, so the registry does not grow with the number of keys ever seen.

Usage:
    provider_locks = KeyedLock("provider")

    with provider_locks.hold(provider_id, timeout=5.0):
        ...  # read, compute, write
"""

import threading
from contextlib import contextmanager


class LockTimeout(Exception):
    """Raised when a keyed lock cannot be acquired within the timeout."""

    def __init__(self, name, key, timeout):
        self.name = name
        self.key = key
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for {name} lock on {key!r}")


class _Entry:
    __slots__ = ("lock", "refs")

    def __init__(self):
        self.lock = threading.RLock()
        self.refs = 0


class KeyedLock:
    def __init__(self, name: str):
        self.name = name
        self._guard = threading.Lock()
        self._entries: dict = {}

    def _checkout(self, key) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.refs += 1
            return entry

    def _release(self, key, entry: _Entry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, key, timeout: float | None = None):
        """Hold the lock for ``key`` for the duration of the block.

        Raises ``LockTimeout`` if ``timeout`` seconds pass without acquiring it.
        """
        entry = self._checkout(key)
        try:
            acquired = entry.lock.acquire(timeout=-1 if timeout is None else timeout)
            if not acquired:
                raise LockTimeout(self.name, key, timeout)
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._release(key, entry)

    def is_held(self, key) -> bool:
        """Whether any thread currently holds or waits on ``key``."""
        with self._guard:
            return key in self._entries

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# Process-wide registries shared by the lifecycle service and the aggregator
submission_locks = KeyedLock("submission")
review_locks = KeyedLock("review")
provider_locks = KeyedLock("provider")
