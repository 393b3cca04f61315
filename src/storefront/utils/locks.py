"""Per-aggregate serialization for read-check-write sequences.

A command that touches ``Product:42`` holds the lock for that key from the
moment its aggregate is loaded until its unit of work has committed. Keys are
acquired in sorted order, so commands spanning several aggregates cannot
deadlock against each other.

A key's lock is dropped from the registry once nobody holds or waits on it.
"""

import threading
from contextlib import contextmanager


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


_registry_lock = threading.Lock()
_locks: dict[tuple[str, str], _KeyLock] = {}


def _checkout(key: tuple[str, str]) -> threading.Lock:
    with _registry_lock:
        entry = _locks.get(key)
        if entry is None:
            entry = _locks[key] = _KeyLock()
        entry.users += 1
        return entry.lock


def _checkin(key: tuple[str, str]) -> None:
    with _registry_lock:
        entry = _locks[key]
        entry.users -= 1
        if entry.users == 0:
            del _locks[key]


@contextmanager
def serialized(*keys: tuple[str, str]):
    """Hold the locks for all ``(aggregate, identifier)`` keys for the block."""
    ordered = sorted(set(keys))
    locks = [_checkout(key) for key in ordered]
    acquired = []
    try:
        for lock in locks:
            lock.acquire()
            acquired.append(lock)
        yield
    finally:
        for lock in reversed(acquired):
            lock.release()
        for key in ordered:
            _checkin(key)

