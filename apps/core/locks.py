"""
In-process locks keyed by an arbitrary hashable value.

Used to serialize stock read-decrement-write sequences per product on a
single node. Database row locks cover multi-process deployments; these
locks cover SQLite and threaded test runs where ``SELECT ... FOR UPDATE``
is a no-op.
"""

import threading
from contextlib import contextmanager


class KeyedLock:
    """
    Registry of one lock per key.

    ``hold`` acquires every requested key in sorted order so two callers
    asking for overlapping key sets can never deadlock each other. Entries
    are reference counted and dropped once no thread holds or waits on them,
    so the registry only ever contains keys that are in use.
    """

    def __init__(self):
        # key -> [lock, number of threads holding or waiting]
        self._locks = {}
        self._registry_lock = threading.Lock()

    def _checkout(self, key):
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _checkin(self, key):
        with self._registry_lock:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, keys):
        ordered = sorted(set(keys), key=str)
        held = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._checkin(key)
                    raise
                held.append((key, lock))
            yield
        finally:
            for key, lock in reversed(held):
                lock.release()
                self._checkin(key)

    def __len__(self):
        with self._registry_lock:
            return len(self._locks)
