"""Per-user serialization of ledger writes."""

from contextlib import contextmanager
from threading import Lock, RLock
from typing import Iterator
from weakref import WeakValueDictionary


class UserLockRegistry:
    """
    Hands out one re-entrant lock per user id.

    Orders for the same user run one at a time; different users never
    contend with each other. Locks are held weakly: a user's lock lives only
    while some caller is using it, so the registry does not grow with every
    user id ever seen.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: WeakValueDictionary[str, RLock] = WeakValueDictionary()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def lock_for(self, user_id: str) -> RLock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = RLock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        lock = self.lock_for(user_id)
        with lock:
            yield
