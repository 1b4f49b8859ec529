"""In-process ledger store."""

import copy
import logging
from contextlib import contextmanager
from threading import Lock
from typing import Iterator, Optional

from papertrade.core.locks import UserLockRegistry
from papertrade.repositories.memory.repos import (
    UserBook,
    InMemoryCashAccountRepository,
    InMemoryPositionRepository,
    InMemoryOrderRepository,
)

logger = logging.getLogger(__name__)


class InMemoryUnitOfWork:
    """Repositories bound to a staged copy of one user's book."""

    def __init__(self, user_id: str, book: UserBook):
        self.user_id = user_id
        self.cash = InMemoryCashAccountRepository(user_id, book)
        self.positions = InMemoryPositionRepository(user_id, book)
        self.orders = InMemoryOrderRepository(user_id, book)


class InMemoryLedgerStore:
    """
    Ledger store kept in process memory.

    A unit of work copies the user's book, lets the ledger mutate the copy,
    and swaps it in only when the scope exits cleanly. Readers always see
    either the old book or the new one.
    """

    def __init__(self, locks: Optional[UserLockRegistry] = None):
        self._locks = locks or UserLockRegistry()
        self._guard = Lock()
        self._books: dict[str, UserBook] = {}

    @contextmanager
    def unit_of_work(self, user_id: str) -> Iterator[InMemoryUnitOfWork]:
        with self._locks.hold(user_id):
            with self._guard:
                current = self._books.get(user_id)
            staged = copy.deepcopy(current) if current is not None else UserBook()
            try:
                yield InMemoryUnitOfWork(user_id, staged)
            except Exception:
                logger.debug("Discarding staged ledger changes for user %s", user_id)
                raise
            if staged != (current if current is not None else UserBook()):
                self._commit(user_id, staged)

    def user_ids(self) -> list[str]:
        with self._guard:
            return sorted(self._books)

    def _commit(self, user_id: str, book: UserBook) -> None:
        with self._guard:
            books = dict(self._books)
            books[user_id] = book
            self._persist(books)
            self._books = books

    def _persist(self, books: dict[str, UserBook]) -> None:
        """Hook for durable subclasses; called under the store guard after each commit."""
