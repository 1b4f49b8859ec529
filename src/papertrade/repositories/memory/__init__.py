"""In-process repository implementations."""

from papertrade.repositories.memory.repos import (
    UserBook,
    InMemoryCashAccountRepository,
    InMemoryPositionRepository,
    InMemoryOrderRepository,
)
from papertrade.repositories.memory.store import InMemoryLedgerStore, InMemoryUnitOfWork
from papertrade.repositories.memory.json_store import JsonFileLedgerStore

__all__ = [
    "UserBook",
    "InMemoryCashAccountRepository",
    "InMemoryPositionRepository",
    "InMemoryOrderRepository",
    "InMemoryLedgerStore",
    "InMemoryUnitOfWork",
    "JsonFileLedgerStore",
]
