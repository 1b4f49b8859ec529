"""Repository layer - data access abstractions and implementations."""

from papertrade.repositories.protocols import (
    CashAccountRepository,
    PositionRepository,
    OrderRepository,
    UnitOfWork,
    LedgerStore,
)

__all__ = [
    "CashAccountRepository",
    "PositionRepository",
    "OrderRepository",
    "UnitOfWork",
    "LedgerStore",
]
