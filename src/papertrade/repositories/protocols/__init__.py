"""Repository protocol definitions (interfaces)."""

from papertrade.repositories.protocols.cash_repo import CashAccountRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.order_repo import OrderRepository
from papertrade.repositories.protocols.unit_of_work import UnitOfWork, LedgerStore

__all__ = [
    "CashAccountRepository",
    "PositionRepository",
    "OrderRepository",
    "UnitOfWork",
    "LedgerStore",
]
