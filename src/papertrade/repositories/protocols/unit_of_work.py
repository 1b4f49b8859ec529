"""Unit of work and ledger store protocols."""

from typing import ContextManager, Protocol

from papertrade.repositories.protocols.cash_repo import CashAccountRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.order_repo import OrderRepository


class UnitOfWork(Protocol):
    """
    Repositories sharing one atomic scope.

    Everything written through a unit of work becomes visible together when
    the scope exits normally, or not at all when it exits with an exception.
    """

    cash: CashAccountRepository
    positions: PositionRepository
    orders: OrderRepository


class LedgerStore(Protocol):
    """Storage backend for the ledger."""

    def unit_of_work(self, user_id: str) -> ContextManager[UnitOfWork]:
        """
        Open an atomic scope for one user's ledger.

        Scopes for the same user are serialized; scopes for different users
        may run in parallel.
        """
        ...
