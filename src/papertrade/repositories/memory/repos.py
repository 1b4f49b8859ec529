"""In-memory repository implementations over a staged user book."""

from dataclasses import dataclass, field, replace
from typing import Optional

from papertrade.domain.models import CashAccount, Order, Position


@dataclass
class UserBook:
    """Everything the ledger stores for one user."""

    account: Optional[CashAccount] = None
    positions: dict[str, Position] = field(default_factory=dict)
    orders: list[Order] = field(default_factory=list)  # oldest first


class _BookRepository:
    def __init__(self, user_id: str, book: UserBook):
        self._user_id = user_id
        self._book = book

    def _check_user(self, user_id: str) -> None:
        if user_id != self._user_id:
            raise ValueError(
                f"Unit of work for user {self._user_id} cannot access user {user_id}"
            )


class InMemoryCashAccountRepository(_BookRepository):
    """Cash account stored in the staged book."""

    def get(self, user_id: str, for_update: bool = False) -> Optional[CashAccount]:
        self._check_user(user_id)
        account = self._book.account
        return replace(account) if account else None

    def save(self, account: CashAccount) -> CashAccount:
        self._check_user(account.user_id)
        self._book.account = replace(account)
        return replace(account)


class InMemoryPositionRepository(_BookRepository):
    """Positions stored in the staged book, keyed by symbol."""

    def get(self, user_id: str, symbol: str) -> Optional[Position]:
        self._check_user(user_id)
        position = self._book.positions.get(symbol)
        return replace(position) if position else None

    def list_by_user(self, user_id: str) -> list[Position]:
        self._check_user(user_id)
        return [replace(self._book.positions[s]) for s in sorted(self._book.positions)]

    def save(self, position: Position) -> Position:
        self._check_user(position.user_id)
        self._book.positions[position.symbol] = replace(position)
        return replace(position)

    def delete(self, user_id: str, symbol: str) -> None:
        self._check_user(user_id)
        self._book.positions.pop(symbol, None)

    def delete_all(self, user_id: str) -> None:
        self._check_user(user_id)
        self._book.positions.clear()


class InMemoryOrderRepository(_BookRepository):
    """Append-only order list stored in the staged book."""

    def add(self, order: Order) -> Order:
        self._check_user(order.user_id)
        self._book.orders.append(order)
        return order

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Order]:
        self._check_user(user_id)
        newest_first = list(reversed(self._book.orders))
        return newest_first[:limit] if limit is not None else newest_first

    def delete_all(self, user_id: str) -> None:
        self._check_user(user_id)
        self._book.orders.clear()
