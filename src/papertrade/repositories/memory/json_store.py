"""In-memory ledger store persisted to a JSON file."""

import json
import logging
import os
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from papertrade.core.exceptions import StorageError
from papertrade.core.locks import UserLockRegistry
from papertrade.core.timezone import MARKET_TZ, market_time_from
from papertrade.domain.models import CashAccount, Order, Position
from papertrade.repositories.memory.repos import UserBook
from papertrade.repositories.memory.store import InMemoryLedgerStore

logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = 1


class JsonFileLedgerStore(InMemoryLedgerStore):
    """
    Single-process ledger that survives restarts.

    The whole state is rewritten after every commit (temp file + rename).
    Loading is forgiving: missing or malformed fields fall back to the
    initial balance and empty positions/orders.
    """

    def __init__(
        self,
        path: Path,
        initial_cash: Decimal = Decimal("100000"),
        locks: Optional[UserLockRegistry] = None,
    ):
        super().__init__(locks=locks)
        self._path = Path(path)
        self._initial_cash = initial_cash
        self._books = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _persist(self, books: dict[str, UserBook]) -> None:
        payload = {
            "version": STATE_FORMAT_VERSION,
            "users": {user_id: _book_to_dict(book) for user_id, book in books.items()},
        }
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            logger.error("Failed to write ledger state to %s: %s", self._path, e)
            raise StorageError(f"Failed to write ledger state: {e}") from e

    def _load(self) -> dict[str, UserBook]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable ledger state %s: %s", self._path, e)
            return {}

        users = raw.get("users") if isinstance(raw, dict) else None
        if not isinstance(users, dict):
            return {}

        books: dict[str, UserBook] = {}
        for user_id, data in users.items():
            if isinstance(data, dict):
                books[user_id] = self._book_from_dict(user_id, data)
        logger.info("Loaded ledger state for %d user(s) from %s", len(books), self._path)
        return books

    def _book_from_dict(self, user_id: str, data: dict[str, Any]) -> UserBook:
        cash = _to_decimal(data.get("available_cash"))
        account = CashAccount(
            user_id=user_id,
            available_cash=cash if cash is not None else self._initial_cash,
            updated_at=market_time_from(data.get("updated_at")),
        )

        positions: dict[str, Position] = {}
        raw_positions = data.get("positions")
        for item in raw_positions if isinstance(raw_positions, list) else []:
            try:
                position = Position(
                    user_id=user_id,
                    symbol=item["symbol"],
                    name=item.get("name") or item["symbol"],
                    quantity=int(item["quantity"]),
                    avg_price=Decimal(str(item["avg_price"])),
                    invested_value=Decimal(str(item["invested_value"])),
                    current_price=_to_decimal(item.get("current_price")) or Decimal("0"),
                    updated_at=market_time_from(item.get("updated_at")),
                )
            except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation):
                logger.warning("Skipping malformed position for user %s: %r", user_id, item)
                continue
            if position.quantity > 0:
                positions[position.symbol] = position

        orders: list[Order] = []
        raw_orders = data.get("orders")
        for item in raw_orders if isinstance(raw_orders, list) else []:
            try:
                orders.append(
                    Order(
                        order_id=item["order_id"],
                        user_id=user_id,
                        symbol=item["symbol"],
                        name=item.get("name") or item["symbol"],
                        side=item["side"],
                        order_type=item.get("order_type", "MARKET"),
                        quantity=int(item["quantity"]),
                        price=Decimal(str(item["price"])),
                        status=item.get("status", "EXECUTED"),
                        timestamp=market_time_from(item.get("timestamp")) or datetime.now(MARKET_TZ),
                        brokerage=Decimal(str(item.get("brokerage", "0"))),
                        total_amount=Decimal(str(item["total_amount"])),
                        realized_pnl=_to_decimal(item.get("realized_pnl")),
                    )
                )
            except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation):
                logger.warning("Skipping malformed order for user %s: %r", user_id, item)

        return UserBook(account=account, positions=positions, orders=orders)


def _book_to_dict(book: UserBook) -> dict[str, Any]:
    account = book.account
    return {
        "available_cash": str(account.available_cash) if account else None,
        "updated_at": _iso(account.updated_at) if account else None,
        "positions": [
            {
                "symbol": p.symbol,
                "name": p.name,
                "quantity": p.quantity,
                "avg_price": str(p.avg_price),
                "invested_value": str(p.invested_value),
                "current_price": str(p.current_price),
                "updated_at": _iso(p.updated_at),
            }
            for p in book.positions.values()
        ],
        "orders": [
            {
                "order_id": o.order_id,
                "symbol": o.symbol,
                "name": o.name,
                "side": o.side.value,
                "order_type": o.order_type.value,
                "quantity": o.quantity,
                "price": str(o.price),
                "status": o.status.value,
                "timestamp": _iso(o.timestamp),
                "brokerage": str(o.brokerage),
                "total_amount": str(o.total_amount),
                "realized_pnl": str(o.realized_pnl) if o.realized_pnl is not None else None,
            }
            for o in book.orders
        ],
    }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None
