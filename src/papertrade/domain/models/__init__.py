"""Domain models package."""

from papertrade.domain.models.enums import OrderSide, OrderType, OrderStatus
from papertrade.domain.models.account import CashAccount
from papertrade.domain.models.position import Position
from papertrade.domain.models.order import Order

__all__ = [
    "OrderSide",
    "OrderType",
    "OrderStatus",
    "CashAccount",
    "Position",
    "Order",
]
