"""Domain layer - pure business models with no external dependencies."""

from papertrade.domain.models import (
    CashAccount,
    Position,
    Order,
    OrderSide,
    OrderType,
    OrderStatus,
)

__all__ = [
    "CashAccount",
    "Position",
    "Order",
    "OrderSide",
    "OrderType",
    "OrderStatus",
]
