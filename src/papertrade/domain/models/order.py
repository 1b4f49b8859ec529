"""Order domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models.enums import OrderSide, OrderType, OrderStatus


@dataclass(frozen=True)
class Order:
    """
    Executed order (append-only log entry).

    total_amount is the cash that left the account for a BUY (gross + brokerage)
    or entered it for a SELL (gross - brokerage). realized_pnl is only set on
    SELL orders: proceeds minus the cost basis of the shares sold.
    """

    order_id: str
    user_id: str
    symbol: str
    name: str
    side: OrderSide
    order_type: OrderType
    quantity: int
    price: Decimal
    status: OrderStatus
    timestamp: datetime
    brokerage: Decimal
    total_amount: Decimal
    realized_pnl: Optional[Decimal] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))
        if isinstance(self.order_type, str):
            object.__setattr__(self, "order_type", OrderType(self.order_type))
        if isinstance(self.status, str):
            object.__setattr__(self, "status", OrderStatus(self.status))

    @property
    def gross_amount(self) -> Decimal:
        return self.price * self.quantity
