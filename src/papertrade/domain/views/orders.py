"""Order request and result models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from papertrade.domain.models.enums import OrderSide, OrderType, OrderStatus


@dataclass
class OrderRequest:
    """
    Input for placing an order.

    market_price is resolved by the caller from the price feed; the ledger
    never fetches prices itself. limit_price is required for LIMIT orders
    and becomes the execution price.
    """

    symbol: str
    side: OrderSide
    quantity: int
    order_type: OrderType = OrderType.MARKET
    name: Optional[str] = None
    market_price: Optional[Decimal] = None
    limit_price: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            self.side = OrderSide(self.side)
        if isinstance(self.order_type, str):
            self.order_type = OrderType(self.order_type)


@dataclass
class OrderConfirmation:
    """Result of a successfully executed order."""

    order_id: str
    symbol: str
    side: OrderSide
    quantity: int
    executed_price: Decimal
    brokerage: Decimal
    total_amount: Decimal
    status: OrderStatus = OrderStatus.EXECUTED


@dataclass
class OrderPreview:
    """Cost estimate for an order, computed without touching the ledger."""

    symbol: str
    side: OrderSide
    quantity: int
    execution_price: Decimal
    gross_amount: Decimal
    brokerage: Decimal
    total_amount: Decimal
    available_cash: Decimal
    available_quantity: int
    sufficient: bool
