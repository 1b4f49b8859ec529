"""Pydantic schemas for order endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import Field

from papertrade.api.schemas.common import CamelModel
from papertrade.domain.models import Order, OrderSide, OrderStatus, OrderType
from papertrade.domain.views import OrderConfirmation, OrderPreview, OrderRequest


class OrderCreateRequest(CamelModel):
    """
    Request schema for placing or previewing an order.

    For MARKET orders price is a fallback used only when the feed has no
    quote; for LIMIT orders it is the limit price.
    """

    symbol: str = Field(..., min_length=1, max_length=32)
    name: Optional[str] = Field(default=None, max_length=255)
    side: OrderSide = Field(..., alias="type", description="BUY or SELL")
    order_type: OrderType = Field(default=OrderType.MARKET)
    quantity: Decimal = Field(..., description="Whole number of shares")
    price: Optional[Decimal] = None

    def to_domain(self) -> OrderRequest:
        # Fractional quantities reach the ledger as-is and are rejected there
        quantity: Union[int, Decimal] = self.quantity
        if quantity == quantity.to_integral_value():
            quantity = int(quantity)
        is_limit = self.order_type == OrderType.LIMIT
        return OrderRequest(
            symbol=self.symbol,
            side=self.side,
            quantity=quantity,
            order_type=self.order_type,
            name=self.name,
            market_price=None if is_limit else self.price,
            limit_price=self.price if is_limit else None,
        )


class OrderConfirmationResponse(CamelModel):
    """Executed order summary returned by POST /orders."""

    order_id: str
    symbol: str
    side: OrderSide = Field(..., alias="type")
    quantity: int
    executed_price: float
    brokerage: float
    total_amount: float
    status: OrderStatus

    @classmethod
    def from_domain(cls, confirmation: OrderConfirmation) -> "OrderConfirmationResponse":
        return cls(
            order_id=confirmation.order_id,
            symbol=confirmation.symbol,
            side=confirmation.side,
            quantity=confirmation.quantity,
            executed_price=float(confirmation.executed_price),
            brokerage=float(confirmation.brokerage),
            total_amount=float(confirmation.total_amount),
            status=confirmation.status,
        )


class PlaceOrderResponse(CamelModel):
    """Response schema for POST /orders."""

    ok: bool = True
    order: OrderConfirmationResponse


class OrderPreviewResponse(CamelModel):
    """Response schema for POST /orders/preview."""

    symbol: str
    side: OrderSide = Field(..., alias="type")
    quantity: int
    execution_price: float
    gross_amount: float
    brokerage: float
    total_amount: float
    available_cash: float
    available_quantity: int
    sufficient: bool

    @classmethod
    def from_domain(cls, preview: OrderPreview) -> "OrderPreviewResponse":
        return cls(
            symbol=preview.symbol,
            side=preview.side,
            quantity=preview.quantity,
            execution_price=float(preview.execution_price),
            gross_amount=float(preview.gross_amount),
            brokerage=float(preview.brokerage),
            total_amount=float(preview.total_amount),
            available_cash=float(preview.available_cash),
            available_quantity=preview.available_quantity,
            sufficient=preview.sufficient,
        )


class OrderResponse(CamelModel):
    """One entry of the order log."""

    id: str
    symbol: str
    name: str
    side: OrderSide = Field(..., alias="type")
    order_type: OrderType
    quantity: int
    price: float
    status: OrderStatus
    timestamp: datetime
    brokerage: float
    total_amount: float
    realized_pnl: Optional[float] = Field(default=None, alias="realizedPnL")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.order_id,
            symbol=order.symbol,
            name=order.name,
            side=order.side,
            order_type=order.order_type,
            quantity=order.quantity,
            price=float(order.price),
            status=order.status,
            timestamp=order.timestamp,
            brokerage=float(order.brokerage),
            total_amount=float(order.total_amount),
            realized_pnl=float(order.realized_pnl) if order.realized_pnl is not None else None,
        )


class OrderListResponse(CamelModel):
    """Response schema for GET /orders."""

    orders: list[OrderResponse]
    count: int
