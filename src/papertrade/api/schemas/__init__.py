"""Pydantic schemas for API request/response."""

from papertrade.api.schemas.common import CamelModel
from papertrade.api.schemas.orders import (
    OrderCreateRequest,
    OrderConfirmationResponse,
    PlaceOrderResponse,
    OrderPreviewResponse,
    OrderResponse,
    OrderListResponse,
)
from papertrade.api.schemas.portfolio import (
    PositionResponse,
    PortfolioResponse,
    ResetResponse,
)
from papertrade.api.schemas.market import (
    QuoteResponse,
    StockListResponse,
    MarketStatusResponse,
)

__all__ = [
    "CamelModel",
    "OrderCreateRequest",
    "OrderConfirmationResponse",
    "PlaceOrderResponse",
    "OrderPreviewResponse",
    "OrderResponse",
    "OrderListResponse",
    "PositionResponse",
    "PortfolioResponse",
    "ResetResponse",
    "QuoteResponse",
    "StockListResponse",
    "MarketStatusResponse",
]
