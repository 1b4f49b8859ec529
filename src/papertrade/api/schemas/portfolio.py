"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from papertrade.api.schemas.common import CamelModel, display_percent
from papertrade.api.schemas.orders import OrderResponse
from papertrade.domain.views import PortfolioView, PositionView


class PositionResponse(CamelModel):
    """A holding valued at the current price."""

    symbol: str
    name: str
    quantity: int
    avg_price: float
    invested_value: float
    current_price: float
    current_value: float
    pnl: float
    pnl_percent: float

    @classmethod
    def from_view(cls, view: PositionView) -> "PositionResponse":
        return cls(
            symbol=view.symbol,
            name=view.name,
            quantity=view.quantity,
            avg_price=float(view.avg_price),
            invested_value=float(view.invested_value),
            current_price=float(view.current_price),
            current_value=float(view.current_value),
            pnl=float(view.pnl),
            pnl_percent=display_percent(view.pnl_percent),
        )


class PortfolioResponse(CamelModel):
    """Response schema for GET /portfolio."""

    total_value: float
    invested_amount: float
    available_cash: float
    total_pnl: float = Field(..., alias="totalPnL")
    total_pnl_percent: float = Field(..., alias="totalPnLPercent")
    todays_pnl: float = Field(..., alias="todaysPnL")
    todays_pnl_percent: float = Field(..., alias="todaysPnLPercent")
    positions: list[PositionResponse]
    orders: list[OrderResponse]
    as_of: Optional[datetime] = None

    @classmethod
    def from_view(cls, view: PortfolioView) -> "PortfolioResponse":
        return cls(
            total_value=float(view.total_value),
            invested_amount=float(view.invested_amount),
            available_cash=float(view.available_cash),
            total_pnl=float(view.total_pnl),
            total_pnl_percent=display_percent(view.total_pnl_percent),
            todays_pnl=float(view.todays_pnl),
            todays_pnl_percent=display_percent(view.todays_pnl_percent),
            positions=[PositionResponse.from_view(p) for p in view.positions],
            orders=[OrderResponse.from_domain(o) for o in view.orders],
            as_of=view.as_of,
        )


class ResetResponse(CamelModel):
    """Response schema for POST /portfolio/reset."""

    ok: bool = True
    available_cash: float
