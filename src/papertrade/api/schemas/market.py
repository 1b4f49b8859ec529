"""Pydantic schemas for market data endpoints."""

from datetime import datetime

from papertrade.api.schemas.common import CamelModel
from papertrade.domain.views import Quote


class QuoteResponse(CamelModel):
    """Response schema for a single quote."""

    symbol: str
    name: str
    sector: str
    price: float
    prev_close: float
    change: float
    change_percent: float
    last_update: datetime

    @classmethod
    def from_domain(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            symbol=quote.symbol,
            name=quote.name,
            sector=quote.sector,
            price=float(quote.last_price),
            prev_close=float(quote.prev_close),
            change=float(quote.change),
            change_percent=float(quote.change_percent),
            last_update=quote.as_of,
        )


class StockListResponse(CamelModel):
    """Response schema for GET /market/stocks."""

    stocks: list[QuoteResponse]
    count: int


class MarketStatusResponse(CamelModel):
    """Response schema for GET /market/status."""

    is_open: bool
    is_trading_day: bool
    open_hour: int
    close_hour: int
    as_of: datetime
