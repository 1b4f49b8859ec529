"""Market data API: listed stocks, quotes and market hours."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_market_data_service
from papertrade.api.schemas.market import MarketStatusResponse, QuoteResponse, StockListResponse
from papertrade.core.exceptions import NotFoundError
from papertrade.core.timezone import now_market
from papertrade.services import MarketDataService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/stocks", response_model=StockListResponse)
def list_stocks(
    q: Optional[str] = Query(None, description="Symbol or name contains"),
    sector: Optional[str] = Query(None, description="Exact sector name"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """List tradable stocks with current quotes."""
    stocks = [QuoteResponse.from_domain(quote) for quote in service.list_stocks(q, sector)]
    return StockListResponse(stocks=stocks, count=len(stocks))


@router.get("/quotes/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    service: MarketDataService = Depends(get_market_data_service),
):
    """Current quote for one symbol."""
    quote = service.get_quote(symbol)
    if quote is None:
        raise NotFoundError("Quote", symbol.upper())
    return QuoteResponse.from_domain(quote)


@router.get("/status", response_model=MarketStatusResponse)
def market_status(
    service: MarketDataService = Depends(get_market_data_service),
):
    """Whether the exchange is currently open."""
    now = now_market()
    return MarketStatusResponse(
        is_open=service.is_market_open(now),
        is_trading_day=service.is_trading_day(),
        open_hour=service.open_hour,
        close_hour=service.close_hour,
        as_of=now,
    )
