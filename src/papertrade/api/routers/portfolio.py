"""Portfolio API: valuation, single positions, price refresh and reset."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_current_user_id, get_ledger_service, get_portfolio_service
from papertrade.api.schemas.portfolio import PortfolioResponse, PositionResponse, ResetResponse
from papertrade.services import LedgerService, PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Return the portfolio valued at current quotes.

    Positions without a quote are valued at their last stored price.
    """
    return PortfolioResponse.from_view(service.get_portfolio(user_id))


@router.get("/positions/{symbol}", response_model=PositionResponse)
def get_position(
    symbol: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Return one open position; 404 when none is held."""
    return PositionResponse.from_view(service.get_position(user_id, symbol))


@router.post("/refresh", response_model=PortfolioResponse)
def refresh_prices(
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Store current quotes on all positions and return the refreshed portfolio."""
    return PortfolioResponse.from_view(service.refresh_prices(user_id))


@router.post("/reset", response_model=ResetResponse)
def reset_portfolio(
    user_id: str = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Clear positions and orders and restore the initial cash balance."""
    account = ledger.reset_portfolio(user_id)
    return ResetResponse(available_cash=float(account.available_cash))
