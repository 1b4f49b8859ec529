"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from papertrade.app_context import AppContext
from papertrade.core.exceptions import UnauthorizedError
from papertrade.services import LedgerService, MarketDataService, PortfolioService


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext owned by the running app."""
    return request.app.state.context


def get_current_user_id(
    request: Request,
    context: AppContext = Depends(get_app_context),
) -> str:
    """Opaque user id from the identity header, set by the upstream auth layer."""
    user_id = (request.headers.get(context.settings.user_id_header) or "").strip()
    if not user_id:
        raise UnauthorizedError(f"Missing {context.settings.user_id_header} header")
    return user_id


def get_ledger_service(context: AppContext = Depends(get_app_context)) -> LedgerService:
    """Provide LedgerService instance."""
    return context.ledger


def get_portfolio_service(context: AppContext = Depends(get_app_context)) -> PortfolioService:
    """Provide PortfolioService instance."""
    return context.portfolio


def get_market_data_service(context: AppContext = Depends(get_app_context)) -> MarketDataService:
    """Provide MarketDataService instance."""
    return context.market_data
