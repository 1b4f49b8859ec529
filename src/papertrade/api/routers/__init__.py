"""API routers package."""

from papertrade.api.routers.portfolio import router as portfolio_router
from papertrade.api.routers.orders import router as orders_router
from papertrade.api.routers.market import router as market_router

__all__ = [
    "portfolio_router",
    "orders_router",
    "market_router",
]
