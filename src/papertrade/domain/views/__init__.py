"""View models for service outputs."""

from papertrade.domain.views.portfolio import (
    PositionView,
    PortfolioView,
    LedgerSnapshot,
)
from papertrade.domain.views.orders import (
    OrderRequest,
    OrderConfirmation,
    OrderPreview,
)
from papertrade.domain.views.market import Quote

__all__ = [
    "PositionView",
    "PortfolioView",
    "LedgerSnapshot",
    "OrderRequest",
    "OrderConfirmation",
    "OrderPreview",
    "Quote",
]
