"""Service layer - business logic orchestration."""

from papertrade.services.brokerage import (
    BROKERAGE_RATE,
    MIN_BROKERAGE,
    INITIAL_CASH,
    calculate_brokerage,
)
from papertrade.services.ledger_service import LedgerService
from papertrade.services.valuation import valuate, value_position
from papertrade.services.market_data_service import MarketDataService
from papertrade.services.portfolio_service import PortfolioService

__all__ = [
    "BROKERAGE_RATE",
    "MIN_BROKERAGE",
    "INITIAL_CASH",
    "calculate_brokerage",
    "LedgerService",
    "valuate",
    "value_position",
    "MarketDataService",
    "PortfolioService",
]
