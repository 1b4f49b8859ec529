"""Market data providers module."""

from papertrade.providers.market_data_provider import (
    MarketDataProvider,
    ListedStock,
    NSE_STOCKS,
)
from papertrade.providers.synthetic_provider import SyntheticMarketDataProvider
from papertrade.providers.alpha_vantage import AlphaVantageProvider

__all__ = [
    "MarketDataProvider",
    "ListedStock",
    "NSE_STOCKS",
    "SyntheticMarketDataProvider",
    "AlphaVantageProvider",
]
