"""Market data provider protocol and the listed-stock universe."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from papertrade.domain.views import Quote


@dataclass(frozen=True)
class ListedStock:
    """A tradable symbol with its reference price."""

    symbol: str
    name: str
    sector: str
    base_price: Decimal


NSE_STOCKS: tuple[ListedStock, ...] = (
    ListedStock("RELIANCE", "Reliance Industries Ltd", "Oil & Gas", Decimal("2486.75")),
    ListedStock("TCS", "Tata Consultancy Services", "Information Technology", Decimal("3924.15")),
    ListedStock("HDFCBANK", "HDFC Bank Ltd", "Financial Services", Decimal("1634.20")),
    ListedStock("INFY", "Infosys Ltd", "Information Technology", Decimal("1789.60")),
    ListedStock("ICICIBANK", "ICICI Bank Ltd", "Financial Services", Decimal("1256.40")),
    ListedStock("HINDUNILVR", "Hindustan Unilever Ltd", "FMCG", Decimal("2387.30")),
    ListedStock("LT", "Larsen & Toubro Ltd", "Construction", Decimal("3654.80")),
    ListedStock("SBIN", "State Bank of India", "Financial Services", Decimal("867.50")),
    ListedStock("BHARTIARTL", "Bharti Airtel Ltd", "Telecommunications", Decimal("1654.30")),
    ListedStock("KOTAKBANK", "Kotak Mahindra Bank", "Financial Services", Decimal("1735.90")),
    ListedStock("ASIANPAINT", "Asian Paints Ltd", "Consumer Goods", Decimal("2456.75")),
    ListedStock("WIPRO", "Wipro Ltd", "Information Technology", Decimal("298.45")),
    ListedStock("MARUTI", "Maruti Suzuki India Ltd", "Automobile", Decimal("11234.50")),
    ListedStock("HCLTECH", "HCL Technologies Ltd", "Information Technology", Decimal("1687.20")),
    ListedStock("AXISBANK", "Axis Bank Ltd", "Financial Services", Decimal("1098.65")),
)


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations fetch current quotes (last_price, prev_close).
    Symbols the provider cannot price are omitted from the result.
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for multiple symbols.

        Returns dict mapping symbol -> Quote.
        """
        ...

    def list_symbols(self) -> list[str]:
        """Symbols this provider can quote."""
        ...

    def is_trading_day(self) -> bool:
        """Check if today is a trading day."""
        ...
