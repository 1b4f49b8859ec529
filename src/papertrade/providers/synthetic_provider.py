"""Synthetic market data provider for offline use."""

import random
from decimal import Decimal
from typing import Iterable, Optional

from papertrade.core.timezone import is_weekday, now_market
from papertrade.domain.views import Quote
from papertrade.providers.market_data_provider import ListedStock, NSE_STOCKS

_CENTS = Decimal("0.01")


class SyntheticMarketDataProvider:
    """
    Provider that jitters each listed stock around its base price.

    price = base + base * volatility * U(-1, 1), rounded to 2 places.
    prev_close is the base price. Unknown symbols are not quoted.
    """

    def __init__(
        self,
        stocks: Iterable[ListedStock] = NSE_STOCKS,
        volatility: Decimal = Decimal("0.01"),
        seed: Optional[int] = 42,
    ):
        """Initialize with optional random seed for reproducibility."""
        self._stocks = {s.symbol: s for s in stocks}
        self._volatility = Decimal(volatility)
        self._rng = random.Random(seed)

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return synthetic quotes for the listed symbols among those requested."""
        as_of = now_market()
        result: dict[str, Quote] = {}

        for symbol in symbols:
            stock = self._stocks.get(symbol.upper())
            if stock is None:
                continue
            factor = Decimal(str(self._rng.uniform(-1, 1)))
            price = stock.base_price + stock.base_price * self._volatility * factor
            result[stock.symbol] = Quote(
                symbol=stock.symbol,
                name=stock.name,
                sector=stock.sector,
                last_price=price.quantize(_CENTS),
                prev_close=stock.base_price,
                as_of=as_of,
            )

        return result

    def list_symbols(self) -> list[str]:
        return list(self._stocks)

    def is_trading_day(self) -> bool:
        """Weekdays are trading days; exchange holidays are not modelled."""
        return is_weekday(now_market())
