"""Alpha Vantage GLOBAL_QUOTE provider."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

import httpx

from papertrade.core.timezone import is_weekday, now_market
from papertrade.domain.views import Quote
from papertrade.providers.market_data_provider import ListedStock, NSE_STOCKS

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"


class AlphaVantageProvider:
    """
    Live quotes from Alpha Vantage.

    Symbols without an exchange suffix are looked up on BSE. A symbol whose
    request fails or whose payload carries no usable price is left out of
    the result; the market data service then serves its cached quote.
    """

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 5.0,
        stocks: Iterable[ListedStock] = NSE_STOCKS,
        client: Optional[httpx.Client] = None,
        base_url: str = ALPHA_VANTAGE_URL,
    ):
        self._api_key = api_key
        self._stocks = {s.symbol: s for s in stocks}
        self._base_url = base_url
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        result: dict[str, Quote] = {}
        for symbol in symbols:
            quote = self._fetch_quote(symbol.upper())
            if quote is not None:
                result[quote.symbol] = quote
        return result

    def list_symbols(self) -> list[str]:
        return list(self._stocks)

    def is_trading_day(self) -> bool:
        return is_weekday(now_market())

    def close(self) -> None:
        self._client.close()

    def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        params = {
            "function": "GLOBAL_QUOTE",
            "symbol": symbol if "." in symbol else f"{symbol}.BSE",
            "apikey": self._api_key,
        }
        try:
            response = self._client.get(self._base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException:
            logger.warning("Quote request for %s timed out", symbol)
            return None
        except httpx.HTTPError as e:
            logger.warning("Quote request for %s failed: %s", symbol, e)
            return None
        except ValueError:
            logger.warning("Quote response for %s is not JSON", symbol)
            return None

        return self._parse_quote(symbol, payload)

    def _parse_quote(self, symbol: str, payload: object) -> Optional[Quote]:
        if not isinstance(payload, dict):
            return None
        data = payload.get("Global Quote") or payload.get("GlobalQuote")
        if not isinstance(data, dict):
            logger.warning("No quote returned for %s", symbol)
            return None

        price = _field(data, "05. price", "05.price", "price")
        if price is None or price <= 0:
            logger.warning("Unusable price for %s: %r", symbol, data)
            return None

        prev_close = _field(data, "08. previous close", "08.previous close")
        if prev_close is None:
            change = _field(data, "09. change", "09.change", "change") or Decimal("0")
            prev_close = price - change

        stock = self._stocks.get(symbol)
        return Quote(
            symbol=symbol,
            name=stock.name if stock else symbol,
            sector=stock.sector if stock else "",
            last_price=price,
            prev_close=prev_close,
            as_of=now_market(),
        )


def _field(data: dict, *keys: str) -> Optional[Decimal]:
    for key in keys:
        raw = data.get(key)
        if raw in (None, ""):
            continue
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            return None
        return value if value.is_finite() else None
    return None
