"""Market data service for quotes, stock listing and market hours."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.timezone import in_session, now_market
from papertrade.domain.views import Quote
from papertrade.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching market data (quotes, listing, market hours).

    Wraps provider with caching and graceful degradation: when the provider
    fails or leaves a symbol out, the last cached quote is served even if it
    is older than the TTL.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: int = 60,
        open_hour: int = 9,
        close_hour: int = 15,
        clock: Callable[[], datetime] = now_market,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._open_hour = open_hour
        self._close_hour = close_hour
        self._clock = clock
        self._quote_cache: dict[str, tuple[Quote, datetime]] = {}

    @property
    def open_hour(self) -> int:
        return self._open_hour

    @property
    def close_hour(self) -> int:
        return self._close_hour

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for symbols with caching.

        Returns dict mapping symbol -> Quote. Symbols never quoted are omitted.
        """
        if not symbols:
            return {}

        # Normalize symbols, keep request order
        symbols = list(dict.fromkeys(s.strip().upper() for s in symbols))

        now = self._clock()
        result = {s: self._quote_cache[s][0] for s in symbols if self._is_fresh(s, now)}
        missing = [s for s in symbols if s not in result]
        if not missing:
            return result

        try:
            new_quotes = self._provider.get_quotes(missing)
        except Exception as e:
            logger.warning("Market data provider failed for %s: %s", ", ".join(missing), e)
            new_quotes = {}

        for symbol, quote in new_quotes.items():
            self._quote_cache[symbol] = (quote, now)
        result.update(new_quotes)

        # Stale fallback for anything the provider could not price
        for symbol in missing:
            if symbol not in result and symbol in self._quote_cache:
                logger.warning("Serving stale quote for %s", symbol)
                result[symbol] = self._quote_cache[symbol][0]

        return {s: result[s] for s in symbols if s in result}

    def get_quote(self, symbol: str) -> Optional[Quote]:
        """Single quote, or None when unavailable."""
        return self.get_quotes([symbol]).get(symbol.strip().upper())

    def get_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        """Price lookup for valuation: symbol -> last price."""
        return {s: q.last_price for s, q in self.get_quotes(symbols).items()}

    def get_price(self, symbol: str) -> Optional[Decimal]:
        """Current price, or None when market data is unavailable."""
        quote = self.get_quote(symbol)
        return quote.last_price if quote else None

    def list_stocks(self, query: Optional[str] = None, sector: Optional[str] = None) -> list[Quote]:
        """
        Quotes for every listed symbol.

        query matches symbol or name (case-insensitive substring);
        sector must match exactly, ignoring case.
        """
        quotes = self.get_quotes(self._provider.list_symbols()).values()
        needle = (query or "").strip().lower()
        sector_filter = (sector or "").strip().lower()
        return [
            q for q in quotes
            if (not needle or needle in q.symbol.lower() or needle in q.name.lower())
            and (not sector_filter or q.sector.lower() == sector_filter)
        ]

    def is_trading_day(self) -> bool:
        """Check if today is a trading day."""
        return self._provider.is_trading_day()

    def is_market_open(self, at: Optional[datetime] = None) -> bool:
        """Trading day and within [open_hour, close_hour) exchange time."""
        return self.is_trading_day() and in_session(at or self._clock(), self._open_hour, self._close_hour)

    def _is_fresh(self, symbol: str, now: datetime) -> bool:
        """Check if the cached quote is within TTL."""
        cached = self._quote_cache.get(symbol)
        if cached is None:
            return False
        return (now - cached[1]).total_seconds() < self._cache_ttl
