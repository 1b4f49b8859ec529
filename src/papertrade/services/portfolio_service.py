"""Portfolio service: joins the ledger with the price feed."""

import logging
from dataclasses import replace
from typing import Optional

from papertrade.core.timezone import now_market
from papertrade.domain.views import (
    OrderConfirmation,
    OrderPreview,
    OrderRequest,
    PortfolioView,
    PositionView,
)
from papertrade.domain.models import CashAccount, OrderType
from papertrade.services.ledger_service import LedgerService
from papertrade.services.market_data_service import MarketDataService
from papertrade.services.valuation import valuate, value_position

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Caller-side orchestration for the ledger.

    Resolves MARKET prices from the feed before handing orders to the ledger
    and values positions at current quotes.
    """

    def __init__(
        self,
        ledger: LedgerService,
        market_data: MarketDataService,
        orders_limit: Optional[int] = 50,
    ):
        self._ledger = ledger
        self._market_data = market_data
        self._orders_limit = orders_limit

    def get_portfolio(self, user_id: str) -> PortfolioView:
        """Portfolio valued at current quotes; stored prices where the feed has none."""
        snapshot = self._ledger.snapshot(user_id, order_limit=self._orders_limit)
        prices = self._market_data.get_prices([p.symbol for p in snapshot.positions])
        return valuate(
            snapshot.account.available_cash,
            snapshot.positions,
            prices,
            orders=snapshot.orders,
            as_of=now_market(),
        )

    def get_position(self, user_id: str, symbol: str) -> PositionView:
        position = self._ledger.get_position(user_id, symbol)
        return value_position(position, self._market_data.get_price(position.symbol))

    def refresh_prices(self, user_id: str) -> PortfolioView:
        """Store current quotes on every open position, then return the portfolio."""
        positions = self._ledger.list_positions(user_id)
        prices = self._market_data.get_prices([p.symbol for p in positions])
        self._ledger.refresh_prices(user_id, prices)
        logger.info("Refreshed %d of %d position prices for user %s", len(prices), len(positions), user_id)
        return self.get_portfolio(user_id)

    def place_order(self, user_id: str, request: OrderRequest) -> OrderConfirmation:
        return self._ledger.place_order(user_id, self._with_market_price(request))

    def preview_order(self, user_id: str, request: OrderRequest) -> OrderPreview:
        return self._ledger.preview_order(user_id, self._with_market_price(request))

    def reset_portfolio(self, user_id: str) -> CashAccount:
        return self._ledger.reset_portfolio(user_id)

    def _with_market_price(self, request: OrderRequest) -> OrderRequest:
        """
        Fill in the feed price.

        A MARKET order keeps the price it came with when the feed has none.
        The feed name replaces a missing name.
        """
        quote = self._market_data.get_quote(request.symbol or "")
        if quote is None:
            if request.order_type == OrderType.MARKET and request.market_price is None:
                logger.warning("No market price for %s", request.symbol)
            return request
        return replace(
            request,
            market_price=quote.last_price,
            name=request.name or quote.name,
        )
