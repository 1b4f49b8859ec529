"""
Unit tests for PortfolioService.

Tests cover:
- MARKET price resolution from the feed, with body-price fallback
- LIMIT orders marked at the feed price
- Portfolio valuation at live quotes and stored-price fallback
- Price refresh
"""

from decimal import Decimal

import pytest

from papertrade.core.exceptions import MarketPriceUnavailableError
from papertrade.domain.models import OrderSide, OrderType
from papertrade.domain.views import OrderRequest
from papertrade.services import LedgerService, MarketDataService, PortfolioService

USER = "user-1"


@pytest.fixture
def live_service(ledger_service: LedgerService, market_provider) -> PortfolioService:
    """Portfolio service whose quotes are never cached."""
    return PortfolioService(
        ledger=ledger_service,
        market_data=MarketDataService(provider=market_provider, cache_ttl_seconds=0),
    )


# =============================================================================
# ORDER PRICING TESTS
# =============================================================================


class TestOrderPricing:
    """Tests for resolving execution prices before the ledger runs."""

    def test_market_order_uses_feed_price(self, portfolio_service: PortfolioService, ledger_service):
        """
        GIVEN INFY quoted at 1500
        WHEN I place a MARKET BUY with no price
        THEN it fills at 1500 and takes the feed's name
        """
        confirmation = portfolio_service.place_order(USER, OrderRequest("INFY", OrderSide.BUY, 2))

        assert confirmation.executed_price == Decimal("1500.00")
        assert ledger_service.get_position(USER, "INFY").name == "INFY Ltd"

    def test_feed_price_beats_body_price(self, portfolio_service: PortfolioService):
        """
        GIVEN INFY quoted at 1500
        WHEN a MARKET BUY arrives carrying 1400
        THEN it fills at the feed price
        """
        request = OrderRequest("INFY", OrderSide.BUY, 1, market_price=Decimal("1400"))

        assert portfolio_service.place_order(USER, request).executed_price == Decimal("1500.00")

    def test_body_price_used_when_feed_has_none(self, portfolio_service: PortfolioService):
        """
        GIVEN the feed does not quote XYZ
        WHEN a MARKET BUY arrives carrying 50
        THEN it fills at 50
        """
        request = OrderRequest("XYZ", OrderSide.BUY, 1, market_price=Decimal("50"))

        assert portfolio_service.place_order(USER, request).executed_price == Decimal("50")

    def test_no_price_anywhere(self, portfolio_service: PortfolioService):
        """
        GIVEN the feed does not quote XYZ
        WHEN a MARKET BUY arrives without a price
        THEN MarketPriceUnavailableError is raised
        """
        with pytest.raises(MarketPriceUnavailableError):
            portfolio_service.place_order(USER, OrderRequest("XYZ", OrderSide.BUY, 1))

    def test_limit_order_marked_at_feed_price(self, portfolio_service: PortfolioService, ledger_service):
        """
        GIVEN INFY quoted at 1500
        WHEN a LIMIT BUY at 1450 executes
        THEN it fills at 1450 and the position is marked at 1500
        """
        request = OrderRequest(
            "INFY", OrderSide.BUY, 1, OrderType.LIMIT, limit_price=Decimal("1450")
        )

        assert portfolio_service.place_order(USER, request).executed_price == Decimal("1450")
        assert ledger_service.get_position(USER, "INFY").current_price == Decimal("1500.00")

    def test_preview_uses_feed_price(self, portfolio_service: PortfolioService):
        preview = portfolio_service.preview_order(USER, OrderRequest("TCS", OrderSide.BUY, 10))

        assert preview.execution_price == Decimal("3900.00")
        assert preview.gross_amount == Decimal("39000.00")


# =============================================================================
# VALUATION TESTS
# =============================================================================


class TestGetPortfolio:
    """Tests for get_portfolio and refresh_prices."""

    def test_valued_at_live_quotes(self, live_service: PortfolioService, market_provider):
        """
        GIVEN 2 INFY bought at 1500
        WHEN INFY moves to 1600
        THEN the portfolio shows +200 P&L and total value 100180
        """
        live_service.place_order(USER, OrderRequest("INFY", OrderSide.BUY, 2))
        market_provider.prices["INFY"] = Decimal("1600")

        view = live_service.get_portfolio(USER)

        assert view.available_cash == Decimal("96980")
        assert view.invested_amount == Decimal("3000")
        assert view.total_pnl == Decimal("200")
        assert view.total_value == Decimal("100180")
        assert view.positions[0].current_price == Decimal("1600")
        assert len(view.orders) == 1
        assert view.as_of is not None

    def test_unquoted_symbol_uses_stored_price(self, live_service: PortfolioService):
        """
        GIVEN a position in XYZ, which the feed does not quote
        WHEN the portfolio is valued
        THEN XYZ is valued at its stored price
        """
        live_service.place_order(USER, OrderRequest("XYZ", OrderSide.BUY, 4, market_price=Decimal("50")))

        view = live_service.get_portfolio(USER)

        assert view.positions[0].current_price == Decimal("50")
        assert view.positions[0].current_value == Decimal("200")

    def test_orders_limited(self, ledger_service: LedgerService, market_data_service):
        """
        GIVEN three orders and a portfolio order limit of 2
        WHEN the portfolio is read
        THEN only the two newest orders are included
        """
        service = PortfolioService(ledger_service, market_data_service, orders_limit=2)
        for _ in range(3):
            service.place_order(USER, OrderRequest("SBIN", OrderSide.BUY, 1))

        assert len(service.get_portfolio(USER).orders) == 2

    def test_refresh_prices_stores_quotes(self, live_service: PortfolioService, ledger_service, market_provider):
        """
        GIVEN INFY held and marked at 1500
        WHEN INFY moves to 1600 and prices are refreshed
        THEN the stored current price is 1600
        """
        live_service.place_order(USER, OrderRequest("INFY", OrderSide.BUY, 1))
        market_provider.prices["INFY"] = Decimal("1600")

        live_service.refresh_prices(USER)

        assert ledger_service.get_position(USER, "INFY").current_price == Decimal("1600")

    def test_get_position_view(self, portfolio_service: PortfolioService):
        portfolio_service.place_order(USER, OrderRequest("TCS", OrderSide.BUY, 1))

        view = portfolio_service.get_position(USER, "tcs")

        assert view.symbol == "TCS"
        assert view.current_value == Decimal("3900.00")
        assert view.pnl == Decimal("0")
