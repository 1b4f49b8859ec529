"""
API tests for portfolio endpoints.

Tests cover:
- Portfolio of a new user (initial cash, no positions)
- Valuation at live quotes after orders
- Single position lookup (200, 404)
- Price refresh and reset
"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from papertrade.app_context import AppContext
from papertrade.main import create_app

from tests.conftest import make_test_settings, order_body


@pytest.fixture
def live_client(market_provider):
    """Client whose quote cache expires immediately, so price changes show up."""
    context = AppContext(
        make_test_settings(market_data_cache_ttl_seconds=0),
        market_provider=market_provider,
    )
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


# =============================================================================
# GET PORTFOLIO TESTS
# =============================================================================


class TestGetPortfolioAPI:
    """Tests for GET /portfolio endpoint."""

    def test_requires_identity(self, client: TestClient):
        assert client.get("/portfolio").status_code == 401

    def test_new_user(self, client: TestClient, auth_headers):
        """
        GIVEN a user who never traded
        WHEN I GET /portfolio
        THEN it shows the initial cash and nothing else
        """
        response = client.get("/portfolio", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalValue"] == 100000.0
        assert data["availableCash"] == 100000.0
        assert data["investedAmount"] == 0.0
        assert data["totalPnL"] == 0.0
        assert data["totalPnLPercent"] == 0.0
        assert data["todaysPnL"] == 0.0
        assert data["positions"] == []
        assert data["orders"] == []

    def test_after_buy(self, client: TestClient, auth_headers):
        client.post("/orders", json=order_body("INFY", "BUY", 2), headers=auth_headers)

        data = client.get("/portfolio", headers=auth_headers).json()

        assert data["availableCash"] == 96980.0
        assert data["investedAmount"] == 3000.0
        assert data["totalValue"] == 99980.0
        assert len(data["orders"]) == 1
        position = data["positions"][0]
        assert position["symbol"] == "INFY"
        assert position["name"] == "INFY Ltd"
        assert position["quantity"] == 2
        assert position["avgPrice"] == 1500.0
        assert position["investedValue"] == 3000.0
        assert position["currentValue"] == 3000.0

    def test_valued_at_moving_quotes(self, live_client: TestClient, market_provider, auth_headers):
        """
        GIVEN 2 INFY bought at 1500
        WHEN the quote moves to 1600
        THEN pnl is 200 (6.67%) and today's pnl is a tenth of it
        """
        live_client.post("/orders", json=order_body("INFY", "BUY", 2), headers=auth_headers)
        market_provider.prices["INFY"] = Decimal("1600")

        data = live_client.get("/portfolio", headers=auth_headers).json()

        assert data["totalValue"] == 100180.0
        assert data["totalPnL"] == 200.0
        assert data["totalPnLPercent"] == 6.67
        assert data["todaysPnL"] == 20.0
        assert data["todaysPnLPercent"] == 0.67
        position = data["positions"][0]
        assert position["currentPrice"] == 1600.0
        assert position["pnl"] == 200.0
        assert position["pnlPercent"] == 6.67

    def test_feed_outage_uses_stored_price(self, live_client: TestClient, market_provider, auth_headers):
        live_client.post("/orders", json=order_body("INFY", "BUY", 2), headers=auth_headers)
        market_provider.fail = True

        response = live_client.get("/portfolio", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["positions"][0]["currentPrice"] == 1500.0


# =============================================================================
# POSITION TESTS
# =============================================================================


class TestGetPositionAPI:
    """Tests for GET /portfolio/positions/{symbol} endpoint."""

    def test_position_found(self, client: TestClient, auth_headers):
        client.post("/orders", json=order_body("TCS", "BUY", 3), headers=auth_headers)

        response = client.get("/portfolio/positions/tcs", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["quantity"] == 3
        assert response.json()["avgPrice"] == 3900.0

    def test_position_not_found(self, client: TestClient, auth_headers):
        response = client.get("/portfolio/positions/INFY", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_position_gone_after_full_sell(self, client: TestClient, auth_headers):
        client.post("/orders", json=order_body("SBIN", "BUY", 5), headers=auth_headers)
        client.post("/orders", json=order_body("SBIN", "SELL", 5), headers=auth_headers)

        response = client.get("/portfolio/positions/SBIN", headers=auth_headers)

        assert response.status_code == 404


# =============================================================================
# REFRESH AND RESET TESTS
# =============================================================================


class TestRefreshAndResetAPI:
    """Tests for POST /portfolio/refresh and POST /portfolio/reset."""

    def test_refresh_stores_quotes(self, live_client: TestClient, market_provider, auth_headers):
        """
        GIVEN a position marked at 1500
        WHEN the quote moves to 1450 and I refresh, then the feed fails
        THEN the position stays marked at the refreshed 1450
        """
        live_client.post("/orders", json=order_body("INFY", "BUY", 2), headers=auth_headers)
        market_provider.prices["INFY"] = Decimal("1450")

        response = live_client.post("/portfolio/refresh", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["positions"][0]["currentPrice"] == 1450.0

        market_provider.fail = True
        data = live_client.get("/portfolio", headers=auth_headers).json()
        assert data["positions"][0]["currentPrice"] == 1450.0

    def test_reset(self, client: TestClient, auth_headers):
        """
        GIVEN a user with positions and orders
        WHEN I POST /portfolio/reset
        THEN cash is back to the initial amount and history is empty
        """
        client.post("/orders", json=order_body("INFY", "BUY", 2), headers=auth_headers)
        client.post("/orders", json=order_body("TCS", "BUY", 1), headers=auth_headers)

        response = client.post("/portfolio/reset", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True, "availableCash": 100000.0}
        portfolio = client.get("/portfolio", headers=auth_headers).json()
        assert portfolio["positions"] == []
        assert portfolio["orders"] == []

    def test_reset_leaves_other_users(self, client: TestClient, auth_headers):
        other = {"X-User-Id": "user-2"}
        client.post("/orders", json=order_body("INFY", "BUY", 1), headers=other)

        client.post("/portfolio/reset", headers=auth_headers)

        assert client.get("/orders", headers=other).json()["count"] == 1
