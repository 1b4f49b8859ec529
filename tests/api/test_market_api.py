"""
API tests for market data and service endpoints.

Tests cover:
- Stock listing with search and sector filters
- Single quote lookup (200, 404)
- Market status
- Health and root endpoints
"""

from fastapi.testclient import TestClient


class TestMarketAPI:
    """Tests for /market endpoints."""

    def test_list_stocks(self, client: TestClient):
        response = client.get("/market/stocks")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert {s["symbol"] for s in data["stocks"]} == {"INFY", "TCS", "SBIN"}

    def test_search_by_name(self, client: TestClient):
        response = client.get("/market/stocks", params={"q": "tcs"})

        assert [s["symbol"] for s in response.json()["stocks"]] == ["TCS"]

    def test_filter_by_sector(self, client: TestClient):
        response = client.get("/market/stocks", params={"sector": "financial services"})

        assert [s["symbol"] for s in response.json()["stocks"]] == ["SBIN"]

    def test_quote(self, client: TestClient):
        """
        GIVEN INFY quoted at 1500 with previous close 1490
        WHEN I GET /market/quotes/infy
        THEN the quote shows price and change
        """
        response = client.get("/market/quotes/infy")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "INFY"
        assert data["price"] == 1500.0
        assert data["prevClose"] == 1490.0
        assert data["change"] == 10.0
        assert "lastUpdate" in data

    def test_unknown_quote_returns_404(self, client: TestClient):
        response = client.get("/market/quotes/NOPE")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_status(self, client: TestClient):
        response = client.get("/market/status")

        assert response.status_code == 200
        data = response.json()
        assert data["openHour"] == 9
        assert data["closeHour"] == 15
        assert data["isTradingDay"] is True
        assert isinstance(data["isOpen"], bool)


class TestServiceEndpoints:
    """Tests for / and /health."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "version" in data
