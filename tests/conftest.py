"""
Pytest configuration and fixtures for paper trading tests.

This module provides:
- In-memory SQLite database fixtures
- Ledger store fixtures parametrized over both backends
- Deterministic market data providers
- Time helpers for exchange (India Standard Time) timezone
- Service fixtures and a FastAPI TestClient
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from papertrade.app_context import AppContext
from papertrade.config.settings import Settings, reset_settings
from papertrade.core.locks import UserLockRegistry
from papertrade.core.timezone import MARKET_TZ
from papertrade.domain.models import CashAccount, OrderSide, OrderType
from papertrade.domain.views import OrderRequest, Quote
from papertrade.main import create_app
from papertrade.repositories.memory import InMemoryLedgerStore
from papertrade.repositories.sqlalchemy import (
    Base,
    SqlAlchemyLedgerStore,
    create_db_engine,
    create_session_factory,
    init_db,
)
from papertrade.services import LedgerService, MarketDataService, PortfolioService


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def market_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in exchange time."""
    return MARKET_TZ.localize(datetime(year, month, day, hour, minute, second))


class TickingClock:
    """Clock that advances one second per call so order timestamps are distinct."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests (a Friday, market hours)."""
    return market_datetime(2024, 6, 14, 10, 30, 0)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryLedgerStore:
    """Provide an empty in-process ledger store."""
    return InMemoryLedgerStore(locks=UserLockRegistry())


@pytest.fixture
def sql_store(session_factory) -> SqlAlchemyLedgerStore:
    """Provide a ledger store over the in-memory SQLite database."""
    return SqlAlchemyLedgerStore(session_factory, locks=UserLockRegistry())


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request):
    """Each test using this fixture runs once per backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


def seed_cash(store, user_id: str, amount: Decimal) -> None:
    """Set a user's cash balance directly in the store."""
    with store.unit_of_work(user_id) as uow:
        uow.cash.save(CashAccount(user_id=user_id, available_cash=Decimal(amount)))


def assert_decimal_close(actual: Decimal, expected: Decimal, tolerance: str = "0.000001") -> None:
    """SQLite stores NUMERIC as REAL, so compare within a tolerance."""
    assert abs(Decimal(actual) - Decimal(expected)) <= Decimal(tolerance), (
        f"{actual} != {expected} (tolerance {tolerance})"
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(store, clock) -> LedgerService:
    """Ledger with standard brokerage (0.03%, minimum 20)."""
    return LedgerService(store=store, clock=clock)


@pytest.fixture
def zero_fee_ledger(store, clock) -> LedgerService:
    """Ledger that charges no brokerage, for conservation checks."""
    return LedgerService(
        store=store,
        brokerage_rate=Decimal("0"),
        min_brokerage=Decimal("0"),
        clock=clock,
    )


@pytest.fixture
def buy() -> Callable[..., OrderRequest]:
    """Factory for MARKET BUY requests."""

    def _buy(symbol: str, quantity, price, order_type: OrderType = OrderType.MARKET, **kwargs) -> OrderRequest:
        price = Decimal(str(price)) if price is not None else None
        if order_type == OrderType.LIMIT:
            return OrderRequest(symbol, OrderSide.BUY, quantity, order_type, limit_price=price, **kwargs)
        return OrderRequest(symbol, OrderSide.BUY, quantity, order_type, market_price=price, **kwargs)

    return _buy


@pytest.fixture
def sell() -> Callable[..., OrderRequest]:
    """Factory for MARKET SELL requests."""

    def _sell(symbol: str, quantity, price, order_type: OrderType = OrderType.MARKET, **kwargs) -> OrderRequest:
        price = Decimal(str(price)) if price is not None else None
        if order_type == OrderType.LIMIT:
            return OrderRequest(symbol, OrderSide.SELL, quantity, order_type, limit_price=price, **kwargs)
        return OrderRequest(symbol, OrderSide.SELL, quantity, order_type, market_price=price, **kwargs)

    return _sell


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class FixedPriceProvider:
    """
    Deterministic market data provider for tests.

    Prices can be changed between calls; fail=True makes every fetch raise.
    """

    def __init__(self, prices: dict[str, Decimal], trading_day: bool = True):
        self.prices = {s: Decimal(str(p)) for s, p in prices.items()}
        self.trading_day = trading_day
        self.fail = False
        self.calls: list[list[str]] = []

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        self.calls.append(list(symbols))
        if self.fail:
            raise ConnectionError("market data feed down")
        as_of = market_datetime(2024, 6, 14, 10, 30)
        return {
            s: Quote(
                symbol=s,
                name=f"{s} Ltd",
                sector="Information Technology" if s in ("INFY", "TCS") else "Financial Services",
                last_price=self.prices[s],
                prev_close=self.prices[s] - Decimal("10"),
                as_of=as_of,
            )
            for s in symbols
            if s in self.prices
        }

    def list_symbols(self) -> list[str]:
        return sorted(self.prices)

    def is_trading_day(self) -> bool:
        return self.trading_day


@pytest.fixture
def market_provider() -> FixedPriceProvider:
    return FixedPriceProvider(
        {
            "INFY": "1500.00",
            "TCS": "3900.00",
            "SBIN": "800.00",
        }
    )


@pytest.fixture
def market_data_service(market_provider, clock) -> MarketDataService:
    return MarketDataService(provider=market_provider, cache_ttl_seconds=60, clock=clock)


@pytest.fixture
def portfolio_service(ledger_service, market_data_service) -> PortfolioService:
    return PortfolioService(ledger=ledger_service, market_data=market_data_service)


# =============================================================================
# API FIXTURES
# =============================================================================


def make_test_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {"database_url": "sqlite://", "ledger_backend": "sqlalchemy"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def app_context(market_provider) -> AppContext:
    return AppContext(make_test_settings(), market_provider=market_provider)


@pytest.fixture
def client(app_context):
    """TestClient over a fresh app; the lifespan creates the tables."""
    app = create_app(context=app_context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1"}


def order_body(
    symbol: str,
    side: str,
    quantity,
    price: Optional[float] = None,
    order_type: str = "MARKET",
    name: Optional[str] = None,
) -> dict:
    """JSON body for POST /orders."""
    body = {"symbol": symbol, "type": side, "orderType": order_type, "quantity": quantity}
    if price is not None:
        body["price"] = price
    if name is not None:
        body["name"] = name
    return body
