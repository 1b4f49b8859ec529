"""Application context for in-process service management.

One AppContext is built per process (per FastAPI app) and owns the storage
engine, the ledger store and every service. Nothing is kept in module globals.
"""

import logging
from typing import Optional

from sqlalchemy import Engine

from papertrade.config.settings import Settings, get_settings
from papertrade.core.locks import UserLockRegistry
from papertrade.providers import (
    AlphaVantageProvider,
    MarketDataProvider,
    SyntheticMarketDataProvider,
)
from papertrade.repositories.protocols import LedgerStore
from papertrade.repositories.memory import InMemoryLedgerStore, JsonFileLedgerStore
from papertrade.repositories.sqlalchemy import (
    SqlAlchemyLedgerStore,
    create_db_engine,
    create_session_factory,
    init_db,
)
from papertrade.services import (
    LedgerService,
    MarketDataService,
    PortfolioService,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all services.

    Args:
        settings: Configuration; the process-wide settings when omitted.
        market_provider: Overrides the provider chosen from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        market_provider: Optional[MarketDataProvider] = None,
    ):
        self.settings = settings or get_settings()
        self.locks = UserLockRegistry()
        self.engine: Optional[Engine] = None
        self._initialized = False

        self.store = self._build_store()
        self.market_provider = market_provider or self._build_provider()

        self.market_data = MarketDataService(
            provider=self.market_provider,
            cache_ttl_seconds=self.settings.market_data_cache_ttl_seconds,
            open_hour=self.settings.market_open_hour,
            close_hour=self.settings.market_close_hour,
        )
        self.ledger = LedgerService(
            store=self.store,
            initial_cash=self.settings.initial_cash,
            brokerage_rate=self.settings.brokerage_rate,
            min_brokerage=self.settings.min_brokerage,
        )
        self.portfolio = PortfolioService(
            ledger=self.ledger,
            market_data=self.market_data,
            orders_limit=self.settings.orders_in_portfolio,
        )

    def initialize(self) -> None:
        """Create database tables (relational backend only)."""
        if self._initialized:
            return
        if self.engine is not None:
            init_db(self.engine)
        self._initialized = True
        logger.info("Ledger backend ready: %s", self.settings.ledger_backend)

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    def close(self) -> None:
        """Clean up resources."""
        if isinstance(self.market_provider, AlphaVantageProvider):
            self.market_provider.close()
        if self.engine is not None:
            self.engine.dispose()
        self._initialized = False

    def _build_store(self) -> LedgerStore:
        if self.settings.ledger_backend == "memory":
            if self.settings.ledger_state_file:
                return JsonFileLedgerStore(
                    self.settings.ledger_state_file,
                    initial_cash=self.settings.initial_cash,
                    locks=self.locks,
                )
            return InMemoryLedgerStore(locks=self.locks)

        self.engine = create_db_engine(self.settings.get_database_url())
        return SqlAlchemyLedgerStore(create_session_factory(self.engine), locks=self.locks)

    def _build_provider(self) -> MarketDataProvider:
        if self.settings.alpha_vantage_key:
            return AlphaVantageProvider(
                api_key=self.settings.alpha_vantage_key,
                timeout_seconds=self.settings.market_data_timeout_seconds,
            )
        return SyntheticMarketDataProvider()
