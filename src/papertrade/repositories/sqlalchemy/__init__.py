"""SQLAlchemy repository implementations."""

from papertrade.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
    sqlite_url_for,
)
from papertrade.repositories.sqlalchemy.cash_repo import SqlAlchemyCashAccountRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.order_repo import SqlAlchemyOrderRepository
from papertrade.repositories.sqlalchemy.store import SqlAlchemyLedgerStore, SqlAlchemyUnitOfWork

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "session_scope",
    "sqlite_url_for",
    "SqlAlchemyCashAccountRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyLedgerStore",
    "SqlAlchemyUnitOfWork",
]
