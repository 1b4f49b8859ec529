"""Relational ledger store: one database transaction per unit of work."""

from contextlib import contextmanager
from threading import RLock
from typing import Iterator, Optional

from sqlalchemy import StaticPool
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from papertrade.core.exceptions import ConcurrentModificationError
from papertrade.core.locks import UserLockRegistry
from papertrade.repositories.sqlalchemy.database import session_scope
from papertrade.repositories.sqlalchemy.cash_repo import SqlAlchemyCashAccountRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.order_repo import SqlAlchemyOrderRepository


class SqlAlchemyUnitOfWork:
    """Repositories sharing one session (and therefore one transaction)."""

    def __init__(self, session: Session):
        self.session = session
        self.cash = SqlAlchemyCashAccountRepository(session)
        self.positions = SqlAlchemyPositionRepository(session)
        self.orders = SqlAlchemyOrderRepository(session)


def uses_single_connection(session_factory: sessionmaker) -> bool:
    """True when every session is handed the same DBAPI connection (in-memory SQLite)."""
    bind = session_factory.kw.get("bind")
    return bind is not None and isinstance(bind.pool, StaticPool)


class SqlAlchemyLedgerStore:
    """
    Ledger store over a relational database.

    Position upsert/delete, cash update and order insert of one order commit
    or roll back together. Writers for the same user are serialized in
    process by the lock registry and across processes by the row lock and
    version check on the portfolios row.

    On a single shared connection one user's commit would also commit another
    user's open transaction, so there units of work run one at a time for
    all users.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        locks: Optional[UserLockRegistry] = None,
    ):
        self._session_factory = session_factory
        self._locks = locks or UserLockRegistry()
        self._connection_lock: Optional[RLock] = (
            RLock() if uses_single_connection(session_factory) else None
        )

    @property
    def serializes_all_users(self) -> bool:
        return self._connection_lock is not None

    @contextmanager
    def unit_of_work(self, user_id: str) -> Iterator[SqlAlchemyUnitOfWork]:
        with self._exclusive(user_id):
            try:
                with session_scope(self._session_factory) as session:
                    yield SqlAlchemyUnitOfWork(session)
            except StaleDataError as e:
                raise ConcurrentModificationError(user_id) from e

    @contextmanager
    def _exclusive(self, user_id: str) -> Iterator[None]:
        if self._connection_lock is not None:
            with self._connection_lock:
                yield
        else:
            with self._locks.hold(user_id):
                yield
