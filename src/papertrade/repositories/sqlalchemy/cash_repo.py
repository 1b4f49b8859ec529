"""SQLAlchemy implementation of CashAccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import to_market
from papertrade.domain.models import CashAccount
from papertrade.repositories.sqlalchemy.orm_models import PortfolioORM, UserORM


class SqlAlchemyCashAccountRepository:
    """SQLAlchemy-backed cash account repository (the portfolios table)."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, for_update: bool = False) -> Optional[CashAccount]:
        """Retrieve the cash account, optionally locking the row (SELECT ... FOR UPDATE)."""
        query = self._db.query(PortfolioORM).filter(PortfolioORM.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        orm_cash = query.first()
        return self._to_domain(orm_cash) if orm_cash else None

    def save(self, account: CashAccount) -> CashAccount:
        """Insert or update a cash account; creates the user row on first save."""
        orm_cash = self._db.get(PortfolioORM, account.user_id)

        if orm_cash:
            orm_cash.available_cash = account.available_cash
            orm_cash.updated_at = account.updated_at
        else:
            if self._db.get(UserORM, account.user_id) is None:
                self._db.add(UserORM(user_id=account.user_id))
            orm_cash = PortfolioORM(
                user_id=account.user_id,
                available_cash=account.available_cash,
                updated_at=account.updated_at,
            )
            self._db.add(orm_cash)

        self._db.flush()
        return self._to_domain(orm_cash)

    @staticmethod
    def _to_domain(orm: PortfolioORM) -> CashAccount:
        """Convert ORM model to domain model."""
        return CashAccount(
            user_id=orm.user_id,
            available_cash=Decimal(str(orm.available_cash)) if orm.available_cash else Decimal("0"),
            updated_at=to_market(orm.updated_at) if orm.updated_at else None,
        )
