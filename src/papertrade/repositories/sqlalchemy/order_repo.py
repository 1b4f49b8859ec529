"""SQLAlchemy implementation of OrderRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import to_market
from papertrade.domain.models import Order
from papertrade.repositories.sqlalchemy.orm_models import OrderORM


class SqlAlchemyOrderRepository:
    """SQLAlchemy-backed order log."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, order: Order) -> Order:
        """Append an executed order."""
        self._db.add(self._to_orm(order))
        self._db.flush()
        return order

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Order]:
        """List orders newest first."""
        query = (
            self._db.query(OrderORM)
            .filter(OrderORM.user_id == user_id)
            .order_by(OrderORM.timestamp.desc(), OrderORM.seq.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(o) for o in query.all()]

    def delete_all(self, user_id: str) -> None:
        """Delete every order of a user."""
        self._db.query(OrderORM).filter(OrderORM.user_id == user_id).delete()
        self._db.flush()

    @staticmethod
    def _to_orm(order: Order) -> OrderORM:
        """Convert domain model to ORM model."""
        return OrderORM(
            order_id=order.order_id,
            user_id=order.user_id,
            symbol=order.symbol,
            name=order.name,
            side=order.side,
            order_type=order.order_type,
            quantity=order.quantity,
            price=order.price,
            status=order.status,
            timestamp=order.timestamp,
            brokerage=order.brokerage,
            total_amount=order.total_amount,
            realized_pnl=order.realized_pnl,
        )

    @staticmethod
    def _to_domain(orm: OrderORM) -> Order:
        """Convert ORM model to domain model."""
        return Order(
            order_id=orm.order_id,
            user_id=orm.user_id,
            symbol=orm.symbol,
            name=orm.name,
            side=orm.side,
            order_type=orm.order_type,
            quantity=int(orm.quantity),
            price=Decimal(str(orm.price)),
            status=orm.status,
            timestamp=to_market(orm.timestamp),
            brokerage=Decimal(str(orm.brokerage)),
            total_amount=Decimal(str(orm.total_amount)),
            realized_pnl=Decimal(str(orm.realized_pnl)) if orm.realized_pnl is not None else None,
        )
