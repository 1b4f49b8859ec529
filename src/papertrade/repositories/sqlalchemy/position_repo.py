"""SQLAlchemy implementation of PositionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import to_market
from papertrade.domain.models import Position
from papertrade.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str) -> Optional[Position]:
        """Get the open position for a symbol."""
        orm_pos = self._find(user_id, symbol)
        return self._to_domain(orm_pos) if orm_pos else None

    def list_by_user(self, user_id: str) -> list[Position]:
        """List open positions ordered by symbol."""
        orm_positions = (
            self._db.query(PositionORM)
            .filter(PositionORM.user_id == user_id)
            .order_by(PositionORM.symbol)
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        orm_pos = self._find(position.user_id, position.symbol)

        if orm_pos:
            orm_pos.name = position.name
            orm_pos.quantity = position.quantity
            orm_pos.avg_price = position.avg_price
            orm_pos.invested_value = position.invested_value
            orm_pos.current_price = position.current_price
            orm_pos.updated_at = position.updated_at
        else:
            orm_pos = PositionORM(
                user_id=position.user_id,
                symbol=position.symbol,
                name=position.name,
                quantity=position.quantity,
                avg_price=position.avg_price,
                invested_value=position.invested_value,
                current_price=position.current_price,
                updated_at=position.updated_at,
            )
            self._db.add(orm_pos)

        self._db.flush()
        return self._to_domain(orm_pos)

    def delete(self, user_id: str, symbol: str) -> None:
        """Delete a closed position."""
        self._db.query(PositionORM).filter(
            PositionORM.user_id == user_id,
            PositionORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def delete_all(self, user_id: str) -> None:
        """Delete every position of a user."""
        self._db.query(PositionORM).filter(PositionORM.user_id == user_id).delete()
        self._db.flush()

    def _find(self, user_id: str, symbol: str) -> Optional[PositionORM]:
        return (
            self._db.query(PositionORM)
            .filter(
                PositionORM.user_id == user_id,
                PositionORM.symbol == symbol,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM position to domain model."""
        return Position(
            user_id=orm.user_id,
            symbol=orm.symbol,
            name=orm.name,
            quantity=int(orm.quantity),
            avg_price=Decimal(str(orm.avg_price)),
            invested_value=Decimal(str(orm.invested_value)),
            current_price=Decimal(str(orm.current_price)) if orm.current_price else Decimal("0"),
            updated_at=to_market(orm.updated_at) if orm.updated_at else None,
        )
