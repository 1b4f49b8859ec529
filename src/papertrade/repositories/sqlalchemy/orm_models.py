"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Integer,
    ForeignKey,
    Numeric,
    Index,
    UniqueConstraint,
    Enum as SqlEnum,
)

from papertrade.core.timezone import now_market
from papertrade.repositories.sqlalchemy.database import Base
from papertrade.domain.models.enums import OrderSide, OrderType, OrderStatus

# Money columns keep 8 places so brokerage fractions survive a round trip
MONEY = Numeric(precision=20, scale=8)


class UserORM(Base):
    """SQLAlchemy model for a trading user (identity is issued elsewhere)."""

    __tablename__ = "users"

    user_id = Column(String(64), primary_key=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_market)


class PortfolioORM(Base):
    """SQLAlchemy model for CashAccount; one row per user."""

    __tablename__ = "portfolios"

    user_id = Column(String(64), ForeignKey("users.user_id"), primary_key=True)
    available_cash = Column(MONEY, nullable=False, default=Decimal("0"))
    version = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Optimistic check: every UPDATE asserts the version it read
    __mapper_args__ = {"version_id_col": version}


class PositionORM(Base):
    """SQLAlchemy model for Position."""

    __tablename__ = "positions"
    __table_args__ = (
        UniqueConstraint("user_id", "symbol", name="uq_positions_user_symbol"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.user_id"), nullable=False)
    symbol = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    avg_price = Column(MONEY, nullable=False)
    invested_value = Column(MONEY, nullable=False)
    current_price = Column(MONEY, nullable=False, default=Decimal("0"))
    updated_at = Column(DateTime(timezone=True), nullable=True)


class OrderORM(Base):
    """SQLAlchemy model for Order (append-only log)."""

    __tablename__ = "orders"
    __table_args__ = (Index("idx_orders_user_time", "user_id", "timestamp"),)

    # Insertion sequence breaks timestamp ties when listing newest first
    seq = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), unique=True, nullable=False)
    user_id = Column(String(64), ForeignKey("users.user_id"), nullable=False)
    symbol = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    order_type = Column(SqlEnum(OrderType), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(MONEY, nullable=False)
    status = Column(SqlEnum(OrderStatus), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    brokerage = Column(MONEY, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    realized_pnl = Column(MONEY, nullable=True)
