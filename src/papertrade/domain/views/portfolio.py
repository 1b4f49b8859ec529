"""View models for portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models import CashAccount, Order, Position


@dataclass
class PositionView:
    """A holding valued at a current price."""

    symbol: str
    name: str
    quantity: int
    avg_price: Decimal
    invested_value: Decimal
    current_price: Decimal
    current_value: Decimal
    pnl: Decimal
    pnl_percent: Decimal


@dataclass
class PortfolioView:
    """
    Derived portfolio summary.

    Never stored; recomputed from cash, positions and a price lookup.
    todays_pnl is a fixed 10% of total_pnl (no intraday snapshot exists).
    """

    total_value: Decimal
    invested_amount: Decimal
    available_cash: Decimal
    total_pnl: Decimal
    total_pnl_percent: Decimal
    todays_pnl: Decimal
    todays_pnl_percent: Decimal
    positions: list[PositionView] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    as_of: Optional[datetime] = None


@dataclass
class LedgerSnapshot:
    """Cash, positions and recent orders read in one unit of work."""

    account: CashAccount
    positions: list[Position] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
