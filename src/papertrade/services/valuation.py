"""Portfolio valuation: derived metrics from cash, positions and current prices."""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from papertrade.domain.models import Order, Position
from papertrade.domain.views import PortfolioView, PositionView

# Placeholder: no end-of-day snapshot exists, so "today" is a fixed share of total P&L
TODAYS_PNL_FACTOR = Decimal("0.1")


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole as a percentage, unrounded; 0 when whole is not positive."""
    if whole <= 0:
        return Decimal("0")
    return part / whole * 100


def value_position(position: Position, price: Optional[Decimal] = None) -> PositionView:
    """
    Value one position.

    Falls back to the position's stored current price when no price is given.
    """
    current_price = price if price is not None and price > 0 else position.current_price
    current_value = current_price * position.quantity
    pnl = current_value - position.invested_value
    return PositionView(
        symbol=position.symbol,
        name=position.name,
        quantity=position.quantity,
        avg_price=position.avg_price,
        invested_value=position.invested_value,
        current_price=current_price,
        current_value=current_value,
        pnl=pnl,
        pnl_percent=percent_of(pnl, position.invested_value),
    )


def valuate(
    cash: Decimal,
    positions: Iterable[Position],
    prices: Mapping[str, Decimal],
    orders: Iterable[Order] = (),
    as_of: Optional[datetime] = None,
) -> PortfolioView:
    """
    Build the portfolio view.

    total_value = cash + sum(current_value); total_pnl = sum(current_value) -
    sum(invested_value). Symbols absent from prices are valued at their last
    stored price.
    """
    views = [value_position(p, prices.get(p.symbol)) for p in positions]

    invested_amount = sum((v.invested_value for v in views), Decimal("0"))
    total_current = sum((v.current_value for v in views), Decimal("0"))
    total_pnl = total_current - invested_amount
    total_pnl_percent = percent_of(total_pnl, invested_amount)

    return PortfolioView(
        total_value=cash + total_current,
        invested_amount=invested_amount,
        available_cash=cash,
        total_pnl=total_pnl,
        total_pnl_percent=total_pnl_percent,
        todays_pnl=total_pnl * TODAYS_PNL_FACTOR,
        todays_pnl_percent=total_pnl_percent * TODAYS_PNL_FACTOR,
        positions=views,
        orders=list(orders),
        as_of=as_of,
    )
