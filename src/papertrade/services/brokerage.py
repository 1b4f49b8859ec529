"""Brokerage fee calculation."""

from decimal import Decimal

BROKERAGE_RATE = Decimal("0.0003")
MIN_BROKERAGE = Decimal("20")
INITIAL_CASH = Decimal("100000")


def calculate_brokerage(
    amount: Decimal,
    rate: Decimal = BROKERAGE_RATE,
    minimum: Decimal = MIN_BROKERAGE,
) -> Decimal:
    """
    Fee charged on a trade: a percentage of the gross amount with a floor.

    A zero amount still pays the minimum fee.
    """
    return max(amount * rate, minimum)
