"""Enumerations for domain models."""

from enum import Enum


class OrderSide(str, Enum):
    """Direction of an order."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """How the execution price is chosen."""

    MARKET = "MARKET"  # current market price
    LIMIT = "LIMIT"  # caller-supplied limit price, filled at that price


class OrderStatus(str, Enum):
    """Order lifecycle status."""

    PENDING = "PENDING"
    EXECUTED = "EXECUTED"
    CANCELLED = "CANCELLED"
