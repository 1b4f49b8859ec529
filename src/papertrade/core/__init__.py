"""Core utilities and shared functionality."""

from papertrade.core.timezone import (
    now_market,
    to_market,
    market_time_from,
    is_weekday,
    in_session,
    MARKET_TZ,
)
from papertrade.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    OrderError,
    InvalidQuantityError,
    InvalidLimitPriceError,
    MarketPriceUnavailableError,
    InsufficientFundsError,
    InsufficientSharesError,
    StorageError,
    ConcurrentModificationError,
)
from papertrade.core.locks import UserLockRegistry

__all__ = [
    "now_market",
    "to_market",
    "market_time_from",
    "is_weekday",
    "in_session",
    "MARKET_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "OrderError",
    "InvalidQuantityError",
    "InvalidLimitPriceError",
    "MarketPriceUnavailableError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "StorageError",
    "ConcurrentModificationError",
    "UserLockRegistry",
]
