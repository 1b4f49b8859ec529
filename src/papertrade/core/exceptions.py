"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UnauthorizedError(AppError):
    """Raised when a request carries no user identity."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class OrderError(AppError):
    """
    Base class for order rejections.

    Rejections are terminal for the call, leave the ledger untouched and
    are safe to show to the end user.
    """


class InvalidQuantityError(OrderError):
    """Raised when the order quantity is not a positive whole number."""

    def __init__(self, quantity: object):
        super().__init__(
            f"Quantity must be a positive whole number, got {quantity!r}",
            code="INVALID_QUANTITY",
        )


class InvalidLimitPriceError(OrderError):
    """Raised when a LIMIT order has no positive limit price."""

    def __init__(self, limit_price: object):
        super().__init__(
            f"Limit price must be a positive number, got {limit_price!r}",
            code="INVALID_LIMIT_PRICE",
        )


class MarketPriceUnavailableError(OrderError):
    """Raised when a MARKET order arrives without a usable market price."""

    def __init__(self, symbol: str):
        super().__init__(
            f"No market price available for {symbol}",
            code="MARKET_PRICE_UNAVAILABLE",
        )


class InsufficientFundsError(OrderError):
    """Raised when the order would take available cash below zero."""

    def __init__(self, required: str, available: str):
        super().__init__(
            f"Insufficient funds: required {required}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientSharesError(OrderError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: int, available: int):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class StorageError(AppError):
    """Raised when the storage layer fails; the unit of work has been rolled back."""

    status_code = 503

    def __init__(self, message: str, code: str = "STORAGE_ERROR"):
        super().__init__(message, code=code)


class ConcurrentModificationError(StorageError):
    """Raised when another writer changed the portfolio row first."""

    status_code = 409

    def __init__(self, user_id: str):
        super().__init__(
            f"Portfolio for user {user_id} was modified concurrently",
            code="CONCURRENT_MODIFICATION",
        )
