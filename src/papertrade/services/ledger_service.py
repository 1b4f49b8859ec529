"""Ledger service: order execution against cash, positions and the order log."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from papertrade.core.timezone import now_market
from papertrade.core.exceptions import (
    ValidationError,
    NotFoundError,
    OrderError,
    InvalidQuantityError,
    InvalidLimitPriceError,
    MarketPriceUnavailableError,
    InsufficientFundsError,
    InsufficientSharesError,
)
from papertrade.domain.models import (
    CashAccount,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
    Position,
)
from papertrade.domain.views import (
    LedgerSnapshot,
    OrderConfirmation,
    OrderPreview,
    OrderRequest,
)
from papertrade.repositories.protocols import LedgerStore, UnitOfWork
from papertrade.services.brokerage import (
    BROKERAGE_RATE,
    MIN_BROKERAGE,
    INITIAL_CASH,
    calculate_brokerage,
)

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service for executing orders against a user's ledger.

    Every order is validated, priced and applied inside a single unit of
    work: the position change, cash change and order record are committed
    together or not at all. Rejections raise an OrderError subclass and
    leave the ledger untouched.

    The ledger never looks up prices. MARKET orders carry the price the
    caller resolved from the feed; LIMIT orders carry their limit price.
    """

    def __init__(
        self,
        store: LedgerStore,
        initial_cash: Decimal = INITIAL_CASH,
        brokerage_rate: Decimal = BROKERAGE_RATE,
        min_brokerage: Decimal = MIN_BROKERAGE,
        clock: Callable[[], datetime] = now_market,
    ):
        self._store = store
        self._initial_cash = Decimal(initial_cash)
        self._brokerage_rate = Decimal(brokerage_rate)
        self._min_brokerage = Decimal(min_brokerage)
        self._clock = clock

    @property
    def initial_cash(self) -> Decimal:
        return self._initial_cash

    def brokerage(self, amount: Decimal) -> Decimal:
        """Brokerage for a gross amount at this ledger's rates."""
        return calculate_brokerage(amount, self._brokerage_rate, self._min_brokerage)

    # -- Accounts -----------------------------------------------------------

    def open_account(self, user_id: str) -> CashAccount:
        """Create the user's cash account with the initial balance if it does not exist."""
        with self._store.unit_of_work(user_id) as uow:
            return self._ensure_account(uow, user_id)

    def get_cash(self, user_id: str) -> Decimal:
        """Available cash; users who never traded report the initial balance."""
        with self._store.unit_of_work(user_id) as uow:
            return self._read_account(uow, user_id).available_cash

    # -- Orders -------------------------------------------------------------

    def place_order(self, user_id: str, request: OrderRequest) -> OrderConfirmation:
        """
        Validate and execute an order.

        Validation runs in order and the first failure wins:
        quantity, then limit price (LIMIT) or market price (MARKET),
        then funds (BUY) or holdings (SELL).

        Raises:
            InvalidQuantityError, InvalidLimitPriceError,
            MarketPriceUnavailableError, InsufficientFundsError,
            InsufficientSharesError: order rejected, nothing changed.
            StorageError: the store failed; nothing changed.
        """
        try:
            symbol, execution_price = self._validate(request)
            gross = execution_price * request.quantity
            fee = self.brokerage(gross)

            with self._store.unit_of_work(user_id) as uow:
                account = self._ensure_account(uow, user_id, for_update=True)
                if request.side == OrderSide.BUY:
                    order = self._apply_buy(uow, account, request, symbol, execution_price, gross, fee)
                else:
                    order = self._apply_sell(uow, account, request, symbol, execution_price, gross, fee)
        except OrderError as e:
            logger.info("Order rejected for user %s: %s", user_id, e.message)
            raise

        logger.info(
            "Executed %s %d %s @ %s for user %s (brokerage %s, total %s)",
            order.side.value,
            order.quantity,
            order.symbol,
            order.price,
            user_id,
            order.brokerage,
            order.total_amount,
        )
        return OrderConfirmation(
            order_id=order.order_id,
            symbol=order.symbol,
            side=order.side,
            quantity=order.quantity,
            executed_price=order.price,
            brokerage=order.brokerage,
            total_amount=order.total_amount,
            status=order.status,
        )

    def preview_order(self, user_id: str, request: OrderRequest) -> OrderPreview:
        """Estimate an order's cost without changing the ledger."""
        symbol, execution_price = self._validate(request)
        gross = execution_price * request.quantity
        fee = self.brokerage(gross)

        with self._store.unit_of_work(user_id) as uow:
            cash = self._read_account(uow, user_id).available_cash
            position = uow.positions.get(user_id, symbol)
        held = position.quantity if position else 0

        if request.side == OrderSide.BUY:
            total = gross + fee
            sufficient = total <= cash
        else:
            total = gross - fee
            sufficient = held >= request.quantity and cash + total >= 0

        return OrderPreview(
            symbol=symbol,
            side=request.side,
            quantity=request.quantity,
            execution_price=execution_price,
            gross_amount=gross,
            brokerage=fee,
            total_amount=total,
            available_cash=cash,
            available_quantity=held,
            sufficient=sufficient,
        )

    def order_history(self, user_id: str, limit: Optional[int] = None) -> list[Order]:
        """Executed orders, newest first."""
        if limit is not None and limit < 1:
            raise ValidationError("limit must be at least 1")
        with self._store.unit_of_work(user_id) as uow:
            return uow.orders.list_by_user(user_id, limit=limit)

    # -- Positions ----------------------------------------------------------

    def get_position(self, user_id: str, symbol: str) -> Position:
        """Get the open position for a symbol."""
        symbol = symbol.strip().upper()
        with self._store.unit_of_work(user_id) as uow:
            position = uow.positions.get(user_id, symbol)
        if position is None:
            raise NotFoundError("Position", symbol)
        return position

    def list_positions(self, user_id: str) -> list[Position]:
        """Open positions ordered by symbol."""
        with self._store.unit_of_work(user_id) as uow:
            return uow.positions.list_by_user(user_id)

    def snapshot(self, user_id: str, order_limit: Optional[int] = None) -> LedgerSnapshot:
        """Cash, positions and recent orders read together."""
        with self._store.unit_of_work(user_id) as uow:
            return LedgerSnapshot(
                account=self._read_account(uow, user_id),
                positions=uow.positions.list_by_user(user_id),
                orders=uow.orders.list_by_user(user_id, limit=order_limit),
            )

    def refresh_prices(self, user_id: str, prices: dict[str, Decimal]) -> list[Position]:
        """
        Overwrite stored current prices with fresh quotes.

        Symbols missing from prices, or priced at zero or below, keep their
        last stored price.
        """
        now = self._clock()
        with self._store.unit_of_work(user_id) as uow:
            positions = uow.positions.list_by_user(user_id)
            for position in positions:
                price = prices.get(position.symbol)
                if price is None or price <= 0:
                    continue
                position.current_price = Decimal(price)
                position.updated_at = now
                uow.positions.save(position)
        return positions

    def reset_portfolio(self, user_id: str) -> CashAccount:
        """
        Clear all positions and orders and restore the initial cash balance.

        Idempotent.
        """
        with self._store.unit_of_work(user_id) as uow:
            uow.positions.delete_all(user_id)
            uow.orders.delete_all(user_id)
            account = self._ensure_account(uow, user_id, for_update=True)
            account.available_cash = self._initial_cash
            account.updated_at = self._clock()
            account = uow.cash.save(account)
        logger.info("Portfolio reset for user %s", user_id)
        return account

    # -- Internals ----------------------------------------------------------

    def _validate(self, request: OrderRequest) -> tuple[str, Decimal]:
        """Check the request and return (symbol, execution price)."""
        quantity = request.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError(quantity)

        symbol = (request.symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Order requires a symbol")

        if request.order_type == OrderType.LIMIT:
            limit_price = _to_decimal(request.limit_price)
            if limit_price is None or limit_price <= 0:
                raise InvalidLimitPriceError(request.limit_price)
            return symbol, limit_price

        market_price = _to_decimal(request.market_price)
        if market_price is None or market_price <= 0:
            raise MarketPriceUnavailableError(symbol)
        return symbol, market_price

    def _apply_buy(
        self,
        uow: UnitOfWork,
        account: CashAccount,
        request: OrderRequest,
        symbol: str,
        price: Decimal,
        gross: Decimal,
        fee: Decimal,
    ) -> Order:
        user_id = account.user_id
        total_cost = gross + fee
        if total_cost > account.available_cash:
            raise InsufficientFundsError(str(total_cost), str(account.available_cash))

        now = self._clock()
        position = uow.positions.get(user_id, symbol)
        if position:
            position.quantity += request.quantity
            position.invested_value += gross
            position.avg_price = position.invested_value / position.quantity
        else:
            position = Position(
                user_id=user_id,
                symbol=symbol,
                name=request.name or symbol,
                quantity=request.quantity,
                avg_price=price,
                invested_value=gross,
            )
        position.current_price = self._mark_price(request, price)
        position.updated_at = now
        uow.positions.save(position)

        account.available_cash -= total_cost
        account.updated_at = now
        uow.cash.save(account)

        return uow.orders.add(
            self._new_order(user_id, request, symbol, position.name, price, fee, total_cost, now)
        )

    def _apply_sell(
        self,
        uow: UnitOfWork,
        account: CashAccount,
        request: OrderRequest,
        symbol: str,
        price: Decimal,
        gross: Decimal,
        fee: Decimal,
    ) -> Order:
        user_id = account.user_id
        position = uow.positions.get(user_id, symbol)
        held = position.quantity if position else 0
        if position is None or held < request.quantity:
            raise InsufficientSharesError(symbol, request.quantity, held)

        proceeds = gross - fee
        if account.available_cash + proceeds < 0:
            raise InsufficientFundsError(str(-proceeds), str(account.available_cash))

        # Proportional reduction keeps invested_value == avg_price * quantity
        if request.quantity == position.quantity:
            sold_invested = position.invested_value
        else:
            sold_invested = position.invested_value * request.quantity / position.quantity
        realized_pnl = gross - sold_invested - fee

        now = self._clock()
        remaining = position.quantity - request.quantity
        if remaining == 0:
            uow.positions.delete(user_id, symbol)
        else:
            position.quantity = remaining
            position.invested_value -= sold_invested
            position.current_price = self._mark_price(request, price)
            position.updated_at = now
            uow.positions.save(position)

        account.available_cash += proceeds
        account.updated_at = now
        uow.cash.save(account)

        return uow.orders.add(
            self._new_order(
                user_id,
                request,
                symbol,
                request.name or position.name,
                price,
                fee,
                proceeds,
                now,
                realized_pnl=realized_pnl,
            )
        )

    def _new_order(
        self,
        user_id: str,
        request: OrderRequest,
        symbol: str,
        name: str,
        price: Decimal,
        fee: Decimal,
        total_amount: Decimal,
        timestamp: datetime,
        realized_pnl: Optional[Decimal] = None,
    ) -> Order:
        return Order(
            order_id=str(uuid.uuid4()),
            user_id=user_id,
            symbol=symbol,
            name=name,
            side=request.side,
            order_type=request.order_type,
            quantity=request.quantity,
            price=price,
            status=OrderStatus.EXECUTED,
            timestamp=timestamp,
            brokerage=fee,
            total_amount=total_amount,
            realized_pnl=realized_pnl,
        )

    @staticmethod
    def _mark_price(request: OrderRequest, execution_price: Decimal) -> Decimal:
        """Last known price for the position: the feed price if the caller had one."""
        market_price = _to_decimal(request.market_price)
        if market_price is not None and market_price > 0:
            return market_price
        return execution_price

    def _ensure_account(
        self,
        uow: UnitOfWork,
        user_id: str,
        for_update: bool = False,
    ) -> CashAccount:
        account = uow.cash.get(user_id, for_update=for_update)
        if account is None:
            account = uow.cash.save(
                CashAccount(
                    user_id=user_id,
                    available_cash=self._initial_cash,
                    updated_at=self._clock(),
                )
            )
            logger.info("Opened account for user %s with %s cash", user_id, self._initial_cash)
        return account

    def _read_account(self, uow: UnitOfWork, user_id: str) -> CashAccount:
        """Stored account, or an unsaved one at the initial balance."""
        account = uow.cash.get(user_id)
        if account is None:
            return CashAccount(user_id=user_id, available_cash=self._initial_cash)
        return account


def _to_decimal(value: object) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None
