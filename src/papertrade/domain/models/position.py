"""Position domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Position:
    """
    Open holding of one symbol for one user.

    Invariant while quantity > 0: invested_value == avg_price * quantity.
    A position whose quantity reaches zero is deleted, never stored.
    """

    user_id: str
    symbol: str
    name: str
    quantity: int
    avg_price: Decimal
    invested_value: Decimal
    current_price: Decimal = field(default_factory=lambda: Decimal("0"))
    updated_at: Optional[datetime] = field(default=None)

    @property
    def current_value(self) -> Decimal:
        """Value at the last stored price."""
        return self.current_price * self.quantity
