"""Cash account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class CashAccount:
    """
    Uninvested cash of a single user.

    Created with the initial balance when the user first trades; only the
    ledger mutates it, and a reset puts it back to the initial balance.
    """

    user_id: str
    available_cash: Decimal = field(default_factory=lambda: Decimal("0"))
    updated_at: Optional[datetime] = field(default=None)
