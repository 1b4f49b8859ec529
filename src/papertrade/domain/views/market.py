"""Market data view models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Quote:
    """Market quote data for a symbol."""

    symbol: str
    name: str
    last_price: Decimal
    prev_close: Decimal
    as_of: datetime
    sector: str = ""

    @property
    def change(self) -> Decimal:
        return self.last_price - self.prev_close

    @property
    def change_percent(self) -> Decimal:
        if self.prev_close == 0:
            return Decimal("0")
        return (self.change / self.prev_close * 100).quantize(Decimal("0.01"))
