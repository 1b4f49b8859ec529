"""Cash account repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import CashAccount


class CashAccountRepository(Protocol):
    """Interface for cash account data access."""

    def get(self, user_id: str, for_update: bool = False) -> Optional[CashAccount]:
        """
        Retrieve the cash account of a user.

        for_update asks the backend to lock the row until the unit of work ends.
        """
        ...

    def save(self, account: CashAccount) -> CashAccount:
        """Insert or update a cash account."""
        ...
