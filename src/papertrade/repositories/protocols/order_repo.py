"""Order repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Order


class OrderRepository(Protocol):
    """Interface for the append-only order log."""

    def add(self, order: Order) -> Order:
        """Append an executed order."""
        ...

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Order]:
        """List orders newest first."""
        ...

    def delete_all(self, user_id: str) -> None:
        """Delete every order of a user (reset)."""
        ...
