"""Position repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Position


class PositionRepository(Protocol):
    """Interface for position data access. At most one position per (user, symbol)."""

    def get(self, user_id: str, symbol: str) -> Optional[Position]:
        """Get the open position for a symbol."""
        ...

    def list_by_user(self, user_id: str) -> list[Position]:
        """List open positions ordered by symbol."""
        ...

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        ...

    def delete(self, user_id: str, symbol: str) -> None:
        """Delete a closed position."""
        ...

    def delete_all(self, user_id: str) -> None:
        """Delete every position of a user (reset)."""
        ...
