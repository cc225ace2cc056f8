"""Reservation store interface."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, Sequence

from venue_booking.models.reservation import Reservation

ChangeCallback = Callable[[list[Reservation]], Awaitable[None]]
LostCallback = Callable[[str], None]


class Subscription(ABC):
    """Handle for a live change feed."""

    @abstractmethod
    async def unsubscribe(self) -> None:
        """Stop receiving change notifications."""
        pass


class ReservationStore(ABC):
    """Durable mirror of the full reservation list."""

    name: str = "store"

    @abstractmethod
    async def load_all(self) -> list[Reservation]:
        """Load every stored reservation."""
        pass

    @abstractmethod
    async def save_all(self, reservations: Sequence[Reservation]) -> None:
        """Replace the stored collection with the given list."""
        pass

    async def subscribe(
        self,
        on_change: ChangeCallback,
        on_lost: Optional[LostCallback] = None,
    ) -> Optional[Subscription]:
        """
        Watch for external changes; stores without a feed return None.

        ``on_lost`` is called with the error when the feed dies.
        """
        return None
