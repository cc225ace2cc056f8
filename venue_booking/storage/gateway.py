"""Persistence gateway: remote store first, local store as fallback."""

from typing import Optional, Sequence

from venue_booking.logging import get_logger
from venue_booking.logging.audit import AuditLogger
from venue_booking.models.errors import PersistenceError
from venue_booking.models.reservation import Reservation
from venue_booking.storage.repository_base import (
    ChangeCallback,
    ReservationStore,
    Subscription,
)

logger = get_logger(__name__)


class PersistenceGateway:
    """
    Loads and saves the full reservation list.

    With a remote store configured every operation tries it first; any
    ``PersistenceError`` sends the operation to the local store and marks
    the local copy as possibly out of sync with the remote one.
    """

    def __init__(
        self,
        local: ReservationStore,
        remote: Optional[ReservationStore] = None,
    ):
        self.local = local
        self.remote = remote
        self.sync_stale = False

    async def load_all(self) -> list[Reservation]:
        """Load the list; an unreadable local store yields an empty list."""
        if self.remote is not None:
            try:
                reservations = await self.remote.load_all()
                self.sync_stale = False
                return reservations
            except PersistenceError as e:
                self.sync_stale = True
                logger.warning(
                    "persistence_fallback",
                    operation="load",
                    backend=self.remote.name,
                    error=str(e),
                )

        try:
            return await self.local.load_all()
        except PersistenceError as e:
            logger.error("persistence_load_failed", backend=self.local.name, error=str(e))
            return []

    async def save_all(self, reservations: Sequence[Reservation]) -> bool:
        """Persist the list; False when no store accepted it."""
        if self.remote is not None:
            try:
                await self.remote.save_all(reservations)
                self.sync_stale = False
                return True
            except PersistenceError as e:
                self.sync_stale = True
                logger.warning(
                    "persistence_fallback",
                    operation="save",
                    backend=self.remote.name,
                    error=str(e),
                )
                AuditLogger.log_sync_fallback(
                    remote_backend=self.remote.name,
                    local_backend=self.local.name,
                    error=str(e),
                )

        try:
            await self.local.save_all(reservations)
            return True
        except PersistenceError as e:
            logger.error(
                "persistence_save_failed",
                backend=self.local.name,
                count=len(reservations),
                error=str(e),
            )
            return False

    async def subscribe(self, on_change: ChangeCallback) -> Optional[Subscription]:
        """Subscribe to remote changes; None for local-only setups."""
        if self.remote is None:
            return None

        try:
            return await self.remote.subscribe(on_change, on_lost=self._on_feed_lost)
        except PersistenceError as e:
            self.sync_stale = True
            logger.warning("persistence_subscribe_failed", backend=self.remote.name, error=str(e))
            return None

    def _on_feed_lost(self, error: str) -> None:
        """Remote changes no longer arrive, so the local list may drift."""
        self.sync_stale = True
        logger.warning("persistence_feed_lost", backend=self.remote.name, error=error)
        AuditLogger.log_sync_fallback(
            remote_backend=self.remote.name,
            local_backend=self.local.name,
            error=error,
        )
