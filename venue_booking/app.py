"""Application startup and main entry point."""

import asyncio
from typing import Optional

from venue_booking.config import Settings, load_settings
from venue_booking.logging import get_logger, setup_logging
from venue_booking.services.catalog import Catalog
from venue_booking.services.dashboard import DashboardService
from venue_booking.services.invoice import InvoiceBuilder
from venue_booking.services.pricing import PricingEngine
from venue_booking.services.reservation_manager import ReservationManager
from venue_booking.storage.database import Database
from venue_booking.storage.gateway import PersistenceGateway
from venue_booking.storage.local_store import LocalReservationStore
from venue_booking.storage.redis_store import RedisReservationStore

logger = get_logger(__name__)


class VenueBookingApp:
    """Wired application services."""

    def __init__(
        self,
        settings: Settings,
        db: Database,
        manager: ReservationManager,
        dashboard: DashboardService,
        invoices: InvoiceBuilder,
        remote_store: Optional[RedisReservationStore] = None,
    ):
        self.settings = settings
        self.db = db
        self.manager = manager
        self.dashboard = dashboard
        self.invoices = invoices
        self.remote_store = remote_store

    async def shutdown(self) -> None:
        """Stop following remote changes and close connections."""
        try:
            await self.manager.stop()
        finally:
            try:
                if self.remote_store is not None:
                    await self.remote_store.disconnect()
            finally:
                await self.db.disconnect()
                logger.info("application_stopped")


async def create_app(settings: Optional[Settings] = None) -> VenueBookingApp:
    """
    Build and start the application.

    Connects the local store (and the remote one when configured), waits
    the start-up delay, loads the reservation list and subscribes to remote
    changes.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        environment=settings.environment,
        storage_backend=settings.storage_backend,
    )

    db = Database(settings.database_url)
    await db.connect()
    await db.create_tables()

    local_store = LocalReservationStore(db)
    remote_store = None
    if settings.uses_remote_store:
        remote_store = RedisReservationStore(settings.redis_url, key_prefix=settings.redis_key_prefix)
        await remote_store.connect()

    catalog = Catalog()
    gateway = PersistenceGateway(local_store, remote_store)
    engine = PricingEngine(catalog, settings.pricing_policy())
    manager = ReservationManager(gateway, engine, catalog)

    await asyncio.sleep(settings.startup_delay_seconds)
    await manager.start()

    logger.info("application_started", reservation_count=len(manager.list()))

    return VenueBookingApp(
        settings=settings,
        db=db,
        manager=manager,
        dashboard=DashboardService(catalog),
        invoices=InvoiceBuilder(catalog),
        remote_store=remote_store,
    )


async def main() -> None:
    """Start the services and follow remote changes until stopped."""
    app = await create_app()

    try:
        await asyncio.Event().wait()
    except (KeyboardInterrupt, SystemExit, asyncio.CancelledError):
        logger.info("application_stopping")
    finally:
        await app.shutdown()


def run() -> None:
    """Console entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
