"""Local reservation store on a SQL key-value table."""

from typing import Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from venue_booking.logging import get_logger
from venue_booking.models.errors import PersistenceError
from venue_booking.models.reservation import Reservation, ReservationList
from venue_booking.storage.database import Database
from venue_booking.storage.db_models import KeyValueTable
from venue_booking.storage.repository_base import ReservationStore

logger = get_logger(__name__)

RESERVATIONS_KEY = "venueReservations"


class LocalReservationStore(ReservationStore):
    """Stores the whole reservation list as one JSON document."""

    name = "local"

    def __init__(self, db: Database, key: str = RESERVATIONS_KEY):
        """Initialize store with a connected database."""
        self.db = db
        self.key = key

    async def load_all(self) -> list[Reservation]:
        """Load the stored list, empty when nothing was saved yet."""
        try:
            async with self.db.session() as session:
                row = await session.get(KeyValueTable, self.key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.error("local_load_failed", key=self.key, error=str(e))
            raise PersistenceError(self.name, "load", str(e)) from e

        if not raw:
            return []

        try:
            reservations = ReservationList.validate_json(raw)
        except ValidationError as e:
            logger.error("local_document_invalid", key=self.key, error_count=e.error_count())
            raise PersistenceError(self.name, "load", "stored document is invalid") from e

        logger.debug("local_reservations_loaded", count=len(reservations))
        return reservations

    async def save_all(self, reservations: Sequence[Reservation]) -> None:
        """Overwrite the stored document with the given list."""
        payload = ReservationList.dump_json(list(reservations), by_alias=True).decode("utf-8")

        try:
            async with self.db.session() as session:
                row = await session.get(KeyValueTable, self.key)
                if row is None:
                    session.add(KeyValueTable(key=self.key, value=payload))
                else:
                    row.value = payload
        except SQLAlchemyError as e:
            logger.error("local_save_failed", key=self.key, error=str(e))
            raise PersistenceError(self.name, "save", str(e)) from e

        logger.debug("local_reservations_saved", count=len(reservations))
