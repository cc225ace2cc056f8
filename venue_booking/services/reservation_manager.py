"""Reservation lifecycle manager.

Owns the in-memory reservation list and coordinates:
- Validation and pricing snapshots on save
- Edit (destructive and non-destructive), delete and deposit toggling
- Persistence of the whole list through the gateway
- Replacement of the list by remote pushes
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from venue_booking.logging import get_logger
from venue_booking.logging.audit import AuditLogger
from venue_booking.models.errors import ReservationNotFoundError, ReservationValidationError
from venue_booking.models.reservation import (
    PricingBreakdown,
    Reservation,
    ReservationDraft,
    ReservationList,
)
from venue_booking.services.catalog import OTHER_EVENT_TYPE, Catalog
from venue_booking.services.pricing import PricingEngine
from venue_booking.services.reservation_validation import ReservationValidator, ValidationResult
from venue_booking.services.table_configuration import (
    build_table_configuration,
    format_table_selector,
)
from venue_booking.storage.gateway import PersistenceGateway
from venue_booking.storage.repository_base import Subscription

logger = get_logger(__name__)

ReservationListener = Callable[[list[Reservation]], None]

SLIDER_MIN = 10
SLIDER_MAX = 200
SLIDER_STEP = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slider_position(guest_count: int) -> int:
    """Nearest slider step for a guest count, clamped to the slider range."""
    rounded = (guest_count + SLIDER_STEP // 2) // SLIDER_STEP * SLIDER_STEP
    return min(max(rounded, SLIDER_MIN), SLIDER_MAX)


def draft_from_reservation(reservation: Reservation, catalog: Catalog) -> ReservationDraft:
    """Repopulate the booking form from a stored reservation."""
    if catalog.is_standard_event_type(reservation.event_type):
        event_type, other_event_type = reservation.event_type, ""
    else:
        event_type, other_event_type = OTHER_EVENT_TYPE, reservation.event_type

    table = reservation.table_configuration
    return ReservationDraft(
        client_name=reservation.client_name,
        client_email=reservation.client_email,
        client_phone=reservation.client_phone,
        company_name=reservation.company_name,
        event_date=reservation.event_date,
        event_time=reservation.event_time,
        event_type=event_type,
        other_event_type=other_event_type,
        event_duration=reservation.event_duration,
        room_type=reservation.room_type,
        food_type=reservation.food_type,
        buffet=reservation.buffet.model_copy() if reservation.buffet else None,
        beverages=dict(reservation.beverages),
        entremeses=dict(reservation.entremeses),
        guest_count_slider=slider_position(reservation.guest_count),
        guest_count_manual=reservation.guest_count,
        table_type=format_table_selector(table.table_shape, table.seats_per_table),
        additional_services=reservation.additional_services.model_copy(),
        tip_percentage=reservation.tip_percentage,
        deposit_percentage=reservation.deposit_percentage,
    )


class ReservationManager:
    """Single owner of the reservation list."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        engine: PricingEngine,
        catalog: Catalog,
        validator: Optional[ReservationValidator] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize reservation manager.

        Args:
            gateway: Persistence gateway for the whole list
            engine: Pricing engine used for quotes and snapshots
            catalog: Reference tables
            validator: Draft validator (defaults to the reservation schema)
            clock: Source of creation timestamps and ids
        """
        self.gateway = gateway
        self.engine = engine
        self.catalog = catalog
        self.validator = validator or ReservationValidator()
        self.clock = clock
        self._reservations: list[Reservation] = []
        self._listeners: list[ReservationListener] = []
        self._subscription: Optional[Subscription] = None
        self._last_id = 0

    @property
    def sync_stale(self) -> bool:
        """True when the last persistence call could not reach the remote store."""
        return self.gateway.sync_stale

    def new_draft(self) -> ReservationDraft:
        """Blank form with the venue's default deposit percentage."""
        return ReservationDraft(deposit_percentage=self.engine.policy.default_deposit_percentage)

    def validate(self, draft: ReservationDraft) -> ValidationResult:
        return self.validator.validate(draft)

    def quote(self, draft: ReservationDraft) -> PricingBreakdown:
        """Real-time pricing of an unvalidated draft."""
        return self.engine.quote(draft)

    def list(self) -> list[Reservation]:
        """Snapshot of the current list in insertion order."""
        return list(self._reservations)

    def get(self, reservation_id: str) -> Reservation:
        """Look up one reservation or raise ReservationNotFoundError."""
        index = self._index_of(reservation_id)
        if index is None:
            raise ReservationNotFoundError(reservation_id)
        return self._reservations[index]

    def add_listener(self, listener: ReservationListener) -> None:
        """Register a callback receiving the list after every change."""
        self._listeners.append(listener)

    async def start(self) -> None:
        """Load the persisted list and follow remote changes."""
        reservations = await self.gateway.load_all()
        self._reservations = list(reservations)
        logger.info("reservations_loaded", count=len(self._reservations))
        self._notify()

        self._subscription = await self.gateway.subscribe(self._on_remote_change)

    async def stop(self) -> None:
        """Stop following remote changes."""
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            await subscription.unsubscribe()

    async def save(self, draft: ReservationDraft) -> Reservation:
        """
        Validate, price and store a draft.

        Args:
            draft: Completed booking form; ``replaces_id`` set by
                :meth:`begin_edit` swaps out the original reservation

        Returns:
            The stored reservation

        Raises:
            ReservationValidationError: If any field is missing or invalid
        """
        result = self.validate(draft)
        if not result.is_valid:
            AuditLogger.log_validation_failed(result.missing_fields)
            raise ReservationValidationError(result.missing_fields)

        guest_count = draft.resolved_guest_count
        created_at = self.clock()
        reservation = Reservation(
            id=self._next_id(created_at),
            client_name=draft.client_name,
            client_email=draft.client_email,
            client_phone=draft.client_phone,
            company_name=draft.company_name,
            event_date=draft.event_date,
            event_time=draft.event_time,
            event_type=draft.resolved_event_type,
            event_duration=draft.event_duration,
            room_type=draft.room_type,
            food_type=draft.food_type,
            buffet=draft.buffet if draft.is_buffet else None,
            beverages=draft.beverages,
            entremeses=draft.entremeses,
            guest_count=guest_count,
            table_configuration=build_table_configuration(guest_count, draft.table_type),
            additional_services=draft.additional_services,
            tip_percentage=draft.tip_percentage,
            deposit_percentage=draft.deposit_percentage,
            deposit_paid=False,
            pricing=self.engine.quote(draft),
            created_at=created_at,
        )

        replaced_index = self._index_of(draft.replaces_id) if draft.replaces_id else None
        if replaced_index is None:
            self._reservations.append(reservation)
        else:
            self._reservations[replaced_index] = reservation

        await self._persist()

        logger.info(
            "reservation_saved",
            reservation_id=reservation.id,
            replaced_id=draft.replaces_id if replaced_index is not None else None,
            total_cost=str(reservation.pricing.total_cost),
        )
        AuditLogger.log_reservation_created(
            reservation_id=reservation.id,
            client_name=reservation.client_name,
            event_date=reservation.event_date.isoformat(),
            total_cost=reservation.pricing.total_cost,
            replaced_id=draft.replaces_id if replaced_index is not None else None,
        )
        return reservation

    async def edit(self, reservation_id: str) -> Optional[ReservationDraft]:
        """
        Remove a reservation and return it as a draft.

        The reservation is gone from the list (and the stores) as soon as
        this returns; abandoning the draft loses it.
        """
        index = self._index_of(reservation_id)
        if index is None:
            logger.debug("reservation_edit_skipped", reservation_id=reservation_id)
            return None

        reservation = self._reservations.pop(index)
        await self._persist()

        AuditLogger.log_edit_started(reservation_id, destructive=True)
        return draft_from_reservation(reservation, self.catalog)

    def begin_edit(self, reservation_id: str) -> Optional[ReservationDraft]:
        """Return a draft that replaces the reservation once saved."""
        index = self._index_of(reservation_id)
        if index is None:
            logger.debug("reservation_edit_skipped", reservation_id=reservation_id)
            return None

        draft = draft_from_reservation(self._reservations[index], self.catalog)
        AuditLogger.log_edit_started(reservation_id, destructive=False)
        return draft.model_copy(update={"replaces_id": reservation_id})

    async def delete(self, reservation_id: str) -> None:
        """Remove a reservation; unknown ids are ignored."""
        index = self._index_of(reservation_id)
        if index is None:
            logger.debug("reservation_delete_skipped", reservation_id=reservation_id)
            return

        del self._reservations[index]
        await self._persist()

        logger.info("reservation_deleted", reservation_id=reservation_id)
        AuditLogger.log_reservation_deleted(reservation_id)

    async def toggle_deposit(self, reservation_id: str) -> Optional[Reservation]:
        """Flip the deposit-paid flag; None when the id is unknown."""
        index = self._index_of(reservation_id)
        if index is None:
            logger.debug("deposit_toggle_skipped", reservation_id=reservation_id)
            return None

        current = self._reservations[index]
        updated = current.model_copy(update={"deposit_paid": not current.deposit_paid})
        self._reservations[index] = updated
        await self._persist()

        AuditLogger.log_deposit_toggled(reservation_id, updated.deposit_paid)
        return updated

    def export_json(self) -> str:
        """Full list in the persisted document shape."""
        return ReservationList.dump_json(self._reservations, by_alias=True, indent=2).decode("utf-8")

    async def _on_remote_change(self, reservations: Sequence[Reservation]) -> None:
        self._reservations = list(reservations)
        logger.info("reservations_replaced_from_remote", count=len(self._reservations))
        AuditLogger.log_sync_replaced("remote", len(self._reservations))
        self._notify()

    async def _persist(self) -> None:
        saved = await self.gateway.save_all(list(self._reservations))
        if not saved:
            logger.error("reservations_not_persisted", count=len(self._reservations))
        self._notify()

    def _notify(self) -> None:
        snapshot = self.list()
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("reservation_listener_failed", error=str(e), exc_info=True)

    def _index_of(self, reservation_id: Optional[str]) -> Optional[int]:
        for index, reservation in enumerate(self._reservations):
            if reservation.id == reservation_id:
                return index
        return None

    def _next_id(self, created_at: datetime) -> str:
        """Millisecond timestamp id, bumped past the last issued or stored one."""
        candidate = int(created_at.timestamp() * 1000)
        existing = {reservation.id for reservation in self._reservations}
        candidate = max(candidate, self._last_id + 1)
        while str(candidate) in existing:
            candidate += 1
        self._last_id = candidate
        return str(candidate)
