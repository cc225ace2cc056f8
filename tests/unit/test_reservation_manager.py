"""Unit tests for the reservation lifecycle manager.

The gateway is mocked so only in-memory list handling, identity,
validation and persistence calls are exercised.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from venue_booking.models.errors import ReservationNotFoundError, ReservationValidationError
from venue_booking.models.reservation import BuffetSelection, ReservationDraft, ReservationList
from venue_booking.services.reservation_manager import (
    ReservationManager,
    draft_from_reservation,
    slider_position,
)

FIXED_NOW = datetime(2030, 1, 2, 15, 0, tzinfo=timezone.utc)
FIXED_ID = str(int(FIXED_NOW.timestamp() * 1000))


@pytest.fixture
def manager(mock_gateway, engine, catalog):
    """Manager with a fixed clock."""
    return ReservationManager(mock_gateway, engine, catalog, clock=lambda: FIXED_NOW)


@pytest.mark.asyncio
async def test_save_valid_draft(manager, mock_gateway, sample_draft):
    """Test save assigns identity, snapshots pricing and persists."""
    reservation = await manager.save(sample_draft)

    assert reservation.id == FIXED_ID
    assert reservation.deposit_paid is False
    assert reservation.guest_count == 50
    assert reservation.created_at == FIXED_NOW
    assert reservation.table_configuration.table_count == 7
    assert reservation.pricing == manager.quote(sample_draft)
    assert manager.list() == [reservation]
    mock_gateway.save_all.assert_awaited_once_with([reservation])


@pytest.mark.asyncio
async def test_save_invalid_draft_raises(manager, mock_gateway):
    """Test invalid drafts are rejected with every missing field."""
    with pytest.raises(ReservationValidationError) as exc_info:
        await manager.save(ReservationDraft(client_name="Ana"))

    assert "client_phone" in exc_info.value.missing_fields
    assert "client_name" not in exc_info.value.missing_fields
    assert manager.list() == []
    mock_gateway.save_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_ids_are_unique_with_same_clock(manager, sample_draft):
    """Test ids bump past a colliding timestamp."""
    first = await manager.save(sample_draft)
    second = await manager.save(sample_draft)

    assert first.id == FIXED_ID
    assert second.id == str(int(FIXED_ID) + 1)


@pytest.mark.asyncio
async def test_save_other_event_type(manager, sample_draft):
    """Test free-text event type is stored in place of other."""
    draft = sample_draft.model_copy(update={"event_type": "other", "other_event_type": "Reunión"})

    reservation = await manager.save(draft)

    assert reservation.event_type == "Reunión"


@pytest.mark.asyncio
async def test_save_drops_buffet_for_plated_food(manager, sample_draft):
    """Test buffet picks only kept for buffet food."""
    draft = sample_draft.model_copy(update={"buffet": BuffetSelection(rice="gandules")})

    reservation = await manager.save(draft)

    assert reservation.buffet is None


@pytest.mark.asyncio
async def test_save_buffet(manager, buffet_draft):
    """Test buffet picks are stored."""
    reservation = await manager.save(buffet_draft)

    assert reservation.buffet.protein1 == "pernil-asado"
    assert reservation.pricing.food_cost == Decimal("22.95") * 50


@pytest.mark.asyncio
async def test_edit_removes_reservation(manager, mock_gateway, sample_draft):
    """Test edit deletes immediately and returns the populated draft."""
    reservation = await manager.save(sample_draft)

    draft = await manager.edit(reservation.id)

    assert manager.list() == []
    assert mock_gateway.save_all.await_count == 2
    mock_gateway.save_all.assert_awaited_with([])
    assert draft.client_name == sample_draft.client_name
    assert draft.table_type == "round-8"
    assert draft.guest_count_manual == 50
    assert draft.guest_count_slider == 50
    assert draft.replaces_id is None


@pytest.mark.asyncio
async def test_edit_then_abandon_loses_reservation(manager, sample_draft):
    """Test abandoning a destructive edit leaves the list without it."""
    reservation = await manager.save(sample_draft)

    await manager.edit(reservation.id)

    with pytest.raises(ReservationNotFoundError):
        manager.get(reservation.id)


@pytest.mark.asyncio
async def test_edit_unknown_id(manager, mock_gateway):
    """Test edit of a stale id is a no-op."""
    assert await manager.edit("missing") is None
    mock_gateway.save_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_edit_save_produces_new_identity(manager, sample_draft):
    """Test re-saving an edited draft creates a fresh reservation."""
    original = await manager.save(sample_draft)
    draft = await manager.edit(original.id)

    resaved = await manager.save(draft.model_copy(update={"client_name": "María R. Rivera"}))

    assert resaved.id != original.id
    assert [r.id for r in manager.list()] == [resaved.id]


@pytest.mark.asyncio
async def test_begin_edit_keeps_reservation(manager, mock_gateway, sample_draft):
    """Test non-destructive edit leaves the list untouched."""
    reservation = await manager.save(sample_draft)

    draft = manager.begin_edit(reservation.id)

    assert draft.replaces_id == reservation.id
    assert manager.list() == [reservation]
    assert mock_gateway.save_all.await_count == 1


@pytest.mark.asyncio
async def test_begin_edit_save_replaces_in_place(manager, sample_draft):
    """Test saving a non-destructive edit swaps the reservation at its position."""
    first = await manager.save(sample_draft)
    second = await manager.save(sample_draft.model_copy(update={"client_name": "José"}))

    draft = manager.begin_edit(first.id)
    updated = await manager.save(draft.model_copy(update={"guest_count_manual": 80}))

    assert [r.id for r in manager.list()] == [updated.id, second.id]
    assert updated.guest_count == 80
    assert updated.table_configuration.table_count == 10


@pytest.mark.asyncio
async def test_begin_edit_unknown_id(manager):
    """Test begin_edit of a stale id."""
    assert manager.begin_edit("missing") is None


@pytest.mark.asyncio
async def test_delete_is_idempotent(manager, mock_gateway, sample_draft):
    """Test repeated deletes persist once."""
    reservation = await manager.save(sample_draft)

    await manager.delete(reservation.id)
    await manager.delete(reservation.id)

    assert manager.list() == []
    assert mock_gateway.save_all.await_count == 2


@pytest.mark.asyncio
async def test_toggle_deposit(manager, sample_draft):
    """Test deposit flag flips and balance follows."""
    reservation = await manager.save(sample_draft)

    toggled = await manager.toggle_deposit(reservation.id)

    assert toggled.deposit_paid is True
    assert toggled.balance == reservation.pricing.total_cost - reservation.pricing.deposit_amount
    assert manager.get(reservation.id).deposit_paid is True
    # Pricing snapshot is untouched
    assert toggled.pricing == reservation.pricing

    toggled_back = await manager.toggle_deposit(reservation.id)
    assert toggled_back.deposit_paid is False


@pytest.mark.asyncio
async def test_toggle_deposit_unknown_id(manager, mock_gateway):
    """Test toggle of a stale id is a no-op."""
    assert await manager.toggle_deposit("missing") is None
    mock_gateway.save_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_start_loads_and_subscribes(manager, mock_gateway, engine, sample_draft):
    """Test start loads the persisted list and subscribes."""
    stored = await ReservationManager(
        MagicMock(save_all=AsyncMock(return_value=True)), engine, manager.catalog
    ).save(sample_draft)
    mock_gateway.load_all.return_value = [stored]

    await manager.start()

    assert manager.list() == [stored]
    mock_gateway.subscribe.assert_awaited_once()


@pytest.mark.asyncio
async def test_remote_change_replaces_list(manager, mock_gateway, sample_draft):
    """Test a remote push replaces the whole list and notifies listeners."""
    local = await manager.save(sample_draft)
    received = []
    manager.add_listener(received.append)
    await manager.start()
    on_change = mock_gateway.subscribe.await_args.args[0]

    remote = local.model_copy(update={"id": "999", "client_name": "Remote"})
    await on_change([remote])

    assert manager.list() == [remote]
    assert received[-1] == [remote]


@pytest.mark.asyncio
async def test_stop_unsubscribes(manager, mock_gateway):
    """Test stop releases the subscription."""
    subscription = MagicMock()
    subscription.unsubscribe = AsyncMock()
    mock_gateway.subscribe.return_value = subscription

    await manager.start()
    await manager.stop()

    subscription.unsubscribe.assert_awaited_once()


@pytest.mark.asyncio
async def test_listener_failure_does_not_break_save(manager, sample_draft):
    """Test a failing listener is logged and skipped."""
    manager.add_listener(MagicMock(side_effect=RuntimeError("boom")))

    reservation = await manager.save(sample_draft)

    assert manager.list() == [reservation]


@pytest.mark.asyncio
async def test_save_survives_persistence_failure(manager, mock_gateway, sample_draft):
    """Test the list keeps the reservation when no store accepts it."""
    mock_gateway.save_all.return_value = False

    reservation = await manager.save(sample_draft)

    assert manager.list() == [reservation]


@pytest.mark.asyncio
async def test_export_json(manager, sample_draft):
    """Test backup export uses the persisted shape."""
    reservation = await manager.save(sample_draft)

    exported = manager.export_json()

    assert '"clientName": "María Rivera"' in exported
    assert ReservationList.validate_json(exported) == [reservation]


def test_sync_stale_from_gateway(manager, mock_gateway):
    """Test stale flag mirrors the gateway."""
    assert manager.sync_stale is False
    mock_gateway.sync_stale = True
    assert manager.sync_stale is True


def test_new_draft_uses_policy_deposit(manager):
    """Test blank form defaults."""
    assert manager.new_draft().deposit_percentage == Decimal("20")


@pytest.mark.parametrize(
    "guests,expected",
    [(3, 10), (44, 40), (45, 50), (150, 150), (500, 200)],
)
def test_slider_position(guests, expected):
    """Test slider snaps to steps of ten within range."""
    assert slider_position(guests) == expected


@pytest.mark.asyncio
async def test_draft_from_custom_event_type(manager, catalog, sample_draft):
    """Test free-text event types reopen as other."""
    reservation = await manager.save(
        sample_draft.model_copy(update={"event_type": "other", "other_event_type": "Reunión"})
    )

    draft = draft_from_reservation(reservation, catalog)

    assert draft.event_type == "other"
    assert draft.other_event_type == "Reunión"
    assert manager.validate(draft).is_valid
