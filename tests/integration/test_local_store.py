"""Integration tests for the SQLite-backed local reservation store."""

import pytest
from sqlalchemy import text

from venue_booking.models.errors import PersistenceError
from venue_booking.models.reservation import Reservation
from venue_booking.storage.database import Database
from venue_booking.storage.local_store import RESERVATIONS_KEY, LocalReservationStore


@pytest.fixture
async def db(tmp_path):
    """Connected database with tables in a temporary file."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'venue.db'}")
    await database.connect()
    await database.create_tables()
    yield database
    await database.disconnect()


@pytest.fixture
def sample_reservation(engine, sample_draft):
    return Reservation(
        id="1700000000000",
        client_name=sample_draft.client_name,
        client_phone=sample_draft.client_phone,
        event_date=sample_draft.event_date,
        event_time=sample_draft.event_time,
        event_type=sample_draft.event_type,
        event_duration=sample_draft.event_duration,
        room_type=sample_draft.room_type,
        food_type=sample_draft.food_type,
        beverages=sample_draft.beverages,
        entremeses=sample_draft.entremeses,
        guest_count=50,
        pricing=engine.quote(sample_draft),
    )


@pytest.mark.asyncio
async def test_database_connection(db):
    """Test database connection can be established."""
    async with db.session() as session:
        result = await session.execute(text("SELECT 1"))
        assert result.scalar() == 1


@pytest.mark.asyncio
async def test_empty_store_loads_empty_list(db):
    """Test nothing saved yet."""
    assert await LocalReservationStore(db).load_all() == []


@pytest.mark.asyncio
async def test_save_and_load(db, sample_reservation):
    """Test the list survives a save and reload."""
    store = LocalReservationStore(db)

    await store.save_all([sample_reservation])

    assert await store.load_all() == [sample_reservation]


@pytest.mark.asyncio
async def test_save_overwrites_document(db, sample_reservation):
    """Test each save replaces the whole list."""
    store = LocalReservationStore(db)
    other = sample_reservation.model_copy(update={"id": "2"})

    await store.save_all([sample_reservation, other])
    await store.save_all([other])

    assert [r.id for r in await store.load_all()] == ["2"]


@pytest.mark.asyncio
async def test_document_stored_under_key(db, sample_reservation):
    """Test the list is one camelCase JSON document under the reservations key."""
    await LocalReservationStore(db).save_all([sample_reservation])

    async with db.session() as session:
        result = await session.execute(
            text("SELECT value FROM kv_store WHERE key = :key"), {"key": RESERVATIONS_KEY}
        )
        document = result.scalar()

    assert document.startswith("[")
    assert '"clientName":"María Rivera"' in document


@pytest.mark.asyncio
async def test_corrupt_document_raises(db):
    """Test an unreadable document is reported as a persistence error."""
    async with db.session() as session:
        await session.execute(
            text("INSERT INTO kv_store (key, value, updated_at) VALUES (:key, :value, CURRENT_TIMESTAMP)"),
            {"key": RESERVATIONS_KEY, "value": "not json"},
        )

    with pytest.raises(PersistenceError) as exc_info:
        await LocalReservationStore(db).load_all()

    assert exc_info.value.backend == "local"


@pytest.mark.asyncio
async def test_missing_table_raises(tmp_path):
    """Test SQL failures are wrapped."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    await database.connect()

    try:
        with pytest.raises(PersistenceError):
            await LocalReservationStore(database).load_all()
    finally:
        await database.disconnect()
