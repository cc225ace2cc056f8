"""Pytest configuration and shared fixtures."""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock, MagicMock

from venue_booking.models.reservation import AdditionalServices, BuffetSelection, ReservationDraft
from venue_booking.services.catalog import Catalog
from venue_booking.services.pricing import PricingEngine, PricingPolicy


@pytest.fixture
def catalog():
    """Venue catalog with the default tables."""
    return Catalog()


@pytest.fixture
def engine(catalog):
    """Pricing engine with the default policy."""
    return PricingEngine(catalog, PricingPolicy())


@pytest.fixture
def sample_draft():
    """Complete, valid booking form."""
    return ReservationDraft(
        client_name="María Rivera",
        client_email="maria@example.com",
        client_phone="787-555-0101",
        event_date=date(2030, 6, 14),
        event_time="18:30",
        event_type="birthdays",
        event_duration=4,
        room_type="grand-hall",
        food_type="individual-plates",
        beverages={"medalla": 10, "mimosa": True},
        entremeses={"asopao": True},
        guest_count_slider=50,
        table_type="round-8",
        additional_services=AdditionalServices(decorations=True, audio_visual=True),
        tip_percentage=Decimal("10"),
        deposit_percentage=Decimal("20"),
    )


@pytest.fixture
def buffet_draft(sample_draft):
    """Valid booking form with a complete buffet."""
    return sample_draft.model_copy(
        update={
            "food_type": "buffet-22.95",
            "buffet": BuffetSelection(
                rice="gandules",
                protein1="pernil-asado",
                protein2="pechuga-ajillo",
                side="papas-leonesa",
                salad="caesar",
                bread=True,
            ),
        }
    )


@pytest.fixture
def mock_gateway():
    """Gateway double accepting every save."""
    gateway = MagicMock()
    gateway.load_all = AsyncMock(return_value=[])
    gateway.save_all = AsyncMock(return_value=True)
    gateway.subscribe = AsyncMock(return_value=None)
    gateway.sync_stale = False
    gateway.remote = None
    return gateway


@pytest.fixture
def mock_redis():
    """Mock async Redis client fixture."""
    client = MagicMock()
    client.hgetall = AsyncMock(return_value={})
    client.aclose = AsyncMock()
    return client
