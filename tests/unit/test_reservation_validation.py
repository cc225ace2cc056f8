"""Unit tests for reservation draft validation."""

from decimal import Decimal

from venue_booking.models.reservation import BuffetSelection, ReservationDraft
from venue_booking.services.reservation_validation import ReservationValidator


def test_valid_draft(sample_draft):
    """Test complete draft passes."""
    result = ReservationValidator().validate(sample_draft)

    assert result.is_valid
    assert result.missing_fields == []


def test_empty_draft_reports_every_required_field():
    """Test all failures reported together in form order."""
    result = ReservationValidator().validate(ReservationDraft())

    assert not result.is_valid
    assert result.missing_fields == [
        "client_name",
        "client_phone",
        "event_date",
        "event_time",
        "event_type",
        "event_duration",
        "room_type",
        "food_type",
        "guest_count",
        "table_type",
    ]


def test_email_and_company_are_optional(sample_draft):
    """Test optional contact fields."""
    draft = sample_draft.model_copy(update={"client_email": "", "company_name": ""})

    assert ReservationValidator().validate(draft).is_valid


def test_blank_strings_count_as_missing(sample_draft):
    """Test whitespace-only values."""
    draft = sample_draft.model_copy(update={"client_name": "   "})

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["client_name"]


def test_other_event_type_requires_description(sample_draft):
    """Test free-text event type."""
    draft = sample_draft.model_copy(update={"event_type": "other", "other_event_type": ""})

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["other_event_type"]

    described = draft.model_copy(update={"other_event_type": "Reunión familiar"})
    assert ReservationValidator().validate(described).is_valid


def test_buffet_requires_all_picks(sample_draft):
    """Test buffet selections required for buffet food."""
    draft = sample_draft.model_copy(
        update={
            "food_type": "buffet-26.95",
            "buffet": BuffetSelection(rice="gandules", protein1="pernil-asado"),
        }
    )

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["buffet_protein2", "buffet_side", "buffet_salad"]


def test_buffet_without_selection(sample_draft):
    """Test buffet food with no picks at all."""
    draft = sample_draft.model_copy(update={"food_type": "buffet-22.95", "buffet": None})

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == [
        "buffet_rice",
        "buffet_protein1",
        "buffet_protein2",
        "buffet_side",
        "buffet_salad",
    ]


def test_buffet_picks_ignored_for_other_food(sample_draft):
    """Test buffet fields only apply to buffets."""
    draft = sample_draft.model_copy(update={"buffet": BuffetSelection()})

    assert ReservationValidator().validate(draft).is_valid


def test_manual_guest_count_wins(sample_draft):
    """Test guest count resolution."""
    draft = sample_draft.model_copy(update={"guest_count_slider": None, "guest_count_manual": 35})

    assert draft.resolved_guest_count == 35
    assert ReservationValidator().validate(draft).is_valid


def test_zero_guests_invalid(sample_draft):
    """Test guest count must be positive."""
    draft = sample_draft.model_copy(update={"guest_count_slider": 0, "guest_count_manual": None})

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["guest_count"]


def test_negative_percentages_invalid(sample_draft):
    """Test tip and deposit must not be negative."""
    draft = sample_draft.model_copy(
        update={"tip_percentage": Decimal("-1"), "deposit_percentage": Decimal("-20")}
    )

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["tip_percentage", "deposit_percentage"]


def test_zero_duration_invalid(sample_draft):
    """Test event duration of at least one hour."""
    draft = sample_draft.model_copy(update={"event_duration": 0})

    result = ReservationValidator().validate(draft)

    assert result.missing_fields == ["event_duration"]


def test_labels(sample_draft):
    """Test user-facing labels of failing fields."""
    draft = sample_draft.model_copy(update={"client_phone": "", "table_type": ""})

    result = ReservationValidator().validate(draft)

    assert result.labels == ["Teléfono", "Configuración de Mesas"]
