"""Reservation draft validation.

Validates a draft against an explicit field schema before saving:
- Required client and event fields (email and company name are optional)
- Free-text event type when the event type is "other"
- Five buffet picks when a buffet food service is chosen
- Guest count resolved from manual entry or slider
- Non-negative tip and deposit percentages

Every failing field is reported, in schema order.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional

from venue_booking.logging import get_logger
from venue_booking.models.reservation import ReservationDraft

logger = get_logger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _buffet_pick(category: str) -> Callable[[ReservationDraft], Any]:
    def getter(draft: ReservationDraft) -> Any:
        return getattr(draft.buffet, category) if draft.buffet else None

    return getter


def _non_negative(value: Any) -> bool:
    return value is not None and Decimal(value) >= 0


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one form field."""

    field_id: str
    label: str
    value: Callable[[ReservationDraft], Any]
    required: bool = True
    required_when: Optional[Callable[[ReservationDraft], bool]] = None
    is_valid: Optional[Callable[[Any], bool]] = None

    def applies_to(self, draft: ReservationDraft) -> bool:
        """Check if the field is required for this draft."""
        if not self.required:
            return False
        return self.required_when is None or self.required_when(draft)

    def fails(self, draft: ReservationDraft) -> bool:
        """Check if the field is missing or invalid."""
        value = self.value(draft)
        if _is_blank(value):
            return True
        return self.is_valid is not None and not self.is_valid(value)


def _field(field_id: str, label: str, **kwargs: Any) -> FieldRule:
    return FieldRule(field_id, label, lambda draft: getattr(draft, field_id), **kwargs)


def _is_other_event(draft: ReservationDraft) -> bool:
    return draft.event_type == "other"


def _is_buffet(draft: ReservationDraft) -> bool:
    return draft.is_buffet


RESERVATION_SCHEMA: tuple[FieldRule, ...] = (
    _field("client_name", "Nombre del Cliente"),
    _field("client_email", "Correo Electrónico", required=False),
    _field("client_phone", "Teléfono"),
    _field("company_name", "Nombre de la Compañía", required=False),
    _field("event_date", "Fecha del Evento"),
    _field("event_time", "Hora del Evento"),
    _field("event_type", "Tipo de Evento"),
    _field("other_event_type", "Especificar Tipo de Evento", required_when=_is_other_event),
    _field("event_duration", "Duración del Evento", is_valid=lambda v: v >= 1),
    _field("room_type", "Espacio del Evento"),
    _field("food_type", "Servicio de Comida"),
    FieldRule("buffet_rice", "Arroz (Buffet)", _buffet_pick("rice"), required_when=_is_buffet),
    FieldRule("buffet_protein1", "Proteína 1 (Buffet)", _buffet_pick("protein1"), required_when=_is_buffet),
    FieldRule("buffet_protein2", "Proteína 2 (Buffet)", _buffet_pick("protein2"), required_when=_is_buffet),
    FieldRule("buffet_side", "Acompañamiento (Buffet)", _buffet_pick("side"), required_when=_is_buffet),
    FieldRule("buffet_salad", "Ensalada (Buffet)", _buffet_pick("salad"), required_when=_is_buffet),
    FieldRule(
        "guest_count",
        "Número de Invitados",
        lambda draft: draft.resolved_guest_count,
        is_valid=lambda v: v >= 1,
    ),
    _field("table_type", "Configuración de Mesas"),
    _field("tip_percentage", "Propina", is_valid=_non_negative),
    _field("deposit_percentage", "Depósito", is_valid=_non_negative),
)

FIELD_LABELS: dict[str, str] = {rule.field_id: rule.label for rule in RESERVATION_SCHEMA}


class ValidationResult:
    """Result of draft validation."""

    def __init__(self):
        self.missing_fields: list[str] = []

    @property
    def is_valid(self) -> bool:
        """Check if validation passed."""
        return len(self.missing_fields) == 0

    def add_missing(self, field_id: str) -> None:
        """Record a missing or invalid field once."""
        if field_id not in self.missing_fields:
            self.missing_fields.append(field_id)

    @property
    def labels(self) -> list[str]:
        """User-facing names of the failing fields."""
        return [FIELD_LABELS.get(field_id, field_id) for field_id in self.missing_fields]


class ReservationValidator:
    """Validates drafts against the reservation schema."""

    def __init__(self, schema: tuple[FieldRule, ...] = RESERVATION_SCHEMA):
        self.schema = schema

    def validate(self, draft: ReservationDraft) -> ValidationResult:
        """
        Validate a draft before saving.

        Args:
            draft: Form input to check

        Returns:
            ValidationResult listing every missing or invalid field
        """
        result = ValidationResult()

        for rule in self.schema:
            if rule.applies_to(draft) and rule.fails(draft):
                result.add_missing(rule.field_id)

        if result.is_valid:
            logger.debug("reservation_validation_passed")
        else:
            logger.info(
                "reservation_validation_failed",
                missing_fields=result.missing_fields,
            )

        return result
