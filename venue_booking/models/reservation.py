"""Reservation domain model.

Persisted records use the camelCase field names of the booking form
(``clientName``, ``depositPaid``, ``pricing.totalCost``) so local and
remote stores share one document shape.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from venue_booking.models.catalog import is_buffet

SelectionMap = dict[str, Union[bool, int]]


def normalize_selection(selection: Optional[dict]) -> SelectionMap:
    """Drop unselected entries: zero or negative quantities and false flags."""
    normalized: SelectionMap = {}
    for item_id, value in (selection or {}).items():
        if value is True:
            normalized[item_id] = True
        elif isinstance(value, int) and not isinstance(value, bool) and value > 0:
            normalized[item_id] = value
    return normalized


class RecordModel(BaseModel):
    """Base for models stored in the reservation document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenRecordModel(RecordModel):
    """Immutable record model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TableShape(str, Enum):
    """Supported table shapes."""

    ROUND = "round"
    RECTANGULAR = "rectangular"


class BuffetSelection(RecordModel):
    """Five-category buffet customization with two optional extras."""

    rice: str = ""
    protein1: str = ""
    protein2: str = ""
    side: str = ""
    salad: str = ""
    bread: bool = Field(default=False, alias="panecillos")
    water_soda: bool = Field(default=False, alias="aguaRefresco")

    @field_validator("rice", "protein1", "protein2", "side", "salad", mode="before")
    @classmethod
    def none_as_empty(cls, v: Optional[str]) -> str:
        """Stored records use null for an unset pick."""
        return v or ""


class AdditionalServices(RecordModel):
    """Flat-fee extras."""

    audio_visual: bool = False
    decorations: bool = False
    waitstaff: bool = False
    valet: bool = False

    def enabled(self) -> list[str]:
        """Names of the enabled services in declaration order."""
        return [name for name in type(self).model_fields if getattr(self, name)]


class TableConfiguration(RecordModel):
    """Seating layout derived from guest count and seats per table."""

    table_shape: Optional[TableShape] = Field(default=None, alias="tableType")
    seats_per_table: Optional[int] = Field(default=None, gt=0)
    table_count: int = Field(default=0, ge=0)


class LineItemKind(str, Enum):
    """Invoice line categories."""

    FOOD = "FOOD"
    BEVERAGE = "BEVERAGE"
    ENTREMESES = "ENTREMESES"
    ROOM = "ROOM"
    SERVICE = "SERVICE"


class LineItem(FrozenRecordModel):
    """One priced line of a breakdown."""

    kind: LineItemKind
    item_id: str
    description: str
    quantity: Optional[int] = None
    amount: Decimal


class TaxBreakdown(FrozenRecordModel):
    """Taxes on food and alcoholic beverages."""

    food_state_tax: Decimal = Field(alias="foodStateReducedTax")
    food_city_tax: Decimal
    alcohol_tax: Decimal = Field(alias="alcoholStateTax")
    total: Decimal = Field(alias="totalTaxes")


class TipBreakdown(FrozenRecordModel):
    """Tip computed on the pre-tax subtotal."""

    percentage: Decimal
    amount: Decimal


class PricingBreakdown(FrozenRecordModel):
    """Itemized cost of a reservation."""

    room_cost: Decimal
    food_cost: Decimal
    drink_cost: Decimal
    entremeses_cost: Decimal = Decimal("0")
    additional_cost: Decimal
    taxes: TaxBreakdown
    tip: TipBreakdown
    subtotal_before_taxes: Decimal
    total_cost: Decimal
    deposit_amount: Decimal
    deposit_percentage: Decimal
    guest_count: int
    event_duration: int
    line_items: tuple[LineItem, ...] = ()


class ReservationDraft(RecordModel):
    """Editable booking form input before validation."""

    client_name: str = ""
    client_email: str = ""
    client_phone: str = ""
    company_name: str = ""
    event_date: Optional[date] = None
    event_time: str = ""
    event_type: str = ""
    other_event_type: str = ""
    event_duration: Optional[int] = None
    room_type: str = ""
    food_type: str = ""
    buffet: Optional[BuffetSelection] = None
    beverages: SelectionMap = Field(default_factory=dict)
    entremeses: SelectionMap = Field(default_factory=dict)
    guest_count_slider: Optional[int] = None
    guest_count_manual: Optional[int] = None
    table_type: str = ""
    additional_services: AdditionalServices = Field(default_factory=AdditionalServices)
    tip_percentage: Decimal = Decimal("0")
    deposit_percentage: Decimal = Decimal("20")
    replaces_id: Optional[str] = None

    @field_validator("beverages", "entremeses")
    @classmethod
    def drop_unselected(cls, v: SelectionMap) -> SelectionMap:
        return normalize_selection(v)

    @property
    def resolved_guest_count(self) -> int:
        """Manual entry wins over the slider; 0 when neither is usable."""
        return self.guest_count_manual or self.guest_count_slider or 0

    @property
    def resolved_event_type(self) -> str:
        """Free-text description replaces the ``other`` event type."""
        if self.event_type == "other":
            return self.other_event_type.strip()
        return self.event_type

    @property
    def is_buffet(self) -> bool:
        return is_buffet(self.food_type)


class Reservation(RecordModel):
    """Stored reservation with its frozen pricing snapshot."""

    id: str = Field(min_length=1)
    client_name: str
    client_email: str = ""
    client_phone: str
    company_name: str = ""
    event_date: date
    event_time: str
    event_type: str
    event_duration: int = Field(ge=1)
    room_type: str
    food_type: str
    buffet: Optional[BuffetSelection] = None
    beverages: SelectionMap = Field(default_factory=dict)
    entremeses: SelectionMap = Field(default_factory=dict)
    guest_count: int = Field(ge=0)
    table_configuration: TableConfiguration = Field(default_factory=TableConfiguration)
    additional_services: AdditionalServices = Field(default_factory=AdditionalServices)
    tip_percentage: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_percentage: Decimal = Field(default=Decimal("20"), ge=0)
    deposit_paid: bool = False
    pricing: PricingBreakdown
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("beverages", "entremeses")
    @classmethod
    def drop_unselected(cls, v: SelectionMap) -> SelectionMap:
        return normalize_selection(v)

    @property
    def balance(self) -> Decimal:
        """Amount still owed; the deposit counts only once paid."""
        if self.deposit_paid:
            return self.pricing.total_cost - self.pricing.deposit_amount
        return self.pricing.total_cost

    def to_record(self) -> dict:
        """Serialize to the persisted document shape."""
        return self.model_dump(mode="json", by_alias=True)


ReservationList = TypeAdapter(list[Reservation])
