"""Pricing engine.

Turns a pricing request into an itemized breakdown:
- Room, food, beverage, entremeses and service costs
- Food and alcohol taxes
- Tip on the pre-tax subtotal
- Deposit on the tax and tip inclusive total

All arithmetic is Decimal and unrounded so that
``total_cost == subtotal_before_taxes + taxes.total + tip.amount`` holds exactly.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from venue_booking.logging import get_logger
from venue_booking.models.catalog import CatalogKind
from venue_booking.models.reservation import (
    AdditionalServices,
    LineItem,
    LineItemKind,
    PricingBreakdown,
    ReservationDraft,
    SelectionMap,
    TaxBreakdown,
    TipBreakdown,
)
from venue_booking.services.catalog import Catalog

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class RoomPricingMode(str, Enum):
    """How the event space is charged."""

    # Space is always free
    COMPLIMENTARY = "complimentary"
    # Space is billed by the hour only when no food is served
    BILLED_WHEN_NO_FOOD = "billed_when_no_food"


class ServiceFees(BaseModel):
    """Flat fee per additional service."""

    model_config = ConfigDict(frozen=True)

    audio_visual: Decimal = Field(default=Decimal("0"), ge=0)
    decorations: Decimal = Field(default=Decimal("150"), ge=0)
    waitstaff: Decimal = Field(default=Decimal("100"), ge=0)
    valet: Decimal = Field(default=Decimal("50"), ge=0)

    def fee_for(self, service: str) -> Decimal:
        return getattr(self, service, ZERO)


class PricingPolicy(BaseModel):
    """Venue pricing rules."""

    model_config = ConfigDict(frozen=True)

    room_pricing_mode: RoomPricingMode = RoomPricingMode.COMPLIMENTARY
    food_state_tax_rate: Decimal = Decimal("0.06")
    food_city_tax_rate: Decimal = Decimal("0.01")
    # Applied to the whole beverage cost once any alcoholic item is selected
    alcohol_tax_rate: Decimal = Decimal("0.105")
    default_deposit_percentage: Decimal = Decimal("20")
    service_fees: ServiceFees = Field(default_factory=ServiceFees)


class PricingRequest(BaseModel):
    """Validated input for a price calculation."""

    guest_count: int = Field(ge=0)
    food_type: str = ""
    food_unit_price: Decimal = Field(default=ZERO, ge=0)
    room_type: str = ""
    room_unit_price: Decimal = Field(default=ZERO, ge=0)
    beverage_selections: SelectionMap = Field(default_factory=dict)
    entremeses_selections: SelectionMap = Field(default_factory=dict)
    additional_services: AdditionalServices = Field(default_factory=AdditionalServices)
    event_duration_hours: int = Field(default=1, ge=1)
    tip_percentage: Decimal = Field(default=ZERO, ge=0)
    deposit_percentage: Decimal = Field(default=Decimal("20"), ge=0)


class PricingEngine:
    """Computes pricing breakdowns from a catalog and a policy."""

    def __init__(self, catalog: Catalog, policy: PricingPolicy | None = None):
        """
        Initialize pricing engine.

        Args:
            catalog: Reference tables for item prices and names
            policy: Pricing rules (defaults to the venue's observed rules)
        """
        self.catalog = catalog
        self.policy = policy or PricingPolicy()

    def request_from_draft(self, draft: ReservationDraft) -> PricingRequest:
        """
        Build a pricing request from form input.

        Unknown food or room ids price at zero and negative percentages are
        clamped so that live quotes never fail; saving still rejects them
        through validation.
        """
        food = self.catalog.food_service(draft.food_type)
        room = self.catalog.room(draft.room_type)
        return PricingRequest(
            guest_count=max(draft.resolved_guest_count, 0),
            food_type=draft.food_type,
            food_unit_price=food.unit_price if food else ZERO,
            room_type=draft.room_type,
            room_unit_price=room.hourly_rate if room else ZERO,
            beverage_selections=draft.beverages,
            entremeses_selections=draft.entremeses,
            additional_services=draft.additional_services,
            event_duration_hours=max(draft.event_duration or 1, 1),
            tip_percentage=max(draft.tip_percentage, ZERO),
            deposit_percentage=max(draft.deposit_percentage, ZERO),
        )

    def quote(self, draft: ReservationDraft) -> PricingBreakdown:
        """Price a draft as entered."""
        return self.calculate(self.request_from_draft(draft))

    def calculate(self, request: PricingRequest) -> PricingBreakdown:
        """Compute the full breakdown for a request."""
        policy = self.policy
        guests = Decimal(request.guest_count)

        food_cost = request.food_unit_price * guests
        food_lines: list[LineItem] = []
        if food_cost > 0:
            food_lines.append(
                LineItem(
                    kind=LineItemKind.FOOD,
                    item_id=request.food_type,
                    description=self.catalog.food_name(request.food_type),
                    quantity=request.guest_count,
                    amount=food_cost,
                )
            )

        drink_cost, alcoholic_quantity, drink_lines = self._accumulate(
            CatalogKind.BEVERAGE, request.beverage_selections, request.guest_count
        )
        entremeses_cost, _, entremeses_lines = self._accumulate(
            CatalogKind.ENTREMESES, request.entremeses_selections, request.guest_count
        )

        room_cost = self._room_cost(request)
        room_lines: list[LineItem] = []
        if room_cost > 0:
            room_lines.append(
                LineItem(
                    kind=LineItemKind.ROOM,
                    item_id=request.room_type,
                    description=(
                        f"{self.catalog.room_name(request.room_type)} - "
                        f"{request.event_duration_hours} hours"
                    ),
                    quantity=1,
                    amount=room_cost,
                )
            )

        additional_cost = ZERO
        service_lines: list[LineItem] = []
        for service in request.additional_services.enabled():
            fee = policy.service_fees.fee_for(service)
            additional_cost += fee
            service_lines.append(
                LineItem(
                    kind=LineItemKind.SERVICE,
                    item_id=service,
                    description=self.catalog.service_name(service),
                    quantity=1 if fee > 0 else None,
                    amount=fee,
                )
            )

        food_state_tax = food_cost * policy.food_state_tax_rate
        food_city_tax = food_cost * policy.food_city_tax_rate
        alcohol_tax = drink_cost * policy.alcohol_tax_rate if alcoholic_quantity > 0 else ZERO
        total_taxes = food_state_tax + food_city_tax + alcohol_tax

        subtotal = room_cost + food_cost + drink_cost + entremeses_cost + additional_cost
        tip_amount = subtotal * request.tip_percentage / HUNDRED
        total_cost = subtotal + total_taxes + tip_amount
        deposit_amount = total_cost * request.deposit_percentage / HUNDRED

        return PricingBreakdown(
            room_cost=room_cost,
            food_cost=food_cost,
            drink_cost=drink_cost,
            entremeses_cost=entremeses_cost,
            additional_cost=additional_cost,
            taxes=TaxBreakdown(
                food_state_tax=food_state_tax,
                food_city_tax=food_city_tax,
                alcohol_tax=alcohol_tax,
                total=total_taxes,
            ),
            tip=TipBreakdown(percentage=request.tip_percentage, amount=tip_amount),
            subtotal_before_taxes=subtotal,
            total_cost=total_cost,
            deposit_amount=deposit_amount,
            deposit_percentage=request.deposit_percentage,
            guest_count=request.guest_count,
            event_duration=request.event_duration_hours,
            line_items=tuple(
                food_lines + drink_lines + entremeses_lines + room_lines + service_lines
            ),
        )

    def _room_cost(self, request: PricingRequest) -> Decimal:
        """Hourly room charge, only billed when the policy and food type call for it."""
        if self.policy.room_pricing_mode is not RoomPricingMode.BILLED_WHEN_NO_FOOD:
            return ZERO

        food = self.catalog.food_service(request.food_type)
        if food is None or food.serves_food:
            return ZERO

        return request.room_unit_price * request.event_duration_hours

    def _accumulate(
        self, kind: CatalogKind, selections: SelectionMap, guest_count: int
    ) -> tuple[Decimal, int, list[LineItem]]:
        """
        Sum one selection map.

        Returns:
            (cost, alcoholic_quantity, lines)
        """
        cost = ZERO
        alcoholic_quantity = 0
        lines: list[LineItem] = []
        line_kind = LineItemKind.BEVERAGE if kind is CatalogKind.BEVERAGE else LineItemKind.ENTREMESES

        for item_id, value in selections.items():
            if value is True:
                add_on = self.catalog.find_per_guest(kind, item_id)
                if add_on is None:
                    logger.debug("unknown_per_guest_item", kind=kind.value, item_id=item_id)
                    continue
                amount = add_on.rate * guest_count
                cost += amount
                lines.append(
                    LineItem(
                        kind=line_kind,
                        item_id=item_id,
                        description=add_on.display_name,
                        quantity=guest_count,
                        amount=amount,
                    )
                )
                continue

            if isinstance(value, bool) or value <= 0:
                continue

            item = self.catalog.find(kind, item_id)
            if item is None:
                logger.debug("unknown_catalog_item", kind=kind.value, item_id=item_id)
                continue

            amount = item.unit_price * value
            cost += amount
            if item.is_alcoholic:
                alcoholic_quantity += value
            lines.append(
                LineItem(
                    kind=line_kind,
                    item_id=item_id,
                    description=item.display_name,
                    quantity=value,
                    amount=amount,
                )
            )

        return cost, alcoholic_quantity, lines
