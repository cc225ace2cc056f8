"""Invoice builder.

Formats a stored reservation as an itemized invoice. Every amount comes
from the reservation's pricing snapshot; nothing is re-priced here.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from venue_booking.logging import get_logger
from venue_booking.models.catalog import CatalogKind
from venue_booking.models.reservation import LineItem, LineItemKind, Reservation, SelectionMap
from venue_booking.services.catalog import BUFFET_EXTRAS, Catalog
from venue_booking.services.formatting import format_money, format_time_12h

logger = get_logger(__name__)

INCLUDED_LABEL = "Incluido"
PAID_SUFFIX = " - PAID"
DEFAULT_EVENT_LABEL = "Evento"
BEVERAGES_LABEL = "Bebidas"
ENTREMESES_LABEL = "Entremeses"
SERVICES_LABEL = "Servicios adicionales"

SPANISH_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

BUFFET_CATEGORIES = ("rice", "protein1", "protein2", "side", "salad")


def format_long_date(value: date) -> str:
    """Spanish long date, e.g. ``15 de marzo de 2025``."""
    return f"{value.day} de {SPANISH_MONTHS[value.month - 1]} de {value.year}"


def invoice_number(position: int, year: int) -> str:
    """``YYYY-NNN`` from the 1-based list position."""
    return f"{year}-{position:03d}"


class InvoiceLine(BaseModel):
    """One invoice row."""

    description: str
    quantity: str
    total: str
    bullets: list[str] = Field(default_factory=list)


class Invoice(BaseModel):
    """Formatted invoice for one reservation."""

    number: str
    company_name: str = ""
    client_name: str
    client_phone: str
    activity: str
    event_day: str
    event_time: str
    lines: list[InvoiceLine]
    subtotal: Decimal
    taxes: Decimal
    tip_percentage: Decimal
    tip_amount: Decimal
    total: Decimal
    deposit_amount: Decimal
    deposit_paid: bool
    balance: Decimal

    @property
    def file_name(self) -> str:
        return f"Invoice-{self.number}-{'-'.join(self.client_name.split())}.txt"

    def render_text(self) -> str:
        """Plain-text rendering of the invoice."""
        out: list[str] = []
        if self.company_name:
            out.append(f"Company: {self.company_name}")
        out.append(f"ISSUED TO:{'INVOICE NO: ' + self.number:>50}")
        out.append(f"A: {self.client_name}")
        out.append(f"Tel: {self.client_phone}")
        out.append(f"Actividad: {self.activity}")
        out.append(f"Día: {self.event_day}")
        out.append(f"Hora: {self.event_time}")
        out.append("")
        out.append(f"{'DESCRIPTION':<44}{'QTY':>6}{'TOTAL':>14}")

        for line in self.lines:
            out.append(f"{line.description:<44}{line.quantity:>6}{line.total:>14}")
            for bullet in line.bullets:
                out.append(f"  • {bullet}")

        out.append("")
        out.append(_summary_row("SUB-TOTAL", format_money(self.subtotal)))
        out.append(_summary_row("TAXES AND FEE", format_money(self.taxes)))
        if self.tip_amount > 0:
            out.append(_summary_row(f"PROPINA {self.tip_percentage.normalize():f}%", format_money(self.tip_amount)))
        out.append(_summary_row("SUB TOTAL", format_money(self.total)))
        deposit = format_money(self.deposit_amount) + (PAID_SUFFIX if self.deposit_paid else "")
        out.append(_summary_row("Deposito a Pagar", deposit))
        out.append(_summary_row("Balance", format_money(self.balance)))
        out.append("")
        out.append(f"{'THANK YOU':>64}")
        return "\n".join(out) + "\n"


def _summary_row(label: str, value: str) -> str:
    return f"{label:<44}{value:>20}"


class InvoiceBuilder:
    """Builds invoices from reservations."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def build(
        self,
        reservation: Reservation,
        position: int,
        issued_on: Optional[date] = None,
    ) -> Invoice:
        """
        Build the invoice for a reservation.

        Args:
            reservation: Stored reservation with its pricing snapshot
            position: 1-based position of the reservation in the list
            issued_on: Issue date, its year prefixes the invoice number

        Returns:
            Invoice ready to render
        """
        issued_on = issued_on or date.today()
        pricing = reservation.pricing

        invoice = Invoice(
            number=invoice_number(position, issued_on.year),
            company_name=reservation.company_name,
            client_name=reservation.client_name,
            client_phone=reservation.client_phone,
            activity=reservation.event_type or DEFAULT_EVENT_LABEL,
            event_day=format_long_date(reservation.event_date),
            event_time=format_time_12h(reservation.event_time),
            lines=(
                [self._line(reservation, item) for item in pricing.line_items]
                if pricing.line_items
                else self._category_lines(reservation)
            ),
            subtotal=pricing.subtotal_before_taxes,
            taxes=pricing.taxes.total,
            tip_percentage=pricing.tip.percentage,
            tip_amount=pricing.tip.amount,
            total=pricing.total_cost,
            deposit_amount=pricing.deposit_amount,
            deposit_paid=reservation.deposit_paid,
            balance=reservation.balance,
        )

        logger.debug("invoice_built", reservation_id=reservation.id, number=invoice.number)
        return invoice

    def _category_lines(self, reservation: Reservation) -> list[InvoiceLine]:
        """Rows from the snapshot's category totals, for records saved without line items."""
        pricing = reservation.pricing
        lines: list[InvoiceLine] = []

        if pricing.food_cost > 0:
            is_buffet = reservation.buffet is not None
            lines.append(
                InvoiceLine(
                    description="Buffet" if is_buffet else self.catalog.food_name(reservation.food_type),
                    quantity=str(pricing.guest_count),
                    total=format_money(pricing.food_cost),
                    bullets=self.buffet_bullets(reservation) if is_buffet else [],
                )
            )

        if pricing.drink_cost > 0:
            lines.append(
                InvoiceLine(
                    description=BEVERAGES_LABEL,
                    quantity="-",
                    total=format_money(pricing.drink_cost),
                    bullets=self._selection_bullets(CatalogKind.BEVERAGE, reservation.beverages),
                )
            )

        if pricing.entremeses_cost > 0:
            lines.append(
                InvoiceLine(
                    description=ENTREMESES_LABEL,
                    quantity="-",
                    total=format_money(pricing.entremeses_cost),
                    bullets=self._selection_bullets(CatalogKind.ENTREMESES, reservation.entremeses),
                )
            )

        if pricing.room_cost > 0:
            lines.append(
                InvoiceLine(
                    description=(
                        f"{self.catalog.room_name(reservation.room_type)} - "
                        f"{pricing.event_duration} hours"
                    ),
                    quantity="1",
                    total=format_money(pricing.room_cost),
                )
            )

        services = reservation.additional_services.enabled()
        if services:
            lines.append(
                InvoiceLine(
                    description=SERVICES_LABEL,
                    quantity="-",
                    total=(
                        format_money(pricing.additional_cost)
                        if pricing.additional_cost > 0
                        else INCLUDED_LABEL
                    ),
                    bullets=[self.catalog.service_name(service) for service in services],
                )
            )

        return lines

    def _selection_bullets(self, kind: CatalogKind, selections: SelectionMap) -> list[str]:
        bullets = []
        for item_id, value in selections.items():
            name = self.catalog.item_name(kind, item_id)
            if value is True:
                bullets.append(f"{name} (por persona)")
            elif not isinstance(value, bool) and value > 0:
                bullets.append(f"{name} x{value}")
        return bullets

    def _line(self, reservation: Reservation, item: LineItem) -> InvoiceLine:
        if item.kind is LineItemKind.FOOD and reservation.buffet is not None:
            return InvoiceLine(
                description="Buffet",
                quantity=str(item.quantity),
                total=format_money(item.amount),
                bullets=self.buffet_bullets(reservation),
            )

        if item.kind is LineItemKind.SERVICE and item.amount <= 0:
            return InvoiceLine(description=item.description, quantity="-", total=INCLUDED_LABEL)

        return InvoiceLine(
            description=item.description,
            quantity=str(item.quantity) if item.quantity is not None else "-",
            total=format_money(item.amount),
        )

    def buffet_bullets(self, reservation: Reservation) -> list[str]:
        """Display names of the buffet picks and extras."""
        buffet = reservation.buffet
        if buffet is None:
            return []

        bullets = [
            self.catalog.buffet_item_name(category, getattr(buffet, category))
            for category in BUFFET_CATEGORIES
            if getattr(buffet, category)
        ]
        if buffet.bread:
            bullets.append(BUFFET_EXTRAS["bread"])
        if buffet.water_soda:
            bullets.append(BUFFET_EXTRAS["water_soda"])
        return bullets
