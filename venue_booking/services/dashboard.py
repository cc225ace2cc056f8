"""Read-only statistics over the reservation list."""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from pydantic import BaseModel

from venue_booking.models.reservation import Reservation
from venue_booking.services.catalog import Catalog

RECENT_LIMIT = 5
UPCOMING_LIMIT = 5


class DashboardStats(BaseModel):
    """Headline figures."""

    total_reservations: int
    total_revenue: Decimal
    total_guests: int
    today_reservations: int
    outstanding_balance: Decimal


class RoomUsage(BaseModel):
    """Number of events booked in one room."""

    room_type: str
    room_name: str
    event_count: int


class GuestStats(BaseModel):
    """Guest count distribution; all zero for an empty list."""

    average: Decimal
    maximum: int
    minimum: int
    total: int


class DashboardService:
    """Computes dashboard and analytics views from a reservation snapshot."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def stats(self, reservations: Sequence[Reservation], today: Optional[date] = None) -> DashboardStats:
        """Totals plus the number of events happening today."""
        today = today or date.today()
        return DashboardStats(
            total_reservations=len(reservations),
            total_revenue=sum((r.pricing.total_cost for r in reservations), Decimal("0")),
            total_guests=sum(r.guest_count for r in reservations),
            today_reservations=sum(1 for r in reservations if r.event_date == today),
            outstanding_balance=sum((r.balance for r in reservations), Decimal("0")),
        )

    def recent(self, reservations: Sequence[Reservation], limit: int = RECENT_LIMIT) -> list[Reservation]:
        """Most recently created first."""
        return sorted(reservations, key=lambda r: r.created_at, reverse=True)[:limit]

    def upcoming(
        self,
        reservations: Sequence[Reservation],
        today: Optional[date] = None,
        limit: int = UPCOMING_LIMIT,
    ) -> list[Reservation]:
        """Events from today on, soonest first."""
        today = today or date.today()
        pending = [r for r in reservations if r.event_date >= today]
        return sorted(pending, key=lambda r: (r.event_date, r.event_time))[:limit]

    def room_stats(self, reservations: Sequence[Reservation]) -> list[RoomUsage]:
        """Events per room, busiest first."""
        counts = Counter(r.room_type for r in reservations)
        return [
            RoomUsage(
                room_type=room_type,
                room_name=self.catalog.room_name(room_type),
                event_count=count,
            )
            for room_type, count in counts.most_common()
        ]

    def guest_stats(self, reservations: Sequence[Reservation]) -> GuestStats:
        """Average, extremes and total of guest counts."""
        if not reservations:
            return GuestStats(average=Decimal("0"), maximum=0, minimum=0, total=0)

        counts = [r.guest_count for r in reservations]
        total = sum(counts)
        return GuestStats(
            average=Decimal(total) / len(counts),
            maximum=max(counts),
            minimum=min(counts),
            total=total,
        )

    def reservations_on(self, reservations: Sequence[Reservation], day: date) -> list[Reservation]:
        """Calendar cell: events on one date, by start time."""
        return sorted(
            (r for r in reservations if r.event_date == day),
            key=lambda r: r.event_time,
        )

    def month_calendar(
        self, reservations: Sequence[Reservation], year: int, month: int
    ) -> dict[date, list[Reservation]]:
        """Events of one month grouped by date; days without events are omitted."""
        calendar: dict[date, list[Reservation]] = {}
        for reservation in sorted(reservations, key=lambda r: (r.event_date, r.event_time)):
            if reservation.event_date.year == year and reservation.event_date.month == month:
                calendar.setdefault(reservation.event_date, []).append(reservation)
        return calendar
