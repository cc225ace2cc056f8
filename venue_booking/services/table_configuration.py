"""Table configuration calculator.

Seating is selected as a single ``<shape>-<seats>`` value such as
``round-8``. Malformed selectors yield an empty configuration instead of
raising.
"""

import math
from typing import Optional

from venue_booking.models.reservation import TableConfiguration, TableShape


def compute_table_count(guest_count: int, seats_per_table: Optional[int]) -> int:
    """Tables needed to seat every guest, 0 unless both inputs are positive."""
    if guest_count and seats_per_table and guest_count > 0 and seats_per_table > 0:
        return math.ceil(guest_count / seats_per_table)
    return 0


def parse_table_selector(selector: Optional[str]) -> TableConfiguration:
    """Split a ``<shape>-<seats>`` selector; table_count is left at 0."""
    if not selector:
        return TableConfiguration()

    parts = selector.split("-")
    if len(parts) != 2:
        return TableConfiguration()

    shape_value, seats_value = parts
    try:
        shape = TableShape(shape_value)
    except ValueError:
        return TableConfiguration()

    try:
        seats = int(seats_value)
    except ValueError:
        return TableConfiguration()

    if seats <= 0:
        return TableConfiguration()

    return TableConfiguration(table_shape=shape, seats_per_table=seats)


def format_table_selector(
    table_shape: Optional[TableShape], seats_per_table: Optional[int]
) -> str:
    """Inverse of :func:`parse_table_selector`; empty when incomplete."""
    if not table_shape or not seats_per_table:
        return ""
    return f"{TableShape(table_shape).value}-{seats_per_table}"


def build_table_configuration(guest_count: int, selector: Optional[str]) -> TableConfiguration:
    """Parse a selector and derive the table count for a guest count."""
    config = parse_table_selector(selector)
    return config.model_copy(
        update={"table_count": compute_table_count(guest_count, config.seats_per_table)}
    )
