"""Display formatting shared by the dashboard and invoices."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """Dollar amount rounded half-up to cents, e.g. ``$2,037.60``."""
    return f"${amount.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def format_time_12h(time24: str) -> str:
    """Convert ``HH:MM`` to ``H:MM AM/PM``; blank or malformed input passes through."""
    if not time24:
        return ""

    hours, _, minutes = time24.partition(":")
    try:
        hour = int(hours)
    except ValueError:
        return time24

    suffix = "PM" if hour >= 12 else "AM"
    hour12 = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{hour12}:{minutes} {suffix}"
