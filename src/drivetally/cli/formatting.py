"""Number formatting for terminal output."""

from decimal import Decimal
from typing import Optional

from drivetally.domain.cost_model import round_for_display


def format_money(value: Decimal) -> str:
    """Format an amount rounded to cents, e.g. ``$1,234.50``."""
    rounded = round_for_display(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def format_optional(value: Optional[Decimal], suffix: str = "") -> str:
    """Format an optional quantity, showing '-' when absent."""
    if value is None:
        return "-"
    return f"{value}{suffix}"
