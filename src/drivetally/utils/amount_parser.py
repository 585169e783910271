"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional, Union

Number = Union[Decimal, int, float, str]


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "310.50"
    - "$310.50", "R$ 310,50", "€310.50"
    - "1,234.56"
    - "1.234,56" (comma as decimal separator)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not finite
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"R\$|[$€£¥]", "", amount_str.strip()).strip()
    cleaned = cleaned.replace(" ", "")

    if "," in cleaned and "." in cleaned:
        # Whichever separator comes last is the decimal point
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        head, _, tail = cleaned.rpartition(",")
        if len(tail) == 3 and head.lstrip("+-") not in ("", "0"):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return amount


def to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    """Convert a number or numeric string to Decimal, passing None through.

    Empty strings are treated as absent.

    Raises:
        ValueError: If the value cannot be converted
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Amount '{value}' is not a finite number")
        return value
    if isinstance(value, (int, float)):
        # Go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion
        return parse_amount(str(value))
    if isinstance(value, str):
        if not value.strip():
            return None
        return parse_amount(value)
    raise ValueError(f"Could not parse amount '{value}'")
