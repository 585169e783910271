"""Mapper functions to convert between domain entities and stored JSON.

Decimals are stored as strings so no precision is lost, and dates as ISO
strings. Optional fields are stored as null, never as zero.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from drivetally.domain import entities as domain


def _decimal(value: Any) -> Decimal:
    try:
        number = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Stored number '{value}' is not a number") from e
    if not number.is_finite():
        raise ValueError(f"Stored number '{value}' is not finite")
    return number


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else _decimal(value)


def _optional_str(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def record_to_payload(record: domain.RunRecord) -> dict[str, Any]:
    """Convert a RunRecord to a JSON-compatible dict."""
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "totalEarnings": str(record.total_earnings),
        "kmDriven": str(record.km_driven),
        "hoursWorked": _optional_str(record.hours_worked),
        "additionalCosts": _optional_str(record.additional_costs),
    }


def _non_negative(value: Optional[Decimal], field: str) -> Optional[Decimal]:
    if value is not None and value < 0:
        raise ValueError(f"Stored {field} is negative")
    return value


def record_from_payload(payload: dict[str, Any]) -> domain.RunRecord:
    """Convert a stored dict back to a RunRecord.

    A stored record must still satisfy the rules a new record is checked
    against: positive km and no negative amounts.

    Raises:
        KeyError, ValueError, TypeError: If the payload is malformed
    """
    km_driven = _decimal(payload["kmDriven"])
    if km_driven <= 0:
        raise ValueError("Stored km driven is not positive")

    return domain.RunRecord(
        id=str(payload["id"]),
        date=date.fromisoformat(payload["date"]),
        total_earnings=_non_negative(_decimal(payload["totalEarnings"]), "earnings"),
        km_driven=km_driven,
        hours_worked=_non_negative(_optional_decimal(payload.get("hoursWorked")), "hours"),
        additional_costs=_non_negative(
            _optional_decimal(payload.get("additionalCosts")), "additional costs"
        ),
    )


def records_to_payload(records: tuple[domain.RunRecord, ...]) -> list[dict[str, Any]]:
    """Convert an ordered sequence of records for storage."""
    return [record_to_payload(record) for record in records]


def records_from_payload(payload: Any) -> list[domain.RunRecord]:
    """Convert a stored list back to records, keeping order."""
    if not isinstance(payload, list):
        raise TypeError("Stored records must be a list")
    return [record_from_payload(item) for item in payload]


def settings_to_payload(settings: domain.AppSettings) -> dict[str, Any]:
    """Convert AppSettings to a JSON-compatible dict."""
    return {"costPerKm": str(settings.cost_per_km)}


def settings_from_payload(payload: Any) -> domain.AppSettings:
    """Convert a stored dict back to AppSettings."""
    if not isinstance(payload, dict):
        raise TypeError("Stored settings must be an object")
    cost = _decimal(payload["costPerKm"])
    if cost < 0:
        raise ValueError("Stored cost per km is negative")
    return domain.AppSettings(cost_per_km=cost)


def flag_from_payload(payload: Any) -> bool:
    """Convert a stored JSON boolean."""
    if not isinstance(payload, bool):
        raise TypeError("Stored flag must be a boolean")
    return payload
