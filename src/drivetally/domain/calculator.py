"""Profit calculation for a single run record.

All functions here are pure: the same inputs always give the same result and
nothing is rounded. Rounding is left to whoever displays the numbers.
"""

from decimal import Decimal
from typing import Optional

from drivetally.domain.entities import CalculationResult, RunRecord
from drivetally.domain.errors import (
    InvalidInputError,
    invalid_number,
    must_be_positive,
    must_not_be_negative,
)
from drivetally.utils.amount_parser import Number, to_decimal

ZERO = Decimal("0")


def require_number(value: Optional[Number], field_name: str) -> Decimal:
    """Convert a required value to Decimal or raise InvalidInputError."""
    try:
        number = to_decimal(value)
    except ValueError as e:
        raise InvalidInputError(invalid_number(field_name, value)) from e
    if number is None:
        raise InvalidInputError(f"{field_name} is required")
    return number


def optional_number(value: Optional[Number], field_name: str) -> Optional[Decimal]:
    """Convert an optional non-negative value to Decimal, keeping None."""
    try:
        number = to_decimal(value)
    except ValueError as e:
        raise InvalidInputError(invalid_number(field_name, value)) from e
    if number is not None and number < 0:
        raise InvalidInputError(must_not_be_negative(field_name))
    return number


def compute_values(
    total_earnings: Optional[Number],
    km_driven: Optional[Number],
    hours_worked: Optional[Number],
    additional_costs: Optional[Number],
    cost_per_km: Number,
) -> CalculationResult:
    """Compute profitability from raw inputs.

    Args:
        total_earnings: Earnings for the day (required)
        km_driven: Distance driven, must be greater than zero (required)
        hours_worked: Optional hours; absent or zero gives zero profit per hour
        additional_costs: Optional extra costs (tolls, food, washing)
        cost_per_km: Vehicle running cost per km

    Returns:
        CalculationResult

    Raises:
        InvalidInputError: If earnings or km are missing or not numbers, or km
            is not greater than zero
    """
    earnings = require_number(total_earnings, "Total earnings")
    km = require_number(km_driven, "Km driven")
    if km <= 0:
        raise InvalidInputError(must_be_positive("Km driven"))
    hours = optional_number(hours_worked, "Hours worked") or ZERO
    costs = optional_number(additional_costs, "Additional costs") or ZERO
    rate = require_number(cost_per_km, "Cost per km")

    car_cost = km * rate
    gross_profit = earnings - costs
    net_profit = gross_profit - car_cost
    profit_per_hour = net_profit / hours if hours > 0 else ZERO

    return CalculationResult(
        total_earnings=earnings,
        gross_profit=gross_profit,
        car_cost=car_cost,
        net_profit=net_profit,
        profit_per_km=net_profit / km,
        profit_per_hour=profit_per_hour,
        gross_earnings_per_km=earnings / km,
    )


def compute(record: RunRecord, cost_per_km: Number) -> CalculationResult:
    """Compute profitability for a stored record."""
    return compute_values(
        record.total_earnings,
        record.km_driven,
        record.hours_worked,
        record.additional_costs,
        cost_per_km,
    )


def net_profit(record: RunRecord, cost_per_km: Decimal) -> Decimal:
    """Net profit of a record; shorthand used by history and export views."""
    return compute(record, cost_per_km).net_profit


def record_costs(record: RunRecord, cost_per_km: Decimal) -> Decimal:
    """Vehicle cost plus additional costs of a record."""
    return record.km_driven * cost_per_km + (record.additional_costs or ZERO)
