"""Derivation of the vehicle running cost per km."""

from dataclasses import fields
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from drivetally.domain.entities import (
    AdvancedCosts,
    CostMode,
    ElectricInputs,
    FuelInputs,
    HybridInputs,
)
from drivetally.domain.errors import (
    InvalidInputError,
    MissingDenominatorError,
    NoInputProvidedError,
    must_not_be_negative,
)

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")

ModeInputs = Union[FuelInputs, ElectricInputs, HybridInputs]

_EXPECTED_INPUTS = {
    CostMode.FUEL: FuelInputs,
    CostMode.ELECTRIC: ElectricInputs,
    CostMode.HYBRID: HybridInputs,
}


def mode_cost_per_km(mode: CostMode, inputs: Optional[ModeInputs]) -> Decimal:
    """Cost per km from the fuel, electric or hybrid section alone.

    A section whose distance is not positive contributes zero rather than a
    division error, so the advanced layer can still be used on its own.

    Raises:
        InvalidInputError: If the inputs do not belong to the mode
    """
    if inputs is None:
        return ZERO

    expected = _EXPECTED_INPUTS[CostMode(mode)]
    if not isinstance(inputs, expected):
        raise InvalidInputError(
            f"{CostMode(mode).value} mode expects {expected.__name__}, "
            f"got {type(inputs).__name__}"
        )

    if isinstance(inputs, FuelInputs):
        if inputs.refuel_amount > 0 and inputs.km_since_refuel > 0:
            return inputs.refuel_amount / inputs.km_since_refuel
    elif isinstance(inputs, ElectricInputs):
        if inputs.charge_cost >= 0 and inputs.range_at_full_charge > 0:
            return inputs.charge_cost / inputs.range_at_full_charge
    elif isinstance(inputs, HybridInputs):
        if inputs.fuel_spend >= 0 and inputs.electric_spend >= 0 and inputs.total_km > 0:
            return (inputs.fuel_spend + inputs.electric_spend) / inputs.total_km
    return ZERO


def advanced_cost_per_km(advanced: Optional[AdvancedCosts]) -> Decimal:
    """Monthly fixed costs spread over the monthly distance.

    Raises:
        InvalidInputError: If any field is negative
        MissingDenominatorError: If any cost is entered but monthly km is not
            positive
    """
    if advanced is None:
        return ZERO

    for field in fields(advanced):
        if getattr(advanced, field.name) < 0:
            raise InvalidInputError(
                must_not_be_negative(field.name.replace("_", " ").capitalize())
            )

    if advanced.monthly_km <= 0:
        if advanced.has_costs():
            raise MissingDenominatorError(
                "Average monthly km is required when adding other costs"
            )
        return ZERO

    monthly_total = (
        advanced.vehicle
        + advanced.maintenance
        + advanced.insurance
        + advanced.annual_taxes / MONTHS_PER_YEAR
        + advanced.other
    )
    return monthly_total / advanced.monthly_km


def derive_cost_per_km(
    mode: CostMode,
    inputs: Optional[ModeInputs],
    advanced: Optional[AdvancedCosts] = None,
) -> Decimal:
    """Derive the total running cost per km.

    Args:
        mode: Which section of the calculator was filled
        inputs: Inputs for that mode, or None if only advanced costs are used
        advanced: Optional monthly costs layered on top

    Returns:
        Cost per km at full precision

    Raises:
        MissingDenominatorError: Advanced costs given without monthly km
        NoInputProvidedError: Neither section produced a cost
    """
    mode_component = mode_cost_per_km(mode, inputs)
    advanced_component = advanced_cost_per_km(advanced)

    if mode_component <= 0 and advanced_component <= 0:
        raise NoInputProvidedError(
            "Fill in at least one section of the calculator to get a result"
        )
    return mode_component + advanced_component


def round_for_display(value: Decimal) -> Decimal:
    """Round to cents for presentation."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
