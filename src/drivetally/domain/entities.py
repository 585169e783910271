"""Domain model entities for drivetally.

These are pure data classes representing business concepts, independent of
how they are persisted. Derived values (calculation results, period buckets,
report points) are never stored.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


DEFAULT_COST_PER_KM = Decimal("0.75")


class CostMode(str, Enum):
    """Input mode used to derive the running cost per km."""

    FUEL = "fuel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"


class PeriodType(str, Enum):
    """Aggregation period for summaries."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


class ReportMetric(str, Enum):
    """Metric series available in reports."""

    NET_PROFIT = "net_profit"
    PROFIT_PER_KM = "profit_per_km"
    GROSS_EARNINGS = "gross_earnings"
    GROSS_EARNINGS_PER_KM = "gross_earnings_per_km"


class UpsertOutcome(str, Enum):
    """What happened to the collection when a record was saved."""

    INSERTED = "inserted"
    UPDATED = "updated"
    REPLACED = "replaced"


@dataclass(frozen=True)
class RunRecord:
    """One work day of driving."""

    id: str
    date: date
    total_earnings: Decimal
    km_driven: Decimal
    hours_worked: Optional[Decimal] = None
    additional_costs: Optional[Decimal] = None


@dataclass(frozen=True)
class AppSettings:
    """User settings."""

    cost_per_km: Decimal = DEFAULT_COST_PER_KM


@dataclass(frozen=True)
class CalculationResult:
    """Profitability figures derived from a single record."""

    total_earnings: Decimal
    gross_profit: Decimal
    car_cost: Decimal
    net_profit: Decimal
    profit_per_km: Decimal
    profit_per_hour: Decimal
    gross_earnings_per_km: Decimal


@dataclass(frozen=True)
class PeriodBucket:
    """Totals for one week, month or year."""

    key: str
    total_earnings: Decimal
    total_costs: Decimal
    total_km: Decimal
    record_count: int = 0

    @property
    def net_profit(self) -> Decimal:
        return self.total_earnings - self.total_costs

    @property
    def profit_per_km(self) -> Decimal:
        if self.total_km > 0:
            return self.net_profit / self.total_km
        return Decimal("0")


@dataclass(frozen=True)
class ReportPoint:
    """A single dated value in a metric series."""

    date: date
    value: Decimal


@dataclass(frozen=True)
class FuelInputs:
    """Last refuel: amount paid and km driven on that tank."""

    refuel_amount: Decimal
    km_since_refuel: Decimal


@dataclass(frozen=True)
class ElectricInputs:
    """Cost of a full charge and the range it gives."""

    charge_cost: Decimal
    range_at_full_charge: Decimal


@dataclass(frozen=True)
class HybridInputs:
    """Fuel and electricity spend over a known distance."""

    fuel_spend: Decimal
    electric_spend: Decimal
    total_km: Decimal


@dataclass(frozen=True)
class AdvancedCosts:
    """Monthly fixed and variable vehicle costs.

    ``annual_taxes`` is a yearly amount and is spread over twelve months.
    """

    vehicle: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    annual_taxes: Decimal = Decimal("0")
    other: Decimal = Decimal("0")
    monthly_km: Decimal = Decimal("0")

    def has_costs(self) -> bool:
        """Return True if any cost field is positive."""
        return any(
            value > 0
            for value in (
                self.vehicle,
                self.maintenance,
                self.insurance,
                self.annual_taxes,
                self.other,
            )
        )


@dataclass(frozen=True)
class HistoryEntry:
    """A stored record paired with its net profit at the current rate."""

    record: RunRecord
    net_profit: Decimal


@dataclass(frozen=True)
class ExportRow:
    """One row of exported history."""

    date: date
    earnings: Decimal
    km: Decimal
    hours: Optional[Decimal]
    costs: Optional[Decimal]
    net_profit: Decimal
