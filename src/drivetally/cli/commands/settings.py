"""Settings commands: show, set the cost per km, or derive it."""

import click

from drivetally.cli.error_handling import handle_domain_error
from drivetally.cli.formatting import format_money
from drivetally.domain.calculator import require_number
from drivetally.domain.cost_model import round_for_display
from drivetally.domain.entities import (
    AdvancedCosts,
    CostMode,
    ElectricInputs,
    FuelInputs,
    HybridInputs,
)
from drivetally.domain.errors import DomainError, InvalidInputError, must_not_be_negative
from drivetally.domain.settings import SettingsService

# Input fields of each calculator mode
MODE_FIELDS = {
    CostMode.FUEL: ("refuel_amount", "km_since_refuel"),
    CostMode.ELECTRIC: ("charge_cost", "range_at_full_charge"),
    CostMode.HYBRID: ("fuel_spend", "electric_spend", "total_km"),
}

MODE_INPUTS = {
    CostMode.FUEL: FuelInputs,
    CostMode.ELECTRIC: ElectricInputs,
    CostMode.HYBRID: HybridInputs,
}

ADVANCED_FIELDS = ("vehicle", "maintenance", "insurance", "annual_taxes", "other", "monthly_km")


def _number_or_zero(value: str | None, field_name: str):
    if value is None or not value.strip():
        return require_number("0", field_name)
    return require_number(value, field_name)


def build_mode_inputs(mode: CostMode, values: dict[str, str | None]):
    """Build the inputs for a mode, or None if none of its fields were given."""
    fields = MODE_FIELDS[mode]
    if all(values.get(name) in (None, "") for name in fields):
        return None
    kwargs = {
        name: _number_or_zero(values.get(name), name.replace("_", " ").capitalize())
        for name in fields
    }
    return MODE_INPUTS[mode](**kwargs)


def build_advanced_costs(values: dict[str, str | None]) -> AdvancedCosts | None:
    """Build advanced costs, or None if none of the fields were given."""
    if all(values.get(name) in (None, "") for name in ADVANCED_FIELDS):
        return None
    amounts = {}
    for name in ADVANCED_FIELDS:
        label = name.replace("_", " ").capitalize()
        amount = _number_or_zero(values.get(name), label)
        if amount < 0:
            raise InvalidInputError(must_not_be_negative(label))
        amounts[name] = amount
    return AdvancedCosts(**amounts)


@click.group()
def settings_group():
    """Manage the vehicle cost per km."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    settings = SettingsService(ctx.obj["db"]).get_settings()
    click.echo(f"Cost per km: {format_money(settings.cost_per_km)} ({settings.cost_per_km})")


@settings_group.command("set-cost")
@click.argument("cost_per_km")
@click.pass_context
def set_cost(ctx, cost_per_km: str):
    """Save the vehicle cost per km (e.g., 0.75)."""
    try:
        settings = SettingsService(ctx.obj["db"]).save_cost_per_km(cost_per_km)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Cost per km saved: {settings.cost_per_km}")


@settings_group.command("derive")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in CostMode], case_sensitive=False),
    default=CostMode.FUEL.value,
    show_default=True,
    help="Which vehicle type the inputs describe",
)
@click.option("--refuel-amount", help="Fuel mode: amount paid at the last refuel")
@click.option("--km-since-refuel", help="Fuel mode: km driven on that refuel")
@click.option("--charge-cost", help="Electric mode: cost of a full charge")
@click.option("--range-at-full-charge", help="Electric mode: km per full charge")
@click.option("--fuel-spend", help="Hybrid mode: fuel spend over the period")
@click.option("--electric-spend", help="Hybrid mode: electricity spend over the period")
@click.option("--total-km", help="Hybrid mode: km driven over the period")
@click.option("--vehicle", help="Monthly vehicle payment or rent (premium)")
@click.option("--maintenance", help="Monthly maintenance (premium)")
@click.option("--insurance", help="Monthly insurance (premium)")
@click.option("--annual-taxes", help="Yearly taxes and fees (premium)")
@click.option("--other", help="Other monthly costs (premium)")
@click.option("--monthly-km", help="Average km driven per month (premium)")
@click.option("--save", is_flag=True, help="Save the derived value as the cost per km")
@click.pass_context
def derive(ctx, mode: str, save: bool, **values):
    """Work out the cost per km from fuel, charging or monthly costs.

    Examples:
        drivetally settings derive --refuel-amount 250 --km-since-refuel 450
        drivetally settings derive --mode electric --charge-cost 30 --range-at-full-charge 300 --save
    """
    service = SettingsService(ctx.obj["db"])
    cost_mode = CostMode(mode.lower())

    try:
        inputs = build_mode_inputs(cost_mode, values)
        advanced = build_advanced_costs(values)
        cost = service.derive_cost_per_km(cost_mode, inputs, advanced)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    rounded = round_for_display(cost)
    click.echo(f"Derived cost per km: {rounded}")
    if save:
        service.save_cost_per_km(rounded)
        click.echo("Saved.")
    else:
        click.echo("Run with --save (or 'drivetally settings set-cost') to keep it.")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
