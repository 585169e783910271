"""Run record commands: calc, add, edit, show, delete, history."""

import click

from drivetally.cli.error_handling import handle_domain_error
from drivetally.cli.formatting import format_money, format_optional
from drivetally.domain.entities import CalculationResult, RunRecord, UpsertOutcome
from drivetally.domain.errors import DomainError, date_conflict
from drivetally.domain.records import HISTORY_LIMIT, RecordService
from drivetally.utils.date_parser import parse_date

OUTCOME_MESSAGES = {
    UpsertOutcome.INSERTED: "Record saved",
    UpsertOutcome.UPDATED: "Record updated",
    UpsertOutcome.REPLACED: "Record overwritten",
}


def _echo_result(result: CalculationResult) -> None:
    click.echo(f"  Total earnings:       {format_money(result.total_earnings):>12}")
    click.echo(f"  Gross earnings/km:    {format_money(result.gross_earnings_per_km):>12}")
    click.echo(f"  Gross profit:         {format_money(result.gross_profit):>12}")
    click.echo(f"  Vehicle cost:         {format_money(result.car_cost):>12}")
    click.echo(f"  Net profit:           {format_money(result.net_profit):>12}")
    click.echo(f"  Net profit/km:        {format_money(result.profit_per_km):>12}")
    click.echo(f"  Net profit/hour:      {format_money(result.profit_per_hour):>12}")


def _echo_record(record: RunRecord) -> None:
    click.echo(f"  ID: {record.id}")
    click.echo(f"  Date: {record.date.isoformat()}")
    click.echo(f"  Earnings: {format_money(record.total_earnings)}")
    click.echo(f"  Km driven: {record.km_driven}")
    click.echo(f"  Hours worked: {format_optional(record.hours_worked)}")
    additional = (
        format_money(record.additional_costs)
        if record.additional_costs is not None
        else "-"
    )
    click.echo(f"  Additional costs: {additional}")


def _save_with_confirmation(ctx, service: RecordService, record: RunRecord, yes: bool) -> None:
    """Warn about a same-date record, then calculate and save."""
    plan = service.plan_save(record)
    if plan.conflict is not None:
        click.echo(f"Warning: {date_conflict(record.date)}")
        if not yes and not click.confirm("Continue?"):
            click.echo("Cancelled.")
            return

    try:
        result = service.calculate(
            record.total_earnings,
            record.km_driven,
            record.hours_worked,
            record.additional_costs,
        )
        outcome = service.save_record(record)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"{OUTCOME_MESSAGES[outcome]} for {record.date.isoformat()} (ID: {record.id})")
    _echo_result(result)


@click.command("calc")
@click.option("--earnings", required=True, help="Total earnings for the day (e.g., 310.50)")
@click.option("--km", required=True, help="Km driven (must be greater than zero)")
@click.option("--hours", help="Hours worked")
@click.option("--costs", help="Additional costs (tolls, food, washing)")
@click.pass_context
def calc(ctx, earnings: str, km: str, hours: str | None, costs: str | None):
    """Calculate a day's profit without saving it.

    Examples:
        drivetally calc --earnings 310.50 --km 180 --hours 8
    """
    service = RecordService(ctx.obj["db"])
    try:
        result = service.calculate(earnings, km, hours, costs)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    cost_per_km = service.settings_service.get_settings().cost_per_km
    click.echo(f"Day summary (vehicle cost {format_money(cost_per_km)}/km):")
    _echo_result(result)


@click.command("add")
@click.option(
    "--date",
    "day",
    default="today",
    show_default=True,
    help="Date worked (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--earnings", required=True, help="Total earnings for the day")
@click.option("--km", required=True, help="Km driven (must be greater than zero)")
@click.option("--hours", help="Hours worked")
@click.option("--costs", help="Additional costs (tolls, food, washing)")
@click.option("--yes", "-y", is_flag=True, help="Overwrite a record on the same date without asking")
@click.pass_context
def add_record(
    ctx,
    day: str,
    earnings: str,
    km: str,
    hours: str | None,
    costs: str | None,
    yes: bool,
):
    """Calculate and save a day's record.

    Only one record is kept per date; saving a second record for the same
    date replaces the first.

    Examples:
        drivetally add --date 2024-03-01 --earnings 310.50 --km 180 --hours 8
        drivetally add --earnings 250 --km 140 --costs 12.50
    """
    service = RecordService(ctx.obj["db"])

    try:
        record_date = parse_date(day)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        record = service.build_record(record_date, earnings, km, hours, costs)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _save_with_confirmation(ctx, service, record, yes)


@click.command("edit")
@click.argument("record_id")
@click.option("--date", "day", help="New date")
@click.option("--earnings", help="New total earnings")
@click.option("--km", help="New km driven")
@click.option("--hours", help="New hours worked (empty string to clear)")
@click.option("--costs", help="New additional costs (empty string to clear)")
@click.option("--yes", "-y", is_flag=True, help="Overwrite a record on the same date without asking")
@click.pass_context
def edit_record(
    ctx,
    record_id: str,
    day: str | None,
    earnings: str | None,
    km: str | None,
    hours: str | None,
    costs: str | None,
    yes: bool,
):
    """Edit a saved record.

    Updates only the fields that are provided.

    Examples:
        drivetally edit 3f2a... --earnings 320
        drivetally edit 3f2a... --hours ""  # Clear hours
    """
    service = RecordService(ctx.obj["db"])
    try:
        existing = service.require_record(record_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    record_date = existing.date
    if day is not None:
        try:
            record_date = parse_date(day)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        record = service.build_record(
            record_date,
            earnings if earnings is not None else existing.total_earnings,
            km if km is not None else existing.km_driven,
            hours if hours is not None else existing.hours_worked,
            costs if costs is not None else existing.additional_costs,
            record_id=existing.id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _save_with_confirmation(ctx, service, record, yes)


@click.command("show")
@click.argument("record_id")
@click.pass_context
def show_record(ctx, record_id: str):
    """Show a record with its results at the current cost per km."""
    service = RecordService(ctx.obj["db"])
    try:
        record = service.require_record(record_id)
        result = service.calculate(
            record.total_earnings,
            record.km_driven,
            record.hours_worked,
            record.additional_costs,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Details for {record.date.isoformat()}:")
    _echo_record(record)
    click.echo("Results:")
    _echo_result(result)


@click.command("delete")
@click.argument("record_id")
@click.option("--yes", "-y", is_flag=True, help="Delete without asking")
@click.pass_context
def delete_record(ctx, record_id: str, yes: bool):
    """Delete a record."""
    service = RecordService(ctx.obj["db"])
    try:
        record = service.require_record(record_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(
        f"Are you sure you want to delete the record for {record.date.isoformat()}?"
    ):
        click.echo("Cancelled.")
        return

    service.delete_record(record.id)
    click.echo(f"Deleted record for {record.date.isoformat()}")


@click.command("history")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=HISTORY_LIMIT,
    show_default=True,
    help="Number of most recent records to show",
)
@click.pass_context
def history(ctx, limit: int):
    """List the most recent records with their net profit."""
    service = RecordService(ctx.obj["db"])
    try:
        entries = service.recent_history(limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not entries:
        click.echo("No records found.")
        return

    click.echo(f"\nLast {len(entries)} record(s):")
    click.echo("-" * 90)
    click.echo(
        f"{'Date':<12} {'Earnings':>12} {'Km':>10} {'Net profit':>14}  {'ID':<32}"
    )
    click.echo("-" * 90)
    for entry in entries:
        record = entry.record
        click.echo(
            f"{record.date.isoformat():<12} {format_money(record.total_earnings):>12} "
            f"{str(record.km_driven):>10} {format_money(entry.net_profit):>14}  {record.id:<32}"
        )


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(calc)
    cli.add_command(add_record)
    cli.add_command(edit_record)
    cli.add_command(show_record)
    cli.add_command(delete_record)
    cli.add_command(history)
