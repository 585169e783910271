"""Periodic summary command."""

from decimal import Decimal

import click

from drivetally.cli.error_handling import handle_domain_error
from drivetally.cli.formatting import format_money
from drivetally.domain.entities import PeriodType
from drivetally.domain.errors import DomainError
from drivetally.domain.reports import ReportService

PERIOD_HEADINGS = {
    PeriodType.WEEKLY: "Week of",
    PeriodType.MONTHLY: "Month",
    PeriodType.ANNUAL: "Year",
}


@click.command("summary")
@click.option(
    "--period",
    type=click.Choice([p.value for p in PeriodType], case_sensitive=False),
    default=PeriodType.MONTHLY.value,
    show_default=True,
    help="Group records by week (starting Sunday), month or year",
)
@click.pass_context
def summary(ctx, period: str):
    """Show earnings, costs and net profit per period."""
    period_type = PeriodType(period.lower())
    try:
        buckets = ReportService(ctx.obj["db"]).periodic_summary(period_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not buckets:
        click.echo("No records found.")
        return

    click.echo(f"\n{period_type.value.capitalize()} Summary:")
    click.echo("-" * 90)
    click.echo(
        f"{PERIOD_HEADINGS[period_type]:<12} {'Days':>5} {'Earnings':>14} {'Costs':>14} "
        f"{'Km':>10} {'Net profit':>14} {'Profit/km':>12}"
    )
    click.echo("-" * 90)

    for bucket in buckets:
        click.echo(
            f"{bucket.key:<12} {bucket.record_count:>5} {format_money(bucket.total_earnings):>14} "
            f"{format_money(bucket.total_costs):>14} {str(bucket.total_km):>10} "
            f"{format_money(bucket.net_profit):>14} {format_money(bucket.profit_per_km):>12}"
        )

    total_net = sum((bucket.net_profit for bucket in buckets), Decimal("0"))
    click.echo("-" * 90)
    click.echo(f"{'TOTAL':<12} {'':>5} {'':>14} {'':>14} {'':>10} {format_money(total_net):>14}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
