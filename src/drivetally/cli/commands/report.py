"""Metric report command."""

from datetime import date

import click

from drivetally.cli.date_filters import (
    collect_period_flags,
    period_options,
    resolve_cli_date_range,
)
from drivetally.cli.error_handling import handle_domain_error
from drivetally.cli.formatting import format_money
from drivetally.domain.entities import ReportMetric
from drivetally.domain.errors import DomainError
from drivetally.domain.reports import ReportService
from drivetally.utils.date_parser import get_date_range

METRIC_LABELS = {
    ReportMetric.NET_PROFIT: "Net profit",
    ReportMetric.PROFIT_PER_KM: "Net profit/km",
    ReportMetric.GROSS_EARNINGS: "Gross earnings",
    ReportMetric.GROSS_EARNINGS_PER_KM: "Gross earnings/km",
}


@click.command("report")
@click.option(
    "--metric",
    type=click.Choice([m.value for m in ReportMetric], case_sensitive=False),
    default=ReportMetric.NET_PROFIT.value,
    show_default=True,
    help="Value to report for each day",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def report(ctx, metric: str, start_date: str | None, end_date: str | None, **kwargs):
    """Show a metric for each day in a date range (default: this month).

    Examples:
        drivetally report --metric profit_per_km --last-month
        drivetally report --start-date 2024-03-01 --end-date 2024-03-31
    """
    period_flags = collect_period_flags(kwargs)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_date_range("this-month"),
    )
    start = start or date.min
    end = end or date.max
    report_metric = ReportMetric(metric.lower())

    try:
        points = ReportService(ctx.obj["db"]).metric_series(start, end, report_metric)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not points:
        click.echo("No records found in this range.")
        return

    label = METRIC_LABELS[report_metric]
    click.echo(f"\n{label} by day:")
    click.echo("-" * 30)
    for point in points:
        click.echo(f"{point.date.isoformat():<12} {format_money(point.value):>16}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
