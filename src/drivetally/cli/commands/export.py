"""CSV export command."""

import click

from drivetally.cli.date_filters import resolve_cli_date_range
from drivetally.cli.error_handling import handle_domain_error
from drivetally.domain.errors import DomainError
from drivetally.domain.export import write_csv
from drivetally.domain.reports import ReportService


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    help="File to write (default: standard output)",
)
@click.option("--start-date", help="Only export records from this date")
@click.option("--end-date", help="Only export records up to this date")
@click.pass_context
def export(ctx, output: str, start_date: str | None, end_date: str | None):
    """Export records with their net profit as CSV.

    Examples:
        drivetally export -o history.csv
        drivetally export --start-date 2024-01-01 --end-date 2024-06-30
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags={}
    )

    try:
        rows = ReportService(ctx.obj["db"]).export_rows(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    with click.open_file(output, "w", encoding="utf-8") as stream:
        count = write_csv(rows, stream)

    if output != "-":
        click.echo(f"Exported {count} record(s) to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
