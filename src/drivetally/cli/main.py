"""Main CLI entry point."""

import click

from drivetally import __version__
from drivetally.database.factories import create_sqlite_database
from drivetally.logging_config import configure_logging

# Import and register all commands at module level
from drivetally.cli.commands import (
    analyze,
    export,
    premium,
    record,
    report,
    settings,
    summary,
)


@click.group()
@click.version_option(version=__version__, prog_name="drivetally")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DRIVETALLY_DB_PATH environment variable)",
    envvar="DRIVETALLY_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Drivetally - profit calculator for rideshare and delivery drivers.

    Record each day's earnings, distance, hours and extra costs, and see what
    you actually made after vehicle costs.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
record.register_commands(cli)
settings.register_commands(cli)
premium.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
analyze.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
