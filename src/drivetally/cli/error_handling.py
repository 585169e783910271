"""Rendering of domain errors raised inside CLI commands."""

import click
import structlog

from drivetally.domain.errors import DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print the error on stderr and exit the command with status 1.

    The error type and failing command are logged at debug level, so
    ``--verbose`` shows which rule rejected the input.
    """
    logger.debug(
        "command_failed",
        command=ctx.command_path,
        error_type=type(error).__name__,
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
