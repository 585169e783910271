"""AI performance analysis command."""

import click

from drivetally.cli.error_handling import handle_domain_error
from drivetally.domain.analysis import AnalysisService
from drivetally.domain.errors import DomainError
from drivetally.services.gemini import GeminiTextGenerator


@click.command("analyze")
@click.pass_context
def analyze(ctx):
    """Ask the AI service for insights on your records.

    Needs at least five records and GEMINI_API_KEY set in the environment.
    """
    generator = ctx.obj.get("text_generator") or GeminiTextGenerator()
    service = AnalysisService(ctx.obj["db"], generator)

    click.echo("Analysing...", err=True)
    try:
        text = service.analyze()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(text)


def register_commands(cli):
    """Register analyze command with main CLI."""
    cli.add_command(analyze)
