"""Premium tier commands."""

import click

from drivetally.domain.entitlements import FREE_RECORD_LIMIT
from drivetally.domain.settings import EntitlementService


@click.group()
def premium_group():
    """Show or change the premium tier."""
    pass


@premium_group.command("status")
@click.pass_context
def status(ctx):
    """Show whether premium features are unlocked."""
    entitlements = EntitlementService(ctx.obj["db"]).get_entitlements()
    if entitlements.is_premium:
        click.echo("Premium: active")
        click.echo("  Unlimited records, advanced cost calculator, reports, export and AI analysis.")
    else:
        click.echo("Premium: inactive")
        click.echo(f"  Free tier: up to {FREE_RECORD_LIMIT} records.")


@premium_group.command("activate")
@click.pass_context
def activate(ctx):
    """Unlock premium features."""
    EntitlementService(ctx.obj["db"]).set_premium(True)
    click.echo("Premium activated.")


@premium_group.command("deactivate")
@click.pass_context
def deactivate(ctx):
    """Return to the free tier. Stored records are kept."""
    EntitlementService(ctx.obj["db"]).set_premium(False)
    click.echo("Premium deactivated.")


def register_commands(cli):
    """Register premium commands with main CLI."""
    cli.add_command(premium_group, name="premium")
