"""Company settings commands."""

import click
from invoicepulse.domain.settings import SettingsService


@click.group()
def settings_group():
    """Manage company settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show company settings."""
    settings = SettingsService(ctx.obj["db"]).get_settings()

    click.echo("\nCompany settings:")
    click.echo(f"Name:     {settings.name}")
    click.echo(f"Email:    {settings.email}")
    click.echo(f"Phone:    {settings.phone}")
    click.echo(f"Currency: {settings.currency}")
    click.echo(f"Logo:     {'set' if settings.logo else 'none'}")
    click.echo("Address:")
    for line in settings.address.split("\n"):
        click.echo(f"  {line}")


@settings_group.command("set")
@click.option("--name", help="Company name")
@click.option("--email", help="Company email")
@click.option("--address", help="Company address (use \\n for line breaks)")
@click.option("--phone", help="Company phone")
@click.option("--currency", help="Currency symbol (e.g., $, €)")
@click.pass_context
def set_settings(ctx, name: str | None, email: str | None, address: str | None, phone: str | None, currency: str | None):
    """Update company settings.

    Examples:
        invoicepulse settings set --name "Pulse Studio" --currency "€"
    """
    if all(value is None for value in (name, email, address, phone, currency)):
        click.echo("Error: Nothing to update. Pass at least one option.", err=True)
        ctx.exit(1)

    if address is not None:
        address = address.replace("\\n", "\n")

    SettingsService(ctx.obj["db"]).update_settings(
        name=name, email=email, address=address, phone=phone, currency=currency
    )
    click.echo("Settings updated")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
