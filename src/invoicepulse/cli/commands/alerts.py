"""Payment alert command."""

import click
from invoicepulse.cli.formatting import format_money
from invoicepulse.domain.client import ClientService
from invoicepulse.domain.entities import AlertKind
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.settings import SettingsService
from invoicepulse.utils.date_parser import parse_date


def describe_alert(kind: AlertKind, days_left: int | None) -> str:
    """Return the short label shown for an alert."""
    if kind == AlertKind.OVERDUE:
        return "Overdue"
    if days_left == 0:
        return "Due today"
    return f"Due in {days_left} day{'s' if days_left != 1 else ''}"


@click.command("alerts")
@click.option("--date", "as_of", help="Evaluate alerts as of this date (defaults to today)")
@click.pass_context
def show_alerts(ctx, as_of: str | None):
    """Show overdue and upcoming payments.

    Unpaid invoices past their due date are overdue; those due within the
    next three days are upcoming.
    """
    db = ctx.obj["db"]
    client_service = ClientService(db)
    currency = SettingsService(db).get_settings().currency

    today = None
    if as_of is not None:
        try:
            today = parse_date(as_of)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    alerts = InvoiceService(db).get_alerts(today=today)
    if not alerts:
        click.echo("No overdue or upcoming payments.")
        return

    click.echo("\nPayment alerts:")
    click.echo("-" * 72)
    for alert in alerts:
        inv = alert.invoice
        click.echo(
            f"{describe_alert(alert.kind, alert.days_left):12s} | #{inv.invoice_number:12s} | "
            f"{client_service.client_name(inv.client_id):20s} | due {inv.due_date} | "
            f"{format_money(inv.total, currency)}"
        )


def register_commands(cli):
    """Register alerts command with main CLI."""
    cli.add_command(show_alerts)
