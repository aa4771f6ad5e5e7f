"""Display helpers shared by commands."""

import click

from invoicepulse.domain.entities import Invoice
from invoicepulse.domain.line_items import has_possible_duplicates
from invoicepulse.domain.totals import line_total


def format_money(amount: float, currency: str) -> str:
    """Format an amount with two decimals and the currency symbol."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def format_quantity(quantity: float) -> str:
    """Show whole quantities without a decimal part."""
    return str(int(quantity)) if float(quantity).is_integer() else f"{quantity:g}"


def print_invoice(invoice: Invoice, client_name: str, currency: str) -> None:
    """Print an invoice with its lines and totals."""
    status = "PAID" if invoice.is_paid else "UNPAID"
    click.echo(f"\nInvoice #{invoice.invoice_number} (ID: {invoice.id}) [{status}]")
    click.echo(f"Client:   {client_name}")
    click.echo(f"Issued:   {invoice.issue_date}")
    click.echo(f"Due:      {invoice.due_date}")
    click.echo("-" * 72)
    for position, item in enumerate(invoice.items, start=1):
        lines = item.description.split("\n")
        discount = f" -{item.discount:g}%" if item.discount else ""
        click.echo(
            f"{position:2d}. {lines[0]:34s} {format_quantity(item.quantity):>5s} x "
            f"{format_money(item.unit_price, currency):>10s}{discount:6s} "
            f"{format_money(line_total(item), currency):>11s}"
        )
        for extra in lines[1:]:
            click.echo(f"    {extra}")
    click.echo("-" * 72)
    click.echo(f"{'Subtotal:':>58s} {format_money(invoice.subtotal, currency):>12s}")
    tax_label = f"Tax ({invoice.tax_rate * 100:g}%):"
    click.echo(f"{tax_label:>58s} {format_money(invoice.tax_amount, currency):>12s}")
    click.echo(f"{'Total:':>58s} {format_money(invoice.total, currency):>12s}")
    if invoice.notes:
        click.echo(f"\nNotes: {invoice.notes}")
    if has_possible_duplicates(invoice.items):
        click.echo(
            f"\nThis invoice may contain duplicate lines. "
            f"Run 'invoice consolidate {invoice.id}' to merge them."
        )
