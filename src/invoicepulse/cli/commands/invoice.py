"""Invoice management commands."""

from datetime import date, timedelta

import click
from invoicepulse.cli.error_handling import handle_domain_error
from invoicepulse.cli.formatting import format_money, print_invoice
from invoicepulse.domain.client import ClientService
from invoicepulse.domain.errors import DomainError, ValidationError, invoice_number_in_use
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.product import ProductService
from invoicepulse.domain.settings import SettingsService
from invoicepulse.domain.validation import validate_invoice, validate_items
from invoicepulse.utils.amount_parser import parse_amount
from invoicepulse.utils.date_parser import parse_date
from invoicepulse.utils.ids import generate_invoice_number
from invoicepulse.utils.item_parser import parse_item
from invoicepulse.utils.resolvers import resolve_client, resolve_invoice, resolve_product

DEFAULT_PAYMENT_TERM_DAYS = 14


def _parse_date_or_exit(ctx, value: str, label: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_tax_rate_or_exit(ctx, value: str) -> float:
    """Parse a tax rate given as a percentage ("5" or "5%") into a fraction."""
    try:
        return parse_amount(value) / 100
    except ValueError as e:
        click.echo(f"Error: Invalid tax rate: {e}", err=True)
        ctx.exit(1)


def _parse_items_or_exit(ctx, values: tuple[str, ...]) -> list:
    try:
        return [parse_item(value) for value in values]
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def _warn_if_number_in_use(service: InvoiceService, invoice_number: str, exclude_id: str | None = None) -> None:
    others = [i for i in service.find_by_number(invoice_number) if i.id != exclude_id]
    if others:
        click.echo(f"Warning: {invoice_number_in_use(invoice_number, len(others))}", err=True)


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("create")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--number", help="Invoice number (generated if not provided)")
@click.option("--issue-date", default="today", show_default=True, help="Issue date (YYYY-MM-DD or relative like 'today')")
@click.option("--due-date", help=f"Due date (defaults to {DEFAULT_PAYMENT_TERM_DAYS} days after issue date)")
@click.option("--tax-rate", default="0", show_default=True, help="Tax rate in percent (e.g., 5 for 5%)")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Line item as 'description|quantity|unit_price[|discount]' (repeatable)",
)
@click.option("--notes", help="Notes printed on the invoice")
@click.option("--paid", is_flag=True, help="Mark the invoice as already paid")
@click.pass_context
def create_invoice(
    ctx,
    client: str,
    number: str | None,
    issue_date: str,
    due_date: str | None,
    tax_rate: str,
    items: tuple[str, ...],
    notes: str | None,
    paid: bool,
):
    """Create an invoice.

    Examples:
        invoicepulse invoice create --client "Acme Corp" --item "Consulting|10|85" --tax-rate 5
        invoicepulse invoice create --client "Acme Corp" --number INV-2001 --due-date 2024-07-01 \\
            --item "Widget|2|50|10" --item "Shipping|1|12.50"
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        client_obj = resolve_client(ClientService(db), client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    issued = _parse_date_or_exit(ctx, issue_date, "issue date")
    due = (
        _parse_date_or_exit(ctx, due_date, "due date")
        if due_date is not None
        else issued + timedelta(days=DEFAULT_PAYMENT_TERM_DAYS)
    )
    rate = _parse_tax_rate_or_exit(ctx, tax_rate)
    line_items = _parse_items_or_exit(ctx, items)
    invoice_number = number if number is not None else generate_invoice_number()

    try:
        validate_invoice(client_obj.id, invoice_number, line_items)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _warn_if_number_in_use(service, invoice_number)

    invoice = service.create_invoice(
        client_id=client_obj.id,
        invoice_number=invoice_number,
        issue_date=issued,
        due_date=due,
        items=line_items,
        tax_rate=rate,
        is_paid=paid,
        notes=notes,
    )
    currency = SettingsService(db).get_settings().currency
    click.echo(f"Created invoice #{invoice.invoice_number} (ID: {invoice.id})")
    click.echo(f"  Client: {client_obj.name}")
    click.echo(f"  Due: {invoice.due_date}")
    click.echo(f"  Total: {format_money(invoice.total, currency)}")


@invoice_group.command("list")
@click.option("--client", help="Only invoices for this client (name or ID)")
@click.option("--unpaid", is_flag=True, help="Only unpaid invoices")
@click.option("--paid", is_flag=True, help="Only paid invoices")
@click.pass_context
def list_invoices(ctx, client: str | None, unpaid: bool, paid: bool):
    """List invoices, newest first."""
    db = ctx.obj["db"]
    service = InvoiceService(db)
    client_service = ClientService(db)
    currency = SettingsService(db).get_settings().currency

    if paid and unpaid:
        click.echo("Error: --paid and --unpaid cannot be combined.", err=True)
        ctx.exit(1)

    client_id = None
    if client is not None:
        try:
            client_id = resolve_client(client_service, client).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    paid_filter = True if paid else (False if unpaid else None)
    invoices = service.list_invoices(client_id=client_id, paid=paid_filter)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("\nInvoices:")
    click.echo("-" * 88)
    for inv in invoices:
        status = "paid" if inv.is_paid else "unpaid"
        click.echo(
            f"ID: {inv.id} | #{inv.invoice_number:12s} | {client_service.client_name(inv.client_id):20s} | "
            f"{inv.issue_date} | due {inv.due_date} | {format_money(inv.total, currency):>11s} | {status}"
        )


@invoice_group.command("show")
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def show_invoice(ctx, invoice: str):
    """Show an invoice with its lines and totals.

    INVOICE can be an invoice ID or invoice number.
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        invoice_obj = resolve_invoice(service, invoice)
    except DomainError as e:
        handle_domain_error(ctx, e)

    settings = SettingsService(db).get_settings()
    print_invoice(invoice_obj, ClientService(db).client_name(invoice_obj.client_id), settings.currency)


@invoice_group.command("update")
@click.argument("invoice", metavar="INVOICE")
@click.option("--client", help="Client name or ID")
@click.option("--number", help="Invoice number")
@click.option("--issue-date", help="Issue date")
@click.option("--due-date", help="Due date")
@click.option("--tax-rate", help="Tax rate in percent")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Replace all line items; 'description|quantity|unit_price[|discount]' (repeatable)",
)
@click.option("--notes", help="Notes")
@click.option("--clear-notes", is_flag=True, help="Remove the notes")
@click.pass_context
def update_invoice(
    ctx,
    invoice: str,
    client: str | None,
    number: str | None,
    issue_date: str | None,
    due_date: str | None,
    tax_rate: str | None,
    items: tuple[str, ...],
    notes: str | None,
    clear_notes: bool,
):
    """Update an invoice. Totals are recalculated.

    INVOICE can be an invoice ID or invoice number. Only the given fields change.
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        invoice_obj = resolve_invoice(service, invoice)
        client_id = resolve_client(ClientService(db), client).id if client is not None else None
    except DomainError as e:
        handle_domain_error(ctx, e)

    issued = _parse_date_or_exit(ctx, issue_date, "issue date") if issue_date is not None else None
    due = _parse_date_or_exit(ctx, due_date, "due date") if due_date is not None else None
    rate = _parse_tax_rate_or_exit(ctx, tax_rate) if tax_rate is not None else None
    line_items = _parse_items_or_exit(ctx, items) if items else None

    try:
        if line_items is not None:
            validate_items(line_items)
        if number is not None:
            validate_invoice(client_id or invoice_obj.client_id, number, line_items or invoice_obj.items)
        updated = service.update_invoice(
            invoice_obj.id,
            client_id=client_id,
            invoice_number=number,
            issue_date=issued,
            due_date=due,
            items=line_items,
            tax_rate=rate,
            notes=notes,
            clear_notes=clear_notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if number is not None:
        _warn_if_number_in_use(service, number, exclude_id=updated.id)

    currency = SettingsService(db).get_settings().currency
    click.echo(f"Updated invoice #{updated.invoice_number}")
    click.echo(f"  Total: {format_money(updated.total, currency)}")


@invoice_group.command("add-product")
@click.argument("invoice", metavar="INVOICE")
@click.argument("product", metavar="PRODUCT")
@click.option("--category", help="Category of the product, when the name exists in several")
@click.option("--quantity", default="1", show_default=True, help="Quantity to add")
@click.pass_context
def add_product(ctx, invoice: str, product: str, category: str | None, quantity: str):
    """Add a catalog product to an invoice.

    If the invoice already has a line for the product at its default price,
    the quantity is added to that line.

    Examples:
        invoicepulse invoice add-product INV-2001 "Widget" --quantity 3
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        amount = parse_amount(quantity)
    except ValueError as e:
        click.echo(f"Error: Invalid quantity: {e}", err=True)
        ctx.exit(1)

    try:
        invoice_obj = resolve_invoice(service, invoice)
        product_obj = resolve_product(ProductService(db), product, category=category)
        if amount <= 0:
            raise ValidationError("Quantity must be greater than 0")
        before = len(invoice_obj.items)
        updated = service.add_catalog_item(invoice_obj.id, product_obj.id, quantity=amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    currency = SettingsService(db).get_settings().currency
    if len(updated.items) == before:
        click.echo(f"Merged {amount:g} x '{product_obj.name}' into an existing line")
    else:
        click.echo(f"Added {amount:g} x '{product_obj.name}'")
    click.echo(f"  Total: {format_money(updated.total, currency)}")


@invoice_group.command("consolidate")
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def consolidate_invoice(ctx, invoice: str):
    """Merge identical lines of an invoice.

    Lines with the same description, unit price and discount are combined
    and their quantities summed.
    """
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice_obj = resolve_invoice(service, invoice)
        _, removed = service.consolidate_items(invoice_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if removed == 0:
        click.echo("No duplicate lines found.")
        return
    click.echo(f"Merged {removed} duplicate line{'s' if removed != 1 else ''}.")


@invoice_group.command("pay")
@click.argument("invoice", metavar="INVOICE")
@click.option("--unpaid", is_flag=True, help="Mark the invoice as unpaid instead")
@click.pass_context
def pay_invoice(ctx, invoice: str, unpaid: bool):
    """Mark an invoice as paid (or unpaid)."""
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice_obj = resolve_invoice(service, invoice)
        updated = service.mark_paid(invoice_obj.id, paid=not unpaid)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice #{updated.invoice_number} marked as {'paid' if updated.is_paid else 'unpaid'}")


@invoice_group.command("delete")
@click.argument("invoice", metavar="INVOICE")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_invoice(ctx, invoice: str, yes: bool):
    """Delete an invoice."""
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice_obj = resolve_invoice(service, invoice)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete invoice #{invoice_obj.invoice_number}?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_invoice(invoice_obj.id)
    click.echo(f"Deleted invoice #{invoice_obj.invoice_number}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
