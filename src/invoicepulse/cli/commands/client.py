"""Client management commands."""

import click
from invoicepulse.cli.error_handling import handle_domain_error
from invoicepulse.domain.client import ClientService
from invoicepulse.domain.errors import DomainError
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.validation import validate_client
from invoicepulse.utils.resolvers import resolve_client


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("add")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--email", required=True, help="Client email address")
@click.option("--address", required=True, help="Postal address")
@click.option("--phone", required=True, help="Phone number")
@click.pass_context
def add_client(ctx, name: str, email: str, address: str, phone: str):
    """Add a new client.

    Examples:
        invoicepulse client add "Acme Corp" --email billing@acme.test --address "1 Main St" --phone "555-0100"
    """
    service = ClientService(ctx.obj["db"])

    try:
        validate_client(name=name, email=email, address=address, phone=phone)
    except DomainError as e:
        handle_domain_error(ctx, e)

    client = service.create_client(name=name, email=email, address=address, phone=phone)
    click.echo(f"Created client '{client.name}' (ID: {client.id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    service = ClientService(ctx.obj["db"])

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 72)
    for c in clients:
        click.echo(f"ID: {c.id} | {c.name:24s} | {c.email:28s} | {c.phone}")


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show a client and its invoices.

    CLIENT can be a client name or ID.
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_obj = resolve_client(service, client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{client_obj.name} (ID: {client_obj.id})")
    click.echo(f"Email:   {client_obj.email}")
    click.echo(f"Phone:   {client_obj.phone}")
    click.echo(f"Address: {client_obj.address}")

    invoices = InvoiceService(db).list_invoices(client_id=client_obj.id)
    click.echo(f"Invoices: {len(invoices)}")
    for inv in invoices:
        status = "paid" if inv.is_paid else "unpaid"
        click.echo(f"  #{inv.invoice_number} | due {inv.due_date} | {inv.total:,.2f} | {status}")


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New client name")
@click.option("--email", help="New email address")
@click.option("--address", help="New postal address")
@click.option("--phone", help="New phone number")
@click.pass_context
def update_client(ctx, client: str, name: str | None, email: str | None, address: str | None, phone: str | None):
    """Update a client.

    Updates only the fields that are provided. CLIENT can be a client name or ID.

    Examples:
        invoicepulse client update "Acme Corp" --phone "555-0199"
    """
    service = ClientService(ctx.obj["db"])

    try:
        current = resolve_client(service, client)
        validate_client(
            name=name if name is not None else current.name,
            email=email if email is not None else current.email,
            address=address if address is not None else current.address,
            phone=phone if phone is not None else current.phone,
        )
        updated = service.update_client(current.id, name=name, email=email, address=address, phone=phone)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated client '{updated.name}'")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, yes: bool):
    """Delete a client.

    CLIENT can be a client name or ID. Invoices issued to the client are kept
    and will show the client as unknown.
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_obj = resolve_client(service, client)
    except DomainError as e:
        handle_domain_error(ctx, e)

    invoice_count = len(InvoiceService(db).list_invoices(client_id=client_obj.id))
    if invoice_count:
        click.echo(
            f"Warning: {invoice_count} invoice{'s' if invoice_count != 1 else ''} "
            f"reference '{client_obj.name}' and will show an unknown client."
        )

    if not yes and not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete_client(client_obj.id)
    click.echo(f"Deleted client '{client_obj.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
