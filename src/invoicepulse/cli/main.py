"""Main CLI entry point."""

import logging

import click
from invoicepulse.database.factories import create_sqlite_database

# Import and register all commands at module level
from invoicepulse.cli.commands import (
    client,
    product,
    invoice,
    alerts,
    settings,
    dashboard,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides INVOICEPULSE_DB_PATH environment variable)",
    envvar="INVOICEPULSE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="INVOICEPULSE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Invoicepulse - Local invoicing application.

    Manage clients, a product catalog and invoices, and keep an eye on
    overdue and upcoming payments.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
product.register_commands(cli)
invoice.register_commands(cli)
alerts.register_commands(cli)
settings.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
