"""Dashboard command."""

import click
from invoicepulse.cli.formatting import format_money
from invoicepulse.domain.dashboard import DashboardService
from invoicepulse.domain.settings import SettingsService

BAR_WIDTH = 30


@click.command("dashboard")
@click.pass_context
def show_dashboard(ctx):
    """Show revenue metrics and the last seven days of paid revenue."""
    db = ctx.obj["db"]
    currency = SettingsService(db).get_settings().currency
    summary = DashboardService(db).build_summary()

    click.echo("\nDashboard:")
    click.echo("-" * 60)
    click.echo(f"Today's revenue:  {format_money(summary.today_revenue, currency)}")
    click.echo(f"This month:       {format_money(summary.month_revenue, currency)}")
    click.echo(f"Total revenue:    {format_money(summary.total_revenue, currency)}")
    click.echo(f"Outstanding:      {format_money(summary.outstanding_amount, currency)}")
    click.echo(f"Most used item:   {summary.most_used_item}")
    click.echo(f"Top category:     {summary.top_category}")

    click.echo("\nLast 7 days:")
    peak = max([total for _, total in summary.weekly_revenue] + [1.0])
    for day, total in summary.weekly_revenue:
        bar = "#" * int(round(BAR_WIDTH * max(total, 0) / peak))
        click.echo(f"{day:%a %m-%d} {bar:{BAR_WIDTH}s} {format_money(total, currency)}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(show_dashboard)
