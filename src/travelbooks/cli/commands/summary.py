"""Summary command."""

import click

from travelbooks.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from travelbooks.cli.output import CURRENCY_CHOICE, display_amount, format_money, resolve_display_currency
from travelbooks.domain.dashboard import DashboardService


@click.command("summary")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--currency", type=CURRENCY_CHOICE, help="Show totals in this currency")
@click.pass_context
def summary(ctx, start_date, end_date, currency, **periods):
    """Show headline totals for bookings, collections and expenses.

    Cancelled and voided bookings are excluded. Expenses exclude supplier
    payments, which settle booking costs.
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    shown_in = resolve_display_currency(ctx, currency)
    rates = ctx.obj["rates"]
    report = DashboardService(ctx.obj["db"]).summary(start_date=start, end_date=end)

    def money(value):
        return format_money(display_amount(rates, value, shown_in))

    click.echo(f"\nSummary (amounts in {shown_in.value}):")
    click.echo("-" * 60)
    click.echo(f"{'Bookings':<30} {report.bookings_count:>20}")
    click.echo(f"{'Total sales':<30} {money(report.total_sales):>20}")
    click.echo(f"{'Collected':<30} {money(report.total_collected):>20}")
    click.echo(f"{'Pending':<30} {money(report.total_pending):>20}")
    click.echo(f"{'Cost of sales':<30} {money(report.total_cost):>20}")
    click.echo(f"{'Gross profit':<30} {money(report.total_profit):>20}")
    click.echo(f"{'Operating expenses':<30} {money(report.total_expenses):>20}")
    click.echo("-" * 60)
    click.echo(f"{'Net profit':<30} {money(report.total_profit - report.total_expenses):>20}")

    if report.treasury_balances:
        click.echo("\nTreasury balances:")
        for name, balance in report.treasury_balances.items():
            click.echo(f"    {name:<26} {format_money(balance):>20}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
