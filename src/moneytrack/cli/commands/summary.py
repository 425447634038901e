"""Summary commands."""

from decimal import Decimal

import click
from moneytrack.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from moneytrack.cli.error_handling import format_money
from moneytrack.domain.summary import SummaryService


@click.group()
def summary_group():
    """Dashboard reports."""
    pass


@summary_group.command("balances")
@click.option("--active-only", is_flag=True, help="Leave inactive accounts out")
@click.pass_context
def balances(ctx, active_only: bool):
    """Show every account's balance and the total."""
    service = SummaryService(ctx.obj["db"])
    rows = service.account_balances(ctx.obj["user_id"], include_inactive=not active_only)
    if not rows:
        click.echo("No accounts found.")
        return

    for row in rows:
        note = f"  ({row.skipped_count} skipped)" if row.skipped_count else ""
        click.echo(f"{row.account.name:<40s} {format_money(row.balance):>20s}{note}")
    click.echo("-" * 61)
    total = sum((row.balance for row in rows), Decimal("0"))
    click.echo(f"{'Total':<40s} {format_money(total):>20s}")


@summary_group.command("monthly")
@period_options
@click.pass_context
def monthly(ctx, start_date, end_date, this_month, last_month, this_year, last_year):
    """Show the net movement per month."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(this_month, last_month, this_year, last_year),
    )
    rows = SummaryService(ctx.obj["db"]).monthly_net(ctx.obj["user_id"], start, end)
    if not rows:
        click.echo("No transactions found.")
        return

    for row in rows:
        click.echo(f"{row.period:<10s} {format_money(row.net):>20s}  ({row.count} transactions)")


@summary_group.command("categories")
@period_options
@click.pass_context
def categories(ctx, start_date, end_date, this_month, last_month, this_year, last_year):
    """Show the net movement per category."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(this_month, last_month, this_year, last_year),
    )
    rows = SummaryService(ctx.obj["db"]).category_totals(ctx.obj["user_id"], start, end)
    if not rows:
        click.echo("No transactions found.")
        return

    for row in rows:
        click.echo(
            f"{row.category_name:<30s} {row.category_type.value:8s} "
            f"{format_money(row.net):>20s}  ({row.count})"
        )


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
