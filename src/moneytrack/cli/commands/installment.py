"""Installment plan commands."""

import click
from moneytrack.cli.account_resolution import resolve_account_or_exit
from moneytrack.cli.error_handling import format_money
from moneytrack.domain.account import AccountService
from moneytrack.domain.installment import InstallmentService


@click.group()
def installment_group():
    """Inspect installment plans."""
    pass


@installment_group.command("list")
@click.argument("account", metavar="ACCOUNT")
@click.option("--open", "open_only", is_flag=True, help="Only installments a payment can still settle")
@click.pass_context
def list_installments(ctx, account: str, open_only: bool):
    """List the installments of an account.

    ACCOUNT can be an account name or ID. Use the ID column with
    'add --installment' to settle an installment.
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    service = InstallmentService(db)

    if open_only:
        installments = service.list_open_installments(account_id)
    else:
        installments = service.list_installments(account_id)
    if not installments:
        click.echo("No installments found.")
        return

    click.echo(f"\n{'ID':>5s} | {'#':>3s} | {'Due date':10s} | {'Amount':>12s} | {'Remaining':>12s} | Status")
    click.echo("-" * 72)
    for inst in installments:
        click.echo(
            f"{inst.id:5d} | {inst.installment_number:3d} | {inst.due_date} | "
            f"{format_money(inst.amount):>12s} | {format_money(inst.remaining_amount):>12s} | "
            f"{inst.status.value}"
        )


def register_commands(cli):
    """Register installment commands with main CLI."""
    cli.add_command(installment_group, name="installment")
