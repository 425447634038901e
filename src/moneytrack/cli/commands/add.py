"""Add transaction command."""

import click
from moneytrack.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from moneytrack.cli.error_handling import format_money, handle_domain_error
from moneytrack.domain.account import AccountService
from moneytrack.domain.category import CategoryService
from moneytrack.domain.entities import TransactionType
from moneytrack.domain.transaction import TransactionService
from moneytrack.utils.amount_parser import parse_amount
from moneytrack.utils.date_parser import parse_date

TYPE_CHOICES = [txn_type.value for txn_type in TransactionType]


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    required=True,
    help="Transaction type (income/expense, or payment/credit on checking accounts)",
)
@click.option("--amount", required=True, help="Positive transaction amount (e.g., 123.45)")
@click.option("--category", required=True, help="Category name or ID")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Transaction description")
@click.option("--installment", "installment_id", type=int, help="ID of the installment this payment settles")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    txn_type: str,
    amount: str,
    category: str,
    date: str,
    description: str | None,
    installment_id: int | None,
):
    """Add a transaction to an account.

    Examples:
        moneytrack add --account Wallet --type expense --amount 12.50 --category Groceries
        moneytrack add --account "Car loan" --type payment --amount 100 \\
            --category "Debt Payments" --installment 4
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    category_id = resolve_category_or_exit(ctx, category_service, category)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
        posting = transaction_service.create_transaction(
            user_id=ctx.obj["user_id"],
            account_id=account_id,
            category_id=category_id,
            date=txn_date,
            amount=txn_amount,
            type=txn_type,
            description=description,
            installment_id=installment_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = posting.transaction
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Account: {posting.account.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Amount: {format_money(txn.amount)}")
    if description:
        click.echo(f"  Description: {description}")
    if posting.installment is not None:
        inst = posting.installment
        click.echo(
            f"  Installment #{inst.installment_number}: {inst.status.value}, "
            f"remaining {format_money(inst.remaining_amount)}"
        )
    click.echo(f"  New balance: {format_money(posting.account.calculated_balance)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
