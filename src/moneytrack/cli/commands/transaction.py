"""Transaction management commands."""

import click
from moneytrack.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from moneytrack.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from moneytrack.cli.error_handling import format_money, handle_domain_error
from moneytrack.domain.account import AccountService
from moneytrack.domain.category import CategoryService
from moneytrack.domain.entities import TransactionType
from moneytrack.domain.transaction import TransactionService
from moneytrack.utils.amount_parser import parse_amount
from moneytrack.utils.date_parser import parse_date

TYPE_CHOICES = [txn_type.value for txn_type in TransactionType]


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@period_options
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--verbose", "-v", is_flag=True, help="Show description and installment link")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    account: str | None,
    category: str | None,
    verbose: bool,
):
    """View transactions with optional filters, newest first.

    Account and category can be given by name or ID.
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(this_month, last_month, this_year, last_year),
    )

    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    category_id = resolve_category_or_exit(ctx, category_service, category) if category else None

    transactions = service.list_transactions(
        user_id=user_id,
        account_id=account_id,
        category_id=category_id,
        start_date=start,
        end_date=end,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts(user_id)}
    categories = {cat.id: cat.name for cat in category_service.list_categories(user_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 96)
    for txn in transactions:
        click.echo(
            f"{txn.id:5d} | {txn.date} | {accounts.get(txn.account_id, 'Unknown'):20s} | "
            f"{txn.type.value:8s} | {format_money(txn.amount):>12s} | "
            f"{categories.get(txn.category_id, 'Unknown')}"
        )
        if verbose:
            if txn.description:
                click.echo(f"        Description: {txn.description}")
            if txn.installment_id is not None:
                click.echo(f"        Installment: {txn.installment_id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), help="Transaction type")
@click.option("--amount", help="Positive transaction amount")
@click.option("--category", help="Category name or ID")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--description", help="Transaction description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    txn_type: str | None,
    amount: str | None,
    category: str | None,
    date: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided and recomputes the balance
    of every affected account.

    Examples:
        moneytrack transaction update 1 --amount 75.00
        moneytrack transaction update 1 --account Savings --category Salary
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), category)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        posting = transaction_service.update_transaction(
            transaction_id=transaction_id,
            user_id=ctx.obj["user_id"],
            account_id=account_id,
            category_id=category_id,
            date=txn_date,
            amount=parse_amount(amount) if amount is not None else None,
            type=txn_type,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")
    click.echo(f"Balance of '{posting.account.name}': {format_money(posting.account.calculated_balance)}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction and recompute its account balance."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        acc = service.delete_transaction(transaction_id, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")
    click.echo(f"Balance of '{acc.name}': {format_money(acc.calculated_balance)}")


@transaction_group.command("clone")
@click.argument("transaction_id", type=int)
@click.option("--date", help="Date of the copy (defaults to the original date)")
@click.pass_context
def clone_transaction(ctx, transaction_id: int, date: str | None) -> None:
    """Copy a transaction, optionally to another date.

    The copy is never linked to an installment.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn_date = parse_date(date) if date else None
        posting = service.clone_transaction(transaction_id, ctx.obj["user_id"], date=txn_date)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {posting.transaction.id} from {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
