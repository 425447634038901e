"""Account management commands."""

import click
from moneytrack.cli.account_resolution import resolve_account_or_exit
from moneytrack.cli.error_handling import format_money, handle_domain_error
from moneytrack.domain.account import AccountService
from moneytrack.domain.entities import AccountKind, PaymentType
from moneytrack.domain.errors import DomainError
from moneytrack.domain.installment import InstallmentService
from moneytrack.domain.transaction_types import valid_transaction_types
from moneytrack.utils.amount_parser import parse_amount, parse_signed_amount
from moneytrack.utils.date_parser import parse_date

KIND_CHOICES = [kind.value for kind in AccountKind]
PAYMENT_TYPE_CHOICES = [payment_type.value for payment_type in PaymentType]


def describe_account_kind(acc) -> str:
    """Short label such as 'checking/payable' or 'savings'."""
    if acc.payment_type is not None:
        return f"{acc.kind.value}/{acc.payment_type.value}"
    return acc.kind.value


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    required=True,
    help="Account kind",
)
@click.option(
    "--payment-type",
    type=click.Choice(PAYMENT_TYPE_CHOICES, case_sensitive=False),
    help="Polarity of a checking account (required for checking)",
)
@click.option("--initial-balance", default="0", help="Opening balance (e.g., 1200 or -50.00)")
@click.option("--credit-limit", help="Credit limit (credit accounts only)")
@click.option("--installments", type=int, help="Split the initial balance into N monthly installments")
@click.option("--start-date", help="Due date of the first installment (defaults to today)")
@click.pass_context
def create_account(
    ctx,
    name: str,
    kind: str,
    payment_type: str | None,
    initial_balance: str,
    credit_limit: str | None,
    installments: int | None,
    start_date: str | None,
):
    """Create a new account.

    Examples:
        moneytrack account create "Wallet" --kind cash
        moneytrack account create "Car loan" --kind checking --payment-type payable \\
            --initial-balance 1200 --installments 12
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        balance = parse_signed_amount(initial_balance)
        limit = parse_amount(credit_limit) if credit_limit is not None else None
        created_on = parse_date(start_date) if start_date else None
        acc = service.create_account(
            user_id=ctx.obj["user_id"],
            name=name,
            kind=kind,
            initial_balance=balance,
            payment_type=payment_type,
            credit_limit=limit,
            has_installments=installments is not None,
            total_installments=installments,
            created_on=created_on,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{acc.name}' (ID: {acc.id})")
    if acc.has_installments:
        click.echo(f"Installment plan: {acc.total_installments} monthly installments")


@account_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive accounts")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List all accounts with their cached balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["user_id"])
    if active_only:
        accounts = [acc for acc in accounts if acc.is_active]
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.is_active else " (inactive)"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {describe_account_kind(acc):18s} | "
            f"{format_money(acc.calculated_balance):>14s}{status}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account, its valid transaction types and its installments.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    click.echo(f"Account: {acc.name} (ID: {acc.id})")
    click.echo(f"  Kind: {describe_account_kind(acc)}")
    click.echo(f"  Initial balance: {format_money(acc.initial_balance)}")
    click.echo(f"  Balance: {format_money(acc.calculated_balance)}")
    if acc.credit_limit is not None:
        click.echo(f"  Credit limit: {format_money(acc.credit_limit)}")
    click.echo(f"  Active: {'yes' if acc.is_active else 'no'}")
    click.echo(
        "  Transaction types: "
        + ", ".join(t.value for t in valid_transaction_types(acc))
    )

    if acc.has_installments:
        installments = InstallmentService(db).list_installments(acc.id)
        paid = sum(1 for inst in installments if not inst.is_open)
        click.echo(f"  Installments: {paid}/{len(installments)} paid")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--kind", type=click.Choice(KIND_CHOICES, case_sensitive=False), help="New account kind")
@click.option(
    "--payment-type",
    type=click.Choice(PAYMENT_TYPE_CHOICES, case_sensitive=False),
    help="New polarity (checking accounts only)",
)
@click.option("--credit-limit", help="New credit limit (credit accounts only)")
@click.option("--clear-credit-limit", is_flag=True, help="Remove the credit limit")
@click.option("--active/--inactive", "is_active", default=None, help="Mark the account active or inactive")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    kind: str | None,
    payment_type: str | None,
    credit_limit: str | None,
    clear_credit_limit: bool,
    is_active: bool | None,
) -> None:
    """Update an account.

    ACCOUNT can be an account name or ID. Changing the kind or payment type
    reinterprets every existing transaction and recomputes the balance.

    Examples:
        moneytrack account update "Car loan" --payment-type receivable
        moneytrack account update 3 --name "Old wallet" --inactive
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        limit = parse_amount(credit_limit) if credit_limit is not None else None
        acc = service.update_account(
            account_id=account_id,
            user_id=ctx.obj["user_id"],
            name=name,
            kind=kind,
            payment_type=payment_type,
            credit_limit=limit,
            is_active=is_active,
            clear_credit_limit=clear_credit_limit,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated account '{acc.name}'")
    click.echo(f"Balance: {format_money(acc.calculated_balance)}")


@account_group.command("recompute")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def recompute_account(ctx, account: str) -> None:
    """Recompute an account's balance from its transactions.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.recompute_balance(account_id)
    result = service.replay_balance(acc)
    click.echo(f"Balance of '{acc.name}': {format_money(acc.calculated_balance)}")
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account with its transactions and installments.

    ACCOUNT can be an account name or ID.

    Examples:
        moneytrack account delete "Wallet"
        moneytrack account delete 1 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    transaction_count = len(db.list_transactions(account_id=account_id))
    if not yes and not click.confirm(
        f"Delete account '{acc.name}' (ID: {account_id}) and its "
        f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id, ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{acc.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
