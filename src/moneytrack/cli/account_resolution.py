"""CLI helpers for account and category resolution."""

from __future__ import annotations

import click
from moneytrack.domain.account import AccountService
from moneytrack.domain.category import CategoryService
from moneytrack.domain.errors import NotFoundError
from moneytrack.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID for the current user, or exit with a CLI error."""
    try:
        return resolve_account(account_service, ctx.obj["user_id"], account)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, category: str
) -> int:
    """Resolve category name or ID for the current user, or exit with a CLI error."""
    user_id = ctx.obj["user_id"]
    try:
        if category.isdigit():
            return category_service.require_category(int(category), user_id).id
        return category_service.require_category_by_name(user_id, category).id
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
