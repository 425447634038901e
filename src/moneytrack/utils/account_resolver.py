"""Utility for resolving account names to IDs."""

from moneytrack.domain.account import AccountService
from moneytrack.domain.errors import AccountNotFound


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve a user's account name or ID to the account ID.

    Numeric input is tried as an ID first, then as a name.

    Raises:
        AccountNotFound: If no account of this user matches
    """
    accounts = account_service.list_accounts(user_id)

    try:
        account_id = int(account)
    except (TypeError, ValueError):
        account_id = None

    if account_id is not None:
        for acc in accounts:
            if acc.id == account_id:
                return acc.id

    for acc in accounts:
        if acc.name == str(account):
            return acc.id

    raise AccountNotFound(f"Account '{account}' not found")
