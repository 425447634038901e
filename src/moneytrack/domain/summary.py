"""Dashboard summary domain service."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from moneytrack.database.base import Database
from moneytrack.domain.balance import compute_balance
from moneytrack.domain.entities import (
    Account,
    AccountBalance,
    CategoryTotal,
    MonthlyNet,
    Transaction,
)
from moneytrack.domain.transaction_types import sign_table

logger = logging.getLogger(__name__)


def period_key(day: date) -> str:
    """Return the YYYY-MM month key for a date."""
    return f"{day.year:04d}-{day.month:02d}"


class SummaryService:
    """Service for building dashboard reports.

    Reports are always replayed from the stored transactions; cached
    account balances are not read.
    """

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def account_balances(self, user_id: str, include_inactive: bool = True) -> list[AccountBalance]:
        """Replay the balance of each of a user's accounts.

        Args:
            user_id: Owner of the accounts
            include_inactive: If False, skip accounts marked inactive

        Returns:
            One AccountBalance per account, ordered by account name
        """
        accounts = self.db.list_accounts(user_id)
        if not include_inactive:
            accounts = [acc for acc in accounts if acc.is_active]

        by_account: dict[int, list[Transaction]] = defaultdict(list)
        for txn in self.db.list_transactions(user_id=user_id):
            by_account[txn.account_id].append(txn)

        rows = []
        for account in accounts:
            result = compute_balance(account, by_account.get(account.id, []))
            rows.append(
                AccountBalance(
                    account=account,
                    balance=result.balance,
                    skipped_count=len(result.warnings),
                )
            )
        return rows

    def total_balance(self, user_id: str, include_inactive: bool = True) -> Decimal:
        """Sum of the replayed balances of a user's accounts."""
        return sum(
            (row.balance for row in self.account_balances(user_id, include_inactive)),
            Decimal("0"),
        )

    def monthly_net(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[MonthlyNet]:
        """Signed sum of transactions per calendar month.

        Each transaction is signed with its owning account's current
        polarity. Transactions the account no longer accepts are left out.

        Returns:
            MonthlyNet rows ordered by period
        """
        accounts = {acc.id: acc for acc in self.db.list_accounts(user_id)}
        transactions = self.db.list_transactions(
            user_id=user_id, start_date=start_date, end_date=end_date
        )

        totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        counts: dict[str, int] = defaultdict(int)
        for txn, signed in self._signed_amounts(accounts, transactions):
            key = period_key(txn.date)
            totals[key] += signed
            counts[key] += 1

        return [
            MonthlyNet(period=key, net=totals[key], count=counts[key])
            for key in sorted(totals)
        ]

    def category_totals(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CategoryTotal]:
        """Signed sum and count of transactions per category.

        Returns:
            CategoryTotal rows ordered by category name
        """
        accounts = {acc.id: acc for acc in self.db.list_accounts(user_id)}
        categories = {cat.id: cat for cat in self.db.list_categories(user_id)}
        transactions = self.db.list_transactions(
            user_id=user_id, start_date=start_date, end_date=end_date
        )

        totals: dict[int, Decimal] = defaultdict(lambda: Decimal("0"))
        counts: dict[int, int] = defaultdict(int)
        for txn, signed in self._signed_amounts(accounts, transactions):
            totals[txn.category_id] += signed
            counts[txn.category_id] += 1

        rows = []
        for category_id, net in totals.items():
            category = categories.get(category_id)
            if category is None:
                continue
            rows.append(
                CategoryTotal(
                    category_id=category_id,
                    category_name=category.name,
                    category_type=category.type,
                    net=net,
                    count=counts[category_id],
                )
            )
        return sorted(rows, key=lambda row: row.category_name)

    @staticmethod
    def _signed_amounts(
        accounts: dict[int, Account], transactions: Iterable[Transaction]
    ) -> Iterable[tuple[Transaction, Decimal]]:
        for txn in transactions:
            account = accounts.get(txn.account_id)
            if account is None:
                continue
            sign = sign_table(account.kind, account.payment_type).get(txn.type)
            if sign is None:
                logger.debug(
                    "Transaction %s (%s) left out of summary for account %s",
                    txn.id,
                    txn.type.value,
                    account.id,
                )
                continue
            yield txn, sign * txn.amount
