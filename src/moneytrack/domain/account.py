"""Account domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from moneytrack.database.base import Database
from moneytrack.domain.balance import BalanceComputation, compute_balance
from moneytrack.domain.entities import (
    Account as AccountEntity,
    AccountKind,
    PaymentType,
)
from moneytrack.domain.errors import (
    AccountNotFound,
    ConflictError,
    InvalidInstallmentPlan,
    ValidationError,
    account_not_found,
    duplicate_account_name,
)
from moneytrack.domain.installment_plan import generate_installment_plan
from moneytrack.domain.validation import coerce_enum, coerce_money, require_name

logger = logging.getLogger(__name__)


def require_user_id(user_id: Optional[str]) -> str:
    """Every write is attributed to the authenticated user."""
    if user_id is None or not str(user_id).strip():
        raise ValidationError("A current user id is required")
    return str(user_id)


class AccountService:
    """Service for managing accounts and their cached balances."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        kind: AccountKind | str,
        initial_balance: Decimal | int | str = Decimal("0"),
        payment_type: Optional[PaymentType | str] = None,
        credit_limit: Optional[Decimal | int | str] = None,
        has_installments: bool = False,
        total_installments: Optional[int] = None,
        created_on: Optional[date] = None,
    ) -> AccountEntity:
        """Create a new account, with its installment plan when requested.

        Args:
            user_id: Current user id
            name: Account name, unique per user
            kind: checking, savings, credit, debit or cash
            initial_balance: Opening balance, immutable afterwards
            payment_type: receivable or payable, required for checking accounts
            credit_limit: Optional limit, credit accounts only
            has_installments: Create a structured payment plan
            total_installments: Number of monthly dues in the plan
            created_on: Due date of the first installment (defaults to today)

        Returns:
            Account entity

        Raises:
            ValidationError: If the input shape is invalid
            InvalidInstallmentPlan: If the installment request is malformed
            ConflictError: If the account name already exists
        """
        user_id = require_user_id(user_id)
        name = require_name(name, "Account name")
        kind = coerce_enum(AccountKind, kind, "account kind")
        initial_balance = coerce_money(initial_balance, "Initial balance")
        payment_type = self._resolve_payment_type(kind, payment_type)
        credit_limit = self._resolve_credit_limit(kind, credit_limit)

        drafts = []
        if has_installments:
            if kind is not AccountKind.CHECKING:
                raise InvalidInstallmentPlan(
                    "Installment plans are only available on checking accounts"
                )
            drafts = generate_installment_plan(
                initial_balance, total_installments, created_on or date.today()
            )
        elif total_installments is not None:
            raise InvalidInstallmentPlan(
                "total_installments requires has_installments to be set"
            )

        self._check_unique_name(user_id, name)

        with self.db.unit_of_work():
            account = self.db.create_account(
                user_id=user_id,
                name=name,
                kind=kind,
                initial_balance=initial_balance,
                payment_type=payment_type,
                credit_limit=credit_limit,
                has_installments=bool(has_installments),
                total_installments=len(drafts) if has_installments else None,
            )
            if drafts:
                self.db.create_installments(account.id, user_id, drafts)

        logger.info(
            "Created %s account %s '%s' with %d installments",
            kind.value,
            account.id,
            name,
            len(drafts),
        )
        return account

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int, user_id: Optional[str] = None) -> AccountEntity:
        """Get account by ID, optionally checking ownership.

        Raises:
            AccountNotFound: If the account does not exist for this user
        """
        account = self.db.get_account(account_id)
        if account is None or (user_id is not None and account.user_id != user_id):
            raise AccountNotFound(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List a user's accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts(user_id)

    def update_account(
        self,
        account_id: int,
        user_id: str,
        name: Optional[str] = None,
        kind: Optional[AccountKind | str] = None,
        payment_type: Optional[PaymentType | str] = None,
        credit_limit: Optional[Decimal | int | str] = None,
        is_active: Optional[bool] = None,
        clear_credit_limit: bool = False,
    ) -> AccountEntity:
        """Edit an account.

        The initial balance and the installment plan cannot change. A new
        kind or payment type reinterprets every existing transaction, so the
        cached balance is replayed in the same unit of work.

        Raises:
            AccountNotFound: If account not found
            ValidationError: If the new configuration is inconsistent
            ConflictError: If the new name already exists
        """
        user_id = require_user_id(user_id)
        account = self.require_account(account_id, user_id)
        fields: dict[str, Any] = {}

        if name is not None:
            name = require_name(name, "Account name")
            if name != account.name:
                self._check_unique_name(user_id, name, exclude_id=account_id)
                fields["name"] = name

        new_kind = coerce_enum(AccountKind, kind, "account kind") if kind is not None else account.kind
        if account.has_installments and new_kind is not AccountKind.CHECKING:
            raise ValidationError(
                f"Account {account_id} has an installment plan and must stay a checking account"
            )

        if new_kind is AccountKind.CHECKING:
            new_payment_type = self._resolve_payment_type(
                new_kind, payment_type if payment_type is not None else account.payment_type
            )
        else:
            new_payment_type = self._resolve_payment_type(new_kind, payment_type)

        if new_kind is AccountKind.CREDIT:
            if credit_limit is not None:
                new_credit_limit = self._resolve_credit_limit(new_kind, credit_limit)
            elif clear_credit_limit:
                new_credit_limit = None
            else:
                new_credit_limit = account.credit_limit
        else:
            self._resolve_credit_limit(new_kind, credit_limit)
            new_credit_limit = None

        polarity_changed = (
            new_kind is not account.kind or new_payment_type is not account.payment_type
        )
        if new_kind is not account.kind:
            fields["kind"] = new_kind
        if new_payment_type is not account.payment_type:
            fields["payment_type"] = new_payment_type
        if new_credit_limit != account.credit_limit:
            fields["credit_limit"] = new_credit_limit
        if is_active is not None and bool(is_active) != account.is_active:
            fields["is_active"] = bool(is_active)

        if not fields:
            return account

        with self.db.unit_of_work():
            updated = self.db.update_account(account_id, **fields)
            if polarity_changed:
                updated = self.refresh_balance(updated)

        logger.info("Updated account %s: %s", account_id, ", ".join(sorted(fields)))
        return updated

    def replay_balance(self, account: AccountEntity) -> BalanceComputation:
        """Compute the account's balance from its full transaction history."""
        transactions = self.db.list_transactions(account_id=account.id)
        return compute_balance(account, transactions)

    def refresh_balance(self, account: AccountEntity) -> AccountEntity:
        """Replay the balance and store it in the account's cache column."""
        result = self.replay_balance(account)
        if result.balance == account.calculated_balance:
            return account
        logger.debug(
            "Account %s balance cache %s -> %s",
            account.id,
            account.calculated_balance,
            result.balance,
        )
        return self.db.update_account(account.id, balance=result.balance)

    def recompute_balance(self, account_id: int) -> AccountEntity:
        """Replay an account's balance and refresh its cache.

        Raises:
            AccountNotFound: If account not found
        """
        account = self.require_account(account_id)
        with self.db.unit_of_work():
            return self.refresh_balance(account)

    def delete_account(self, account_id: int, user_id: str) -> None:
        """Delete an account together with its transactions and installments.

        Dependents go first; any failure rolls the whole request back and
        leaves the account intact.

        Raises:
            AccountNotFound: If account not found
        """
        user_id = require_user_id(user_id)
        account = self.require_account(account_id, user_id)

        with self.db.unit_of_work():
            transaction_count = self.db.delete_account_transactions(account_id)
            installment_count = self.db.delete_account_installments(account_id)
            self.db.delete_account(account_id)

        logger.info(
            "Deleted account %s '%s' (%d transactions, %d installments)",
            account_id,
            account.name,
            transaction_count,
            installment_count,
        )

    def _check_unique_name(self, user_id: str, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(user_id):
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))

    @staticmethod
    def _resolve_payment_type(
        kind: AccountKind, payment_type: Optional[PaymentType | str]
    ) -> Optional[PaymentType]:
        if kind is AccountKind.CHECKING:
            if payment_type is None:
                raise ValidationError("Checking accounts require a payment type (receivable or payable)")
            return coerce_enum(PaymentType, payment_type, "payment type")
        if payment_type is not None:
            raise ValidationError("Only checking accounts have a payment type")
        return None

    @staticmethod
    def _resolve_credit_limit(
        kind: AccountKind, credit_limit: Optional[Decimal | int | str]
    ) -> Optional[Decimal]:
        if credit_limit is None:
            return None
        if kind is not AccountKind.CREDIT:
            raise ValidationError("Only credit accounts have a credit limit")
        limit = coerce_money(credit_limit, "Credit limit")
        if limit < 0:
            raise ValidationError(f"Credit limit cannot be negative, got {limit}")
        return limit
