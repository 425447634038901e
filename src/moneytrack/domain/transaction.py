"""Transaction domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from moneytrack.database.base import Database
from moneytrack.domain.account import AccountService, require_user_id
from moneytrack.domain.entities import (
    Account,
    Category,
    Transaction as TransactionEntity,
    TransactionPosting,
    TransactionType,
)
from moneytrack.domain.errors import (
    CategoryNotFound,
    InvalidTransactionType,
    TransactionNotFound,
    ValidationError,
    category_not_found,
    transaction_not_found,
)
from moneytrack.domain.installment import InstallmentService
from moneytrack.domain.transaction_types import require_valid_transaction_type
from moneytrack.domain.validation import coerce_enum, require_positive_amount

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for posting transactions.

    Every write replays the owning account's balance and, for installment
    payments, advances the installment, all inside one unit of work.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)
        self.installments = InstallmentService(db)

    def create_transaction(
        self,
        user_id: str,
        account_id: int,
        category_id: int,
        date: date,
        amount: Decimal | int | str,
        type: TransactionType | str,
        description: Optional[str] = None,
        installment_id: Optional[int] = None,
    ) -> TransactionPosting:
        """Post a transaction against an account.

        Args:
            user_id: Current user id
            account_id: Owning account ID
            category_id: Category ID
            date: Transaction date
            amount: Strictly positive amount; the type decides the direction
            type: income, expense, payment or credit
            description: Optional description
            installment_id: Installment settled by this payment, if any

        Returns:
            TransactionPosting with the new transaction, the account with its
            replayed balance and the updated installment

        Raises:
            ValidationError: If the input shape is invalid
            AccountNotFound: If account doesn't exist
            CategoryNotFound: If category doesn't exist
            InvalidTransactionType: If the account doesn't accept the type
            InstallmentNotFound: If the installment doesn't belong to the account
        """
        user_id = require_user_id(user_id)
        amount = require_positive_amount(amount)
        type = coerce_enum(TransactionType, type, "transaction type")
        if date is None:
            raise ValidationError("Transaction date is required")

        account = self.accounts.require_account(account_id, user_id)
        self._require_category(category_id, user_id)
        require_valid_transaction_type(account, type)

        installment = None
        if installment_id is not None:
            if type is not TransactionType.PAYMENT:
                raise InvalidTransactionType(
                    f"Only payment transactions can settle an installment, got '{type.value}'"
                )
            installment = self.installments.require_installment(installment_id, account.id)

        with self.db.unit_of_work():
            transaction = self.db.create_transaction(
                user_id=user_id,
                account_id=account.id,
                category_id=category_id,
                date=date,
                amount=amount,
                type=type,
                description=description,
                installment_id=installment_id,
            )
            if installment is not None:
                installment = self.installments.apply_payment(installment, amount)
            account = self.accounts.refresh_balance(account)

        logger.info(
            "Posted %s transaction %s of %s on account %s",
            type.value,
            transaction.id,
            amount,
            account.id,
        )
        return TransactionPosting(transaction=transaction, account=account, installment=installment)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(
        self, transaction_id: int, user_id: Optional[str] = None
    ) -> TransactionEntity:
        """Get transaction by ID, optionally checking ownership."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None or (user_id is not None and txn.user_id != user_id):
            raise TransactionNotFound(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        user_id: str,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        date: Optional[date] = None,
        amount: Optional[Decimal | int | str] = None,
        type: Optional[TransactionType | str] = None,
        description: Optional[str] = None,
    ) -> TransactionPosting:
        """Update transaction fields.

        Only provided fields change. The result is validated against the
        (possibly new) owning account and every affected account is replayed.
        The installment link of a payment cannot be edited, and neither can
        the amount of a payment that settles an installment.

        Raises:
            TransactionNotFound: If transaction doesn't exist
            AccountNotFound: If the new account doesn't exist
            CategoryNotFound: If the new category doesn't exist
            InvalidTransactionType: If the owning account doesn't accept the type
        """
        user_id = require_user_id(user_id)
        txn = self.require_transaction(transaction_id, user_id)
        fields: dict[str, Any] = {}

        if amount is not None:
            new_amount = require_positive_amount(amount)
            if txn.installment_id is not None and new_amount != txn.amount:
                raise ValidationError(
                    f"Transaction {transaction_id} settles an installment; its amount cannot change"
                )
            fields["amount"] = new_amount
        new_type = txn.type
        if type is not None:
            new_type = coerce_enum(TransactionType, type, "transaction type")
            fields["type"] = new_type
        if date is not None:
            fields["date"] = date
        if description is not None:
            fields["description"] = description
        if category_id is not None:
            self._require_category(category_id, user_id)
            fields["category_id"] = category_id

        old_account = self.accounts.require_account(txn.account_id)
        new_account = old_account
        if account_id is not None and account_id != txn.account_id:
            if txn.installment_id is not None:
                raise ValidationError(
                    f"Transaction {transaction_id} settles an installment and cannot move to another account"
                )
            new_account = self.accounts.require_account(account_id, user_id)
            fields["account_id"] = account_id

        require_valid_transaction_type(new_account, new_type)
        if txn.installment_id is not None and new_type is not TransactionType.PAYMENT:
            raise InvalidTransactionType(
                f"Transaction {transaction_id} settles an installment and must stay a payment"
            )

        if not fields:
            return TransactionPosting(transaction=txn, account=old_account)

        with self.db.unit_of_work():
            updated = self.db.update_transaction(transaction_id, **fields)
            if new_account.id != old_account.id:
                self.accounts.refresh_balance(old_account)
            new_account = self.accounts.refresh_balance(new_account)

        logger.info("Updated transaction %s: %s", transaction_id, ", ".join(sorted(fields)))
        return TransactionPosting(transaction=updated, account=new_account)

    def delete_transaction(self, transaction_id: int, user_id: str) -> Account:
        """Delete a transaction and replay its account.

        Installment progress made by the transaction is kept.

        Returns:
            The owning account with its replayed balance

        Raises:
            TransactionNotFound: If transaction doesn't exist
        """
        user_id = require_user_id(user_id)
        txn = self.require_transaction(transaction_id, user_id)
        account = self.accounts.require_account(txn.account_id)

        with self.db.unit_of_work():
            self.db.delete_transaction(transaction_id)
            account = self.accounts.refresh_balance(account)

        logger.info("Deleted transaction %s from account %s", transaction_id, account.id)
        return account

    def clone_transaction(
        self, transaction_id: int, user_id: str, date: Optional[date] = None
    ) -> TransactionPosting:
        """Post a copy of an existing transaction, without its installment link."""
        txn = self.require_transaction(transaction_id, require_user_id(user_id))
        return self.create_transaction(
            user_id=user_id,
            account_id=txn.account_id,
            category_id=txn.category_id,
            date=date or txn.date,
            amount=txn.amount,
            type=txn.type,
            description=txn.description,
        )

    def list_transactions(
        self,
        user_id: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first."""
        return self.db.list_transactions(
            user_id=user_id,
            account_id=account_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
        )

    def _require_category(self, category_id: int, user_id: str) -> Category:
        if category_id is None:
            raise ValidationError("Category is required")
        category = self.db.get_category(category_id)
        if category is None or category.user_id != user_id:
            raise CategoryNotFound(category_not_found(category_id))
        return category
