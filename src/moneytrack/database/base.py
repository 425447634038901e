"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Any, Iterable, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from moneytrack.domain.entities import (
    Account,
    AccountKind,
    Category,
    CategoryType,
    Installment,
    InstallmentDraft,
    InstallmentStatus,
    PaymentType,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for moneytrack.

    Every write commits on its own unless it runs inside ``unit_of_work()``,
    in which case all writes of the block commit or roll back together.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Group writes into one atomic request. Blocks may nest."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: str,
        name: str,
        kind: AccountKind,
        initial_balance: Decimal,
        payment_type: Optional[PaymentType] = None,
        credit_limit: Optional[Decimal] = None,
        has_installments: bool = False,
        total_installments: Optional[int] = None,
    ) -> Account:
        """Create a new account with its balance cache set to initial_balance."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List a user's accounts ordered by name."""
        pass

    @abstractmethod
    def update_account(self, account_id: int, **fields: Any) -> Account:
        """Update account columns. Passing None clears a nullable column."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete the account row. Dependents must be deleted first."""
        pass

    # Installment operations
    @abstractmethod
    def create_installments(
        self, account_id: int, user_id: str, drafts: Sequence[InstallmentDraft]
    ) -> list[Installment]:
        """Insert a whole installment plan."""
        pass

    @abstractmethod
    def get_installment(self, installment_id: int) -> Optional[Installment]:
        """Get installment by ID."""
        pass

    @abstractmethod
    def list_installments(
        self, account_id: int, status_in: Optional[Iterable[InstallmentStatus]] = None
    ) -> list[Installment]:
        """List an account's installments ordered by installment number."""
        pass

    @abstractmethod
    def update_installment(
        self, installment_id: int, status: InstallmentStatus, remaining_amount: Decimal
    ) -> Installment:
        """Update installment progress."""
        pass

    @abstractmethod
    def delete_account_installments(self, account_id: int) -> int:
        """Delete all installments of an account. Returns the number deleted."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        user_id: str,
        name: str,
        type: CategoryType,
        description: Optional[str] = None,
        is_default: bool = False,
    ) -> Category:
        """Create a category."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, user_id: str, type: Optional[CategoryType] = None) -> list[Category]:
        """List a user's categories ordered by name."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, **fields: Any) -> Category:
        """Update category columns."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def count_category_transactions(self, category_id: int) -> int:
        """Count transactions referencing a category."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        account_id: int,
        category_id: int,
        date: date,
        amount: Decimal,
        type: TransactionType,
        description: Optional[str] = None,
        installment_id: Optional[int] = None,
    ) -> Transaction:
        """Create a transaction."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields: Any) -> Transaction:
        """Update transaction columns."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def delete_account_transactions(self, account_id: int) -> int:
        """Delete all transactions of an account. Returns the number deleted."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            user_id: Optional owner filter
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        pass
