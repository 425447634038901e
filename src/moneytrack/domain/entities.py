"""Domain model entities for moneytrack.

These are pure data classes representing business concepts, independent of
database schema. Closed enumerations replace free-form strings for account
kinds, payment polarity, transaction types and installment status so that
every rule keyed on them can be matched exhaustively.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountKind(str, Enum):
    """Kind of account a user can open."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    DEBIT = "debit"
    CASH = "cash"


class PaymentType(str, Enum):
    """Polarity of a current (checking) account."""

    RECEIVABLE = "receivable"
    PAYABLE = "payable"


class TransactionType(str, Enum):
    """Transaction type label. The amount is always positive."""

    INCOME = "income"
    EXPENSE = "expense"
    PAYMENT = "payment"
    CREDIT = "credit"


class CategoryType(str, Enum):
    """Whether a category groups income or expenses."""

    INCOME = "income"
    EXPENSE = "expense"


class InstallmentStatus(str, Enum):
    """Lifecycle of a scheduled due: pending -> partial -> paid."""

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


OPEN_INSTALLMENT_STATUSES = (InstallmentStatus.PENDING, InstallmentStatus.PARTIAL)


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    ``calculated_balance`` is a cache of the replayed balance, never the
    source of truth.
    """

    id: int
    user_id: str
    name: str
    kind: AccountKind
    initial_balance: Decimal
    calculated_balance: Decimal
    created_at: datetime
    payment_type: Optional[PaymentType] = None
    credit_limit: Optional[Decimal] = None
    has_installments: bool = False
    total_installments: Optional[int] = None
    is_active: bool = True

    @property
    def is_current_account(self) -> bool:
        """Checking accounts use receivable/payable polarity."""
        return self.kind is AccountKind.CHECKING


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    user_id: str
    name: str
    type: CategoryType
    created_at: datetime
    description: Optional[str] = None
    is_default: bool = False


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    user_id: str
    account_id: int
    category_id: int
    date: date
    amount: Decimal
    type: TransactionType
    created_at: datetime
    description: Optional[str] = None
    installment_id: Optional[int] = None


@dataclass(frozen=True)
class Installment:
    """One scheduled due of an account's payment plan."""

    id: int
    user_id: str
    account_id: int
    installment_number: int
    amount: Decimal
    remaining_amount: Decimal
    due_date: date
    status: InstallmentStatus
    created_at: datetime

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_INSTALLMENT_STATUSES


@dataclass(frozen=True)
class InstallmentDraft:
    """Installment values computed before the plan is persisted."""

    installment_number: int
    amount: Decimal
    due_date: date

    @property
    def remaining_amount(self) -> Decimal:
        return self.amount

    @property
    def status(self) -> InstallmentStatus:
        return InstallmentStatus.PENDING


@dataclass(frozen=True)
class TransactionPosting:
    """Everything a transaction write touched, returned to the caller."""

    transaction: Transaction
    account: Account
    installment: Optional[Installment] = None


@dataclass(frozen=True)
class AccountBalance:
    """Dashboard row: an account with its freshly replayed balance."""

    account: Account
    balance: Decimal
    skipped_count: int = 0


@dataclass(frozen=True)
class MonthlyNet:
    """Signed sum of all transactions in one calendar month."""

    period: str
    net: Decimal
    count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Signed sum of transactions grouped by category."""

    category_id: int
    category_name: str
    category_type: CategoryType
    net: Decimal
    count: int
