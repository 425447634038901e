"""Domain layer for moneytrack application.

Services live in their own modules (``moneytrack.domain.account`` and so on)
and are not imported here, since the database layer imports the entities
from this package.
"""

from moneytrack.domain.entities import (
    Account,
    AccountKind,
    Category,
    CategoryType,
    Installment,
    InstallmentStatus,
    PaymentType,
    Transaction,
    TransactionType,
)

__all__ = [
    "Account",
    "AccountKind",
    "Category",
    "CategoryType",
    "Installment",
    "InstallmentStatus",
    "PaymentType",
    "Transaction",
    "TransactionType",
]
