"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: ORM rows store enumerations as
plain strings and money as Numeric, the domain works with Enum members and
Decimal.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from moneytrack.domain import entities as domain
from moneytrack.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Installment as ORMInstallment,
    Transaction as ORMTransaction,
)


def _money(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        kind=domain.AccountKind(orm_account.kind),
        payment_type=(
            domain.PaymentType(orm_account.payment_type)
            if orm_account.payment_type is not None
            else None
        ),
        initial_balance=_money(orm_account.initial_balance),
        calculated_balance=_money(orm_account.balance),
        credit_limit=_money(orm_account.credit_limit),
        has_installments=bool(orm_account.has_installments),
        total_installments=orm_account.total_installments,
        is_active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        type=domain.CategoryType(orm_category.type),
        description=orm_category.description,
        is_default=bool(orm_category.is_default),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        date=orm_transaction.date,
        amount=_money(orm_transaction.amount),
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description,
        installment_id=orm_transaction.installment_id,
        created_at=orm_transaction.created_at,
    )


def installment_to_domain(orm_installment: ORMInstallment) -> domain.Installment:
    """Convert SQLAlchemy Installment model to domain Installment entity."""
    return domain.Installment(
        id=orm_installment.id,
        user_id=orm_installment.user_id,
        account_id=orm_installment.account_id,
        installment_number=orm_installment.installment_number,
        amount=_money(orm_installment.amount),
        remaining_amount=_money(orm_installment.remaining_amount),
        due_date=orm_installment.due_date,
        status=domain.InstallmentStatus(orm_installment.status),
        created_at=orm_installment.created_at,
    )


def enum_value(value):
    """Return the stored representation of an enum (or pass through)."""
    if isinstance(value, Enum):
        return value.value
    return value
