"""Transaction type rules per account configuration.

Which transaction types an account accepts, and the direction each one
moves the balance, depend only on the account's kind and payment type:

    checking / receivable   payment -1, credit +1
    checking / payable      payment +1, credit -1
    any other kind          income  +1, expense -1
"""

from typing import Optional

from moneytrack.domain.entities import Account, AccountKind, PaymentType, TransactionType
from moneytrack.domain.errors import InvalidTransactionType, invalid_transaction_type

_RECEIVABLE_SIGNS = {TransactionType.PAYMENT: -1, TransactionType.CREDIT: 1}
_PAYABLE_SIGNS = {TransactionType.PAYMENT: 1, TransactionType.CREDIT: -1}
_PLAIN_SIGNS = {TransactionType.INCOME: 1, TransactionType.EXPENSE: -1}


def sign_table(kind: AccountKind, payment_type: Optional[PaymentType]) -> dict[TransactionType, int]:
    """Return the valid types and their signs for an account configuration.

    A checking account without a payment type accepts nothing; that only
    happens with inconsistent stored data.
    """
    if kind is AccountKind.CHECKING:
        if payment_type is PaymentType.RECEIVABLE:
            return dict(_RECEIVABLE_SIGNS)
        if payment_type is PaymentType.PAYABLE:
            return dict(_PAYABLE_SIGNS)
        return {}
    return dict(_PLAIN_SIGNS)


def valid_transaction_types(account: Account) -> list[TransactionType]:
    """List the transaction types that can be posted against an account."""
    return list(sign_table(account.kind, account.payment_type))


def is_valid_transaction_type(account: Account, transaction_type: TransactionType) -> bool:
    return transaction_type in sign_table(account.kind, account.payment_type)


def transaction_sign(account: Account, transaction_type: TransactionType) -> int:
    """Return +1 or -1 for a transaction type on an account.

    Raises:
        InvalidTransactionType: If the account does not accept the type
    """
    signs = sign_table(account.kind, account.payment_type)
    try:
        return signs[transaction_type]
    except KeyError:
        raise InvalidTransactionType(
            invalid_transaction_type(
                transaction_type.value, account.name, [t.value for t in signs]
            )
        ) from None


def require_valid_transaction_type(account: Account, transaction_type: TransactionType) -> None:
    """Raise InvalidTransactionType unless the account accepts the type."""
    transaction_sign(account, transaction_type)
