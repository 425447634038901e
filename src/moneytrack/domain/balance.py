"""Account balance replay.

The balance of an account is always derived from scratch:

    initial_balance + sum(sign(t) * t.amount)

over the account's transactions, with ``sign`` taken from the account's
configuration at computation time. Stored balances are only a cache of
this value.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from moneytrack.domain.entities import Account, Transaction
from moneytrack.domain.errors import DataConsistencyWarning
from moneytrack.domain.transaction_types import sign_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceComputation:
    """Result of replaying an account's transactions."""

    account_id: int
    balance: Decimal
    applied_count: int = 0
    warnings: tuple[DataConsistencyWarning, ...] = field(default_factory=tuple)

    @property
    def skipped_transaction_ids(self) -> tuple[int, ...]:
        return tuple(w.transaction_id for w in self.warnings if w.transaction_id is not None)


def compute_balance(account: Account, transactions: Iterable[Transaction]) -> BalanceComputation:
    """Replay transactions on top of the account's initial balance.

    Transactions belonging to other accounts are ignored. A transaction
    whose type the account no longer accepts contributes nothing and is
    reported as a DataConsistencyWarning.

    Args:
        account: Owning account, with its current configuration
        transactions: The account's transactions, in any order

    Returns:
        BalanceComputation with the exact Decimal balance
    """
    signs = sign_table(account.kind, account.payment_type)
    balance = Decimal(account.initial_balance)
    applied = 0
    warnings: list[DataConsistencyWarning] = []

    for txn in transactions:
        if txn.account_id != account.id:
            continue
        sign = signs.get(txn.type)
        if sign is None:
            warning = DataConsistencyWarning(
                f"Transaction {txn.id} of type '{txn.type.value}' is not valid for "
                f"account {account.id} ('{account.name}'); skipped in balance",
                transaction_id=txn.id,
            )
            logger.warning(
                str(warning),
                extra={"account_id": account.id, "transaction_id": txn.id},
            )
            warnings.append(warning)
            continue
        balance += sign * Decimal(txn.amount)
        applied += 1

    logger.debug(
        "Replayed %d transactions for account %s: balance %s",
        applied,
        account.id,
        balance,
    )
    return BalanceComputation(
        account_id=account.id,
        balance=balance,
        applied_count=applied,
        warnings=tuple(warnings),
    )
