"""Installment domain service."""

import logging
from decimal import Decimal
from typing import Optional

from moneytrack.database.base import Database
from moneytrack.domain.entities import (
    Installment,
    InstallmentStatus,
    OPEN_INSTALLMENT_STATUSES,
)
from moneytrack.domain.errors import (
    InstallmentNotFound,
    ValidationError,
    installment_not_found,
)
from moneytrack.domain.installment_plan import apply_payment_to_installment

logger = logging.getLogger(__name__)


class InstallmentService:
    """Service for managing installment plans attached to accounts."""

    def __init__(self, db: Database):
        """Initialize installment service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_installment(self, installment_id: int) -> Optional[Installment]:
        """Get installment by ID."""
        return self.db.get_installment(installment_id)

    def require_installment(
        self, installment_id: int, account_id: Optional[int] = None
    ) -> Installment:
        """Get an installment, optionally checking which account owns it.

        Raises:
            InstallmentNotFound: If missing or owned by another account
        """
        installment = self.db.get_installment(installment_id)
        if installment is None or (
            account_id is not None and installment.account_id != account_id
        ):
            raise InstallmentNotFound(installment_not_found(installment_id, account_id))
        return installment

    def list_installments(self, account_id: int) -> list[Installment]:
        """List every installment of an account in plan order."""
        return self.db.list_installments(account_id)

    def list_open_installments(self, account_id: int) -> list[Installment]:
        """List the installments a payment can still target (pending or partial)."""
        return self.db.list_installments(account_id, status_in=OPEN_INSTALLMENT_STATUSES)

    def apply_payment(self, installment: Installment, amount: Decimal) -> Installment:
        """Advance an installment by a payment and persist the new state.

        Raises:
            ValidationError: If the installment is already paid
        """
        if installment.status is InstallmentStatus.PAID:
            raise ValidationError(
                f"Installment {installment.installment_number} of account "
                f"{installment.account_id} is already paid"
            )

        remaining, status = apply_payment_to_installment(installment.remaining_amount, amount)
        updated = self.db.update_installment(
            installment.id, status=status, remaining_amount=remaining
        )
        logger.info(
            "Installment %s (#%d) %s -> %s, remaining %s",
            installment.id,
            installment.installment_number,
            installment.status.value,
            status.value,
            remaining,
        )
        return updated
