"""Installment plan generation and payment transitions."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from numbers import Integral
from typing import Any

from dateutil.relativedelta import relativedelta

from moneytrack.domain.entities import InstallmentDraft, InstallmentStatus
from moneytrack.domain.errors import InvalidInstallmentPlan, ValidationError
from moneytrack.domain.validation import CENT


def validate_total_installments(total_installments: Any) -> int:
    """Return the installment count, or raise InvalidInstallmentPlan.

    Only real positive integers are accepted; bools, floats and strings
    are rejected even when they look integral.
    """
    if isinstance(total_installments, bool) or not isinstance(total_installments, Integral):
        raise InvalidInstallmentPlan(
            f"Number of installments must be a positive integer, got {total_installments!r}"
        )
    if total_installments <= 0:
        raise InvalidInstallmentPlan(
            f"Number of installments must be a positive integer, got {total_installments}"
        )
    return int(total_installments)


def generate_installment_plan(
    initial_balance: Decimal,
    total_installments: int,
    start_date: date,
) -> list[InstallmentDraft]:
    """Split a balance into monthly dues.

    Each due is initial_balance / N rounded to cents; the last due absorbs
    the rounding remainder so the plan sums exactly to the balance.

    Example:
        1000.00 over 3 -> [333.33, 333.33, 333.34]

    Args:
        initial_balance: Total amount of the plan, positive
        total_installments: Number of dues, positive integer
        start_date: Due date of installment 1; later dues follow monthly

    Returns:
        Drafts numbered 1..N

    Raises:
        InvalidInstallmentPlan: If the count or the balance is not usable
    """
    count = validate_total_installments(total_installments)
    total = Decimal(initial_balance)
    if total <= 0:
        raise InvalidInstallmentPlan(
            f"Installment plan needs a positive initial balance, got {total}"
        )

    base_amount = (total / count).quantize(CENT, rounding=ROUND_HALF_UP)
    drafts = []
    for index in range(count):
        if index == count - 1:
            amount = total - base_amount * (count - 1)
        else:
            amount = base_amount
        drafts.append(
            InstallmentDraft(
                installment_number=index + 1,
                amount=amount,
                due_date=start_date + relativedelta(months=index),
            )
        )
    return drafts


def apply_payment_to_installment(
    remaining_amount: Decimal, payment_amount: Decimal
) -> tuple[Decimal, InstallmentStatus]:
    """Return the new (remaining_amount, status) after a payment.

    Paying the remainder or more settles the due; any excess is discarded.
    Paying less leaves it partially paid.
    """
    payment = Decimal(payment_amount)
    if payment <= 0:
        raise ValidationError(f"Payment amount must be positive, got {payment}")

    remaining = Decimal(remaining_amount)
    if payment >= remaining:
        return Decimal("0"), InstallmentStatus.PAID
    return remaining - payment, InstallmentStatus.PARTIAL
