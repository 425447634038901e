"""Tests for domain entities."""

import dataclasses

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from moneytrack.domain.entities import (
    Account,
    AccountKind,
    Installment,
    InstallmentDraft,
    InstallmentStatus,
    PaymentType,
)


def make_account(**overrides):
    fields = dict(
        id=1,
        user_id="alice",
        name="Test Account",
        kind=AccountKind.CHECKING,
        initial_balance=Decimal("0"),
        calculated_balance=Decimal("0"),
        created_at=datetime.now(UTC),
        payment_type=PaymentType.RECEIVABLE,
    )
    fields.update(overrides)
    return Account(**fields)


class TestAccount:
    """Tests for Account entity."""

    def test_checking_is_current_account(self):
        assert make_account().is_current_account

    def test_other_kinds_are_not_current_accounts(self):
        assert not make_account(kind=AccountKind.SAVINGS, payment_type=None).is_current_account

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = make_account()
        with pytest.raises(dataclasses.FrozenInstanceError):
            account.name = "New Name"

    def test_enums_compare_to_stored_strings(self):
        assert AccountKind.CHECKING == "checking"
        assert PaymentType("payable") is PaymentType.PAYABLE


class TestInstallment:
    """Tests for Installment and InstallmentDraft entities."""

    @pytest.mark.parametrize(
        "status, is_open",
        [
            (InstallmentStatus.PENDING, True),
            (InstallmentStatus.PARTIAL, True),
            (InstallmentStatus.PAID, False),
        ],
    )
    def test_is_open(self, status, is_open):
        installment = Installment(
            id=1,
            user_id="alice",
            account_id=1,
            installment_number=1,
            amount=Decimal("100"),
            remaining_amount=Decimal("100"),
            due_date=date(2024, 1, 1),
            status=status,
            created_at=datetime.now(UTC),
        )
        assert installment.is_open is is_open

    def test_draft_starts_pending_and_unpaid(self):
        draft = InstallmentDraft(installment_number=3, amount=Decimal("33.34"), due_date=date(2024, 3, 1))
        assert draft.status is InstallmentStatus.PENDING
        assert draft.remaining_amount == Decimal("33.34")
