"""Tests for the account service."""

from datetime import date
from decimal import Decimal

import pytest

from moneytrack.domain.entities import AccountKind, InstallmentStatus, PaymentType
from moneytrack.domain.errors import (
    AccountNotFound,
    ConflictError,
    InvalidInstallmentPlan,
    ValidationError,
)


class TestCreateAccount:
    """Tests for account creation."""

    def test_create_cash_account(self, account_service, user_id):
        account = account_service.create_account(
            user_id=user_id, name="Wallet", kind="cash", initial_balance="500"
        )
        assert account.id is not None
        assert account.kind is AccountKind.CASH
        assert account.payment_type is None
        assert account.initial_balance == Decimal("500")
        assert account.calculated_balance == Decimal("500")
        assert account.is_active
        assert not account.is_current_account

    def test_create_checking_account(self, account_service, user_id):
        account = account_service.create_account(
            user_id=user_id, name="Owed", kind=AccountKind.CHECKING, payment_type=PaymentType.PAYABLE
        )
        assert account.is_current_account
        assert account.payment_type is PaymentType.PAYABLE

    def test_checking_requires_payment_type(self, account_service, user_id):
        with pytest.raises(ValidationError, match="payment type"):
            account_service.create_account(user_id=user_id, name="Owed", kind="checking")

    def test_payment_type_only_on_checking(self, account_service, user_id):
        with pytest.raises(ValidationError):
            account_service.create_account(
                user_id=user_id, name="Savings", kind="savings", payment_type="payable"
            )

    def test_credit_limit_only_on_credit(self, account_service, user_id):
        with pytest.raises(ValidationError):
            account_service.create_account(
                user_id=user_id, name="Savings", kind="savings", credit_limit="1000"
            )

    def test_credit_account_with_limit(self, account_service, user_id):
        account = account_service.create_account(
            user_id=user_id, name="Visa", kind="credit", credit_limit="2500"
        )
        assert account.credit_limit == Decimal("2500")

    @pytest.mark.parametrize(
        "fields",
        [
            {"kind": "cash", "initial_balance": "10.005"},
            {"kind": "credit", "credit_limit": "100.001"},
            {"kind": "cash", "initial_balance": "10000000000"},
        ],
    )
    def test_money_must_fit_in_whole_cents(self, account_service, user_id, fields):
        with pytest.raises(ValidationError):
            account_service.create_account(user_id=user_id, name="Wallet", **fields)
        assert account_service.list_accounts(user_id) == []

    def test_unknown_kind(self, account_service, user_id):
        with pytest.raises(ValidationError, match="account kind"):
            account_service.create_account(user_id=user_id, name="X", kind="crypto")

    def test_empty_name(self, account_service, user_id):
        with pytest.raises(ValidationError):
            account_service.create_account(user_id=user_id, name="  ", kind="cash")

    def test_user_required(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account(user_id="", name="Wallet", kind="cash")

    def test_duplicate_name_for_same_user(self, account_service, user_id, cash_account):
        with pytest.raises(ConflictError, match="already exists"):
            account_service.create_account(user_id=user_id, name="Wallet", kind="cash")

    def test_same_name_for_other_user(self, account_service, cash_account):
        other = account_service.create_account(user_id="bob", name="Wallet", kind="cash")
        assert other.id != cash_account.id


class TestInstallmentPlanCreation:
    """Tests for accounts created with an installment plan."""

    def test_plan_created_with_account(self, installment_account, installment_service):
        assert installment_account.has_installments
        assert installment_account.total_installments == 12

        installments = installment_service.list_installments(installment_account.id)
        assert len(installments) == 12
        for number, inst in enumerate(installments, start=1):
            assert inst.installment_number == number
            assert inst.amount == Decimal("100")
            assert inst.remaining_amount == Decimal("100")
            assert inst.status is InstallmentStatus.PENDING
            assert inst.user_id == installment_account.user_id
        assert installments[0].due_date == date(2024, 1, 15)
        assert installments[11].due_date == date(2024, 12, 15)

    @pytest.mark.parametrize("count", [None, 0, -1, 2.5, True])
    def test_invalid_count_creates_nothing(self, account_service, user_id, count):
        with pytest.raises(InvalidInstallmentPlan):
            account_service.create_account(
                user_id=user_id,
                name="Loan",
                kind="checking",
                payment_type="payable",
                initial_balance="1200",
                has_installments=True,
                total_installments=count,
            )
        assert account_service.list_accounts(user_id) == []

    def test_count_without_flag(self, account_service, user_id):
        with pytest.raises(InvalidInstallmentPlan):
            account_service.create_account(
                user_id=user_id,
                name="Loan",
                kind="checking",
                payment_type="payable",
                initial_balance="1200",
                total_installments=12,
            )

    def test_plan_requires_checking_account(self, account_service, user_id):
        with pytest.raises(InvalidInstallmentPlan):
            account_service.create_account(
                user_id=user_id,
                name="Loan",
                kind="savings",
                initial_balance="1200",
                has_installments=True,
                total_installments=12,
            )

    def test_plan_requires_positive_balance(self, account_service, user_id):
        with pytest.raises(InvalidInstallmentPlan):
            account_service.create_account(
                user_id=user_id,
                name="Loan",
                kind="checking",
                payment_type="payable",
                has_installments=True,
                total_installments=3,
            )

    def test_plan_insert_failure_rolls_back_account(self, account_service, temp_db, user_id, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "create_installments", fail)
        with pytest.raises(RuntimeError):
            account_service.create_account(
                user_id=user_id,
                name="Loan",
                kind="checking",
                payment_type="payable",
                initial_balance="300",
                has_installments=True,
                total_installments=3,
            )
        assert account_service.list_accounts(user_id) == []


class TestLookup:
    """Tests for account lookup and ownership."""

    def test_require_account(self, account_service, cash_account, user_id):
        assert account_service.require_account(cash_account.id, user_id).id == cash_account.id

    def test_require_missing_account(self, account_service):
        with pytest.raises(AccountNotFound):
            account_service.require_account(999)

    def test_other_users_account_is_not_found(self, account_service, cash_account):
        with pytest.raises(AccountNotFound):
            account_service.require_account(cash_account.id, "bob")

    def test_list_accounts_is_per_user(self, account_service, cash_account):
        account_service.create_account(user_id="bob", name="Bob's wallet", kind="cash")
        assert [acc.name for acc in account_service.list_accounts(cash_account.user_id)] == ["Wallet"]


class TestUpdateAccount:
    """Tests for account edits."""

    def test_rename(self, account_service, cash_account, user_id):
        updated = account_service.update_account(cash_account.id, user_id, name="Pocket")
        assert updated.name == "Pocket"
        assert updated.calculated_balance == cash_account.calculated_balance

    def test_rename_to_existing_name(self, account_service, cash_account, receivable_account, user_id):
        with pytest.raises(ConflictError):
            account_service.update_account(receivable_account.id, user_id, name="Wallet")

    def test_deactivate(self, account_service, cash_account, user_id):
        assert not account_service.update_account(cash_account.id, user_id, is_active=False).is_active

    def test_payment_type_change_reinterprets_history(
        self, account_service, transaction_service, receivable_account, sample_categories, user_id
    ):
        category = sample_categories["Other Income"]
        for txn_type, amount in [("credit", "100"), ("payment", "30")]:
            transaction_service.create_transaction(
                user_id=user_id,
                account_id=receivable_account.id,
                category_id=category.id,
                date=date(2024, 3, 1),
                amount=amount,
                type=txn_type,
            )
        assert account_service.require_account(receivable_account.id).calculated_balance == Decimal("70")

        updated = account_service.update_account(receivable_account.id, user_id, payment_type="payable")
        assert updated.payment_type is PaymentType.PAYABLE
        assert updated.calculated_balance == Decimal("-70")

    def test_kind_change_skips_invalid_history(
        self, account_service, transaction_service, receivable_account, sample_categories, user_id
    ):
        transaction_service.create_transaction(
            user_id=user_id,
            account_id=receivable_account.id,
            category_id=sample_categories["Salary"].id,
            date=date(2024, 3, 1),
            amount="100",
            type="credit",
        )
        updated = account_service.update_account(receivable_account.id, user_id, kind="cash")
        assert updated.payment_type is None
        assert updated.calculated_balance == Decimal("0")
        assert account_service.replay_balance(updated).skipped_transaction_ids != ()

    def test_installment_account_must_stay_checking(self, account_service, installment_account, user_id):
        with pytest.raises(ValidationError):
            account_service.update_account(installment_account.id, user_id, kind="savings")

    def test_credit_limit_cleared_when_kind_changes(self, account_service, user_id):
        visa = account_service.create_account(user_id=user_id, name="Visa", kind="credit", credit_limit="100")
        updated = account_service.update_account(visa.id, user_id, kind="debit")
        assert updated.credit_limit is None

    def test_update_without_changes_returns_account(self, account_service, cash_account, user_id):
        unchanged = account_service.update_account(cash_account.id, user_id)
        assert unchanged.id == cash_account.id
        assert unchanged.name == cash_account.name


class TestDeleteAccount:
    """Tests for cascading account deletion."""

    def test_delete_removes_transactions_and_installments(
        self, account_service, transaction_service, installment_service, installment_account, sample_categories, temp_db, user_id
    ):
        first = installment_service.list_installments(installment_account.id)[0]
        transaction_service.create_transaction(
            user_id=user_id,
            account_id=installment_account.id,
            category_id=sample_categories["Debt Payments"].id,
            date=date(2024, 1, 15),
            amount="100",
            type="payment",
            installment_id=first.id,
        )

        account_service.delete_account(installment_account.id, user_id)

        assert account_service.get_account(installment_account.id) is None
        assert temp_db.list_transactions(account_id=installment_account.id) == []
        assert installment_service.list_installments(installment_account.id) == []

    def test_failed_dependent_delete_leaves_account_intact(
        self, account_service, transaction_service, cash_account, sample_categories, temp_db, user_id, monkeypatch
    ):
        transaction_service.create_transaction(
            user_id=user_id,
            account_id=cash_account.id,
            category_id=sample_categories["Groceries"].id,
            date=date(2024, 2, 1),
            amount="25",
            type="expense",
        )

        def fail(account_id):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(temp_db, "delete_account_installments", fail)
        with pytest.raises(RuntimeError):
            account_service.delete_account(cash_account.id, user_id)

        assert account_service.get_account(cash_account.id) is not None
        assert len(temp_db.list_transactions(account_id=cash_account.id)) == 1

    def test_delete_other_users_account(self, account_service, cash_account):
        with pytest.raises(AccountNotFound):
            account_service.delete_account(cash_account.id, "bob")
        assert account_service.get_account(cash_account.id) is not None


class TestRecompute:
    """Tests for balance cache refresh."""

    def test_recompute_repairs_stale_cache(self, account_service, cash_account, temp_db):
        temp_db.update_account(cash_account.id, balance=Decimal("1"))
        repaired = account_service.recompute_balance(cash_account.id)
        assert repaired.calculated_balance == Decimal("500")

    def test_recompute_is_idempotent(self, account_service, cash_account):
        first = account_service.recompute_balance(cash_account.id)
        second = account_service.recompute_balance(cash_account.id)
        assert first.calculated_balance == second.calculated_balance
