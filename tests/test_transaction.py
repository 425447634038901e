"""Tests for transaction commands."""

import pytest


@pytest.fixture
def wallet(run_cli, cash_account, sample_categories):
    """Cash account with default categories."""
    return cash_account


def add(run_cli, *extra):
    return run_cli("add", "--date", "2024-01-15", *extra)


def test_add_transaction(run_cli, wallet):
    result = add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "200", "--category", "Groceries")

    assert result.exit_code == 0
    assert "Created transaction" in result.output
    assert "Account: Wallet" in result.output
    assert "New balance: $300.00" in result.output


def test_add_transaction_with_ids(run_cli, wallet, sample_categories):
    result = add(
        run_cli,
        "--account", str(wallet.id),
        "--type", "income",
        "--amount", "$1,000.00",
        "--category", str(sample_categories["Salary"].id),
    )

    assert result.exit_code == 0
    assert "New balance: $1,500.00" in result.output


def test_add_transaction_with_relative_date(run_cli, wallet):
    result = run_cli(
        "add", "--account", "Wallet", "--type", "expense", "--amount", "5",
        "--category", "Groceries", "--date", "yesterday",
    )

    assert result.exit_code == 0


def test_add_invalid_type_for_account(run_cli, wallet):
    result = add(run_cli, "--account", "Wallet", "--type", "payment", "--amount", "5", "--category", "Groceries")

    assert result.exit_code == 1
    assert "not valid for account 'Wallet'" in result.output


def test_add_negative_amount(run_cli, wallet):
    result = add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "-5", "--category", "Groceries")

    assert result.exit_code == 1
    assert "must be positive" in result.output


def test_add_unknown_category(run_cli, wallet):
    result = add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "5", "--category", "Nope")

    assert result.exit_code == 1
    assert "Category 'Nope' not found" in result.output


def test_add_invalid_date(run_cli, wallet):
    result = run_cli(
        "add", "--account", "Wallet", "--type", "expense", "--amount", "5",
        "--category", "Groceries", "--date", "someday",
    )

    assert result.exit_code == 1
    assert "Invalid date format" in result.output


def test_add_installment_payment(run_cli, installment_account, installment_service, sample_categories):
    first = installment_service.list_installments(installment_account.id)[0]

    result = add(
        run_cli,
        "--account", "Car loan",
        "--type", "payment",
        "--amount", "150",
        "--category", "Debt Payments",
        "--installment", str(first.id),
    )

    assert result.exit_code == 0
    assert "Installment #1: paid, remaining $0.00" in result.output

    listing = run_cli("installment", "list", "Car loan", "--open")
    assert listing.output.count("pending") == 11


def test_add_unknown_installment(run_cli, installment_account, sample_categories):
    result = add(
        run_cli, "--account", "Car loan", "--type", "payment", "--amount", "10",
        "--category", "Debt Payments", "--installment", "999",
    )

    assert result.exit_code == 1
    assert "Installment 999 not found" in result.output


def test_list_transactions(run_cli, wallet):
    add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "20", "--category", "Groceries")
    add(run_cli, "--account", "Wallet", "--type", "income", "--amount", "30", "--category", "Salary")

    result = run_cli("transaction", "list", "--category", "Groceries")

    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "$20.00" in result.output


def test_list_transactions_empty(run_cli, wallet):
    result = run_cli("transaction", "list", "--this-month")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_update_transaction(run_cli, wallet, transaction_service, user_id):
    add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "200", "--category", "Groceries")
    txn = transaction_service.list_transactions(user_id=user_id)[0]

    result = run_cli("transaction", "update", str(txn.id), "--amount", "50")

    assert result.exit_code == 0
    assert "Balance of 'Wallet': $450.00" in result.output


def test_update_transaction_invalid_type(run_cli, wallet, transaction_service, user_id):
    add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "200", "--category", "Groceries")
    txn = transaction_service.list_transactions(user_id=user_id)[0]

    result = run_cli("transaction", "update", str(txn.id), "--type", "credit")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_delete_transaction(run_cli, wallet, transaction_service, user_id):
    add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "200", "--category", "Groceries")
    txn = transaction_service.list_transactions(user_id=user_id)[0]

    result = run_cli("transaction", "delete", str(txn.id))

    assert result.exit_code == 0
    assert "Balance of 'Wallet': $500.00" in result.output


def test_delete_missing_transaction(run_cli, wallet):
    result = run_cli("transaction", "delete", "999")

    assert result.exit_code == 1
    assert "Transaction 999 not found" in result.output


def test_clone_transaction(run_cli, wallet, transaction_service, user_id):
    add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "200", "--category", "Groceries")
    txn = transaction_service.list_transactions(user_id=user_id)[0]

    result = run_cli("transaction", "clone", str(txn.id), "--date", "2024-02-15")

    assert result.exit_code == 0
    assert f"from {txn.id}" in result.output
    assert "Found 2 transaction(s)" in run_cli("transaction", "list").output


def test_add_sub_cent_amount(run_cli, wallet):
    result = add(run_cli, "--account", "Wallet", "--type", "expense", "--amount", "0.004", "--category", "Groceries")

    assert result.exit_code == 1
    assert "fractions of a cent" in result.output
