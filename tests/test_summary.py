"""Tests for summary commands."""

import pytest


@pytest.fixture
def activity(run_cli, cash_account, receivable_account, sample_categories):
    """Two months of activity on a cash and a receivable account."""
    for args in [
        ("Wallet", "expense", "200", "Groceries", "2024-01-10"),
        ("Wallet", "income", "50", "Salary", "2024-01-20"),
        ("Owed by Bob", "credit", "100", "Other Income", "2024-02-01"),
        ("Owed by Bob", "payment", "30", "Other Income", "2024-02-15"),
    ]:
        account, txn_type, amount, category, day = args
        result = run_cli(
            "add", "--account", account, "--type", txn_type, "--amount", amount,
            "--category", category, "--date", day,
        )
        assert result.exit_code == 0, result.output


def test_summary_balances(run_cli, activity):
    result = run_cli("summary", "balances")

    assert result.exit_code == 0
    assert "$350.00" in result.output
    assert "$70.00" in result.output
    assert "$420.00" in result.output


def test_summary_balances_empty(run_cli):
    result = run_cli("summary", "balances")

    assert result.exit_code == 0
    assert "No accounts found." in result.output


def test_summary_monthly(run_cli, activity):
    result = run_cli("summary", "monthly")

    assert result.exit_code == 0
    assert "2024-01" in result.output
    assert "-$150.00" in result.output
    assert "2024-02" in result.output


def test_summary_monthly_range(run_cli, activity):
    result = run_cli("summary", "monthly", "--start-date", "2024-02-01")

    assert "2024-01" not in result.output
    assert "2024-02" in result.output


def test_summary_categories(run_cli, activity):
    result = run_cli("summary", "categories", "--end-date", "2024-01-31")

    assert result.exit_code == 0
    assert "Groceries" in result.output
    assert "-$200.00" in result.output
    assert "Other Income" not in result.output


def test_summary_rejects_two_periods(run_cli, activity):
    result = run_cli("summary", "categories", "--this-month", "--last-year")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_summary_with_json_logs(cli_runner, temp_db, user_id, activity):
    from moneytrack.cli.main import cli

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "--user", user_id, "--log-level", "debug", "--log-json", "summary", "balances"],
    )

    assert result.exit_code == 0
    assert '"service": "moneytrack"' in result.output
