"""Shared pytest fixtures for moneytrack tests."""

import logging
import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from moneytrack.database.factories import create_sqlite_database
from moneytrack.domain.account import AccountService
from moneytrack.domain.category import CategoryService
from moneytrack.domain.installment import InstallmentService
from moneytrack.domain.summary import SummaryService
from moneytrack.domain.transaction import TransactionService
from moneytrack.logging_config import HANDLER_NAME


@pytest.fixture(autouse=True)
def detach_cli_log_handler():
    """Drop the stderr handler a CLI invocation installs on the root logger."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    """Current user for service calls."""
    return "alice"


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def installment_service(temp_db):
    """Create an InstallmentService with a temporary database."""
    return InstallmentService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_categories(category_service, user_id):
    """Seed the default categories and return them keyed by name."""
    category_service.seed_default_categories(user_id)
    return {cat.name: cat for cat in category_service.list_categories(user_id)}


@pytest.fixture
def cash_account(account_service, user_id):
    """A plain cash account opened with 500."""
    return account_service.create_account(
        user_id=user_id, name="Wallet", kind="cash", initial_balance=Decimal("500")
    )


@pytest.fixture
def receivable_account(account_service, user_id):
    """A checking account for money owed to the user."""
    return account_service.create_account(
        user_id=user_id, name="Owed by Bob", kind="checking", payment_type="receivable"
    )


@pytest.fixture
def payable_account(account_service, user_id):
    """A checking account for money the user owes."""
    return account_service.create_account(
        user_id=user_id, name="Owed to Carol", kind="checking", payment_type="payable"
    )


@pytest.fixture
def installment_account(account_service, user_id):
    """A payable checking account with a 12-month plan over 1200."""
    return account_service.create_account(
        user_id=user_id,
        name="Car loan",
        kind="checking",
        payment_type="payable",
        initial_balance=Decimal("1200"),
        has_installments=True,
        total_installments=12,
        created_on=date(2024, 1, 15),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, temp_db, user_id):
    """Invoke the CLI against the temporary database as the test user."""
    from moneytrack.cli.main import cli

    def invoke(*args, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--user", user_id, *args],
            input=input,
        )

    return invoke
