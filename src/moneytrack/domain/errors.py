"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidTransactionType(ValidationError):
    """Transaction type not permitted for the target account."""


class InvalidInstallmentPlan(ValidationError):
    """Malformed installment request at account creation."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFound(NotFoundError):
    """Referenced account does not exist."""


class CategoryNotFound(NotFoundError):
    """Referenced category does not exist."""


class InstallmentNotFound(NotFoundError):
    """Referenced installment does not exist for the account."""


class TransactionNotFound(NotFoundError):
    """Referenced transaction does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ProtectedCategoryError(DependencyError):
    """Default categories cannot be deleted."""


class DataConsistencyWarning(UserWarning):
    """Stored history no longer matches the account configuration.

    Never raised: balance replay collects these and skips the record.
    """

    def __init__(self, message: str, transaction_id: int | None = None):
        super().__init__(message)
        self.transaction_id = transaction_id


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def installment_not_found(installment_id: int, account_id: int | None = None) -> str:
    """Return message for missing installment."""
    if account_id is None:
        return f"Installment {installment_id} not found"
    return f"Installment {installment_id} not found for account {account_id}"


def invalid_transaction_type(type_label: str, account_name: str, valid: list[str]) -> str:
    """Return message for a type the account does not accept."""
    allowed = ", ".join(valid) if valid else "none"
    return (
        f"Transaction type '{type_label}' is not valid for account '{account_name}' "
        f"(allowed: {allowed})"
    )


def duplicate_account_name(name: str) -> str:
    """Return message for a duplicate account name."""
    return f"Account with name '{name}' already exists"


def duplicate_category_name(name: str) -> str:
    """Return message for a duplicate category name."""
    return f"Category with name '{name}' already exists"


def category_delete_blocked(category_id: int, transaction_count: int) -> str:
    """Return message when a category is still referenced by transactions."""
    return (
        f"Cannot delete category {category_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please recategorize or delete them first."
    )
