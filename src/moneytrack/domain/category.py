"""Category domain service."""

import logging
from typing import Any, Optional

from moneytrack.database.base import Database
from moneytrack.domain.account import require_user_id
from moneytrack.domain.entities import Category, CategoryType
from moneytrack.domain.errors import (
    CategoryNotFound,
    ConflictError,
    DependencyError,
    ProtectedCategoryError,
    category_delete_blocked,
    category_not_found,
    duplicate_category_name,
)
from moneytrack.domain.validation import coerce_enum, require_name

logger = logging.getLogger(__name__)


# Default categories created for a new user
DEFAULT_CATEGORIES = [
    ("Salary", CategoryType.INCOME, "Wages and salary"),
    ("Investments", CategoryType.INCOME, "Interest, dividends and returns"),
    ("Other Income", CategoryType.INCOME, None),
    ("Groceries", CategoryType.EXPENSE, None),
    ("Restaurants", CategoryType.EXPENSE, None),
    ("Transportation", CategoryType.EXPENSE, None),
    ("Housing", CategoryType.EXPENSE, "Rent, mortgage and maintenance"),
    ("Utilities", CategoryType.EXPENSE, "Electricity, water, internet and phone"),
    ("Health", CategoryType.EXPENSE, None),
    ("Entertainment", CategoryType.EXPENSE, None),
    ("Debt Payments", CategoryType.EXPENSE, "Loan and installment payments"),
    ("Other Expenses", CategoryType.EXPENSE, None),
]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        user_id: str,
        name: str,
        type: CategoryType | str = CategoryType.EXPENSE,
        description: Optional[str] = None,
        is_default: bool = False,
    ) -> Category:
        """Create a category.

        Raises:
            ValidationError: If name or type is invalid
            ConflictError: If the user already has a category with that name
        """
        user_id = require_user_id(user_id)
        name = require_name(name, "Category name")
        type = coerce_enum(CategoryType, type, "category type")
        self._check_unique_name(user_id, name)

        category = self.db.create_category(
            user_id=user_id,
            name=name,
            type=type,
            description=description,
            is_default=is_default,
        )
        logger.info("Created %s category %s '%s'", type.value, category.id, name)
        return category

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int, user_id: Optional[str] = None) -> Category:
        """Get category by ID, or raise CategoryNotFound."""
        category = self.db.get_category(category_id)
        if category is None or (user_id is not None and category.user_id != user_id):
            raise CategoryNotFound(category_not_found(category_id))
        return category

    def require_category_by_name(self, user_id: str, name: str) -> Category:
        """Find a user's category by exact name."""
        for category in self.db.list_categories(user_id):
            if category.name == name:
                return category
        raise CategoryNotFound(f"Category '{name}' not found")

    def list_categories(self, user_id: str, type: Optional[CategoryType | str] = None) -> list[Category]:
        """List a user's categories, optionally of one type."""
        if type is not None:
            type = coerce_enum(CategoryType, type, "category type")
        return self.db.list_categories(user_id, type=type)

    def update_category(
        self,
        category_id: int,
        user_id: str,
        name: Optional[str] = None,
        type: Optional[CategoryType | str] = None,
        description: Optional[str] = None,
    ) -> Category:
        """Update category fields. Only provided fields change."""
        user_id = require_user_id(user_id)
        category = self.require_category(category_id, user_id)
        fields: dict[str, Any] = {}

        if name is not None:
            name = require_name(name, "Category name")
            if name != category.name:
                self._check_unique_name(user_id, name, exclude_id=category_id)
                fields["name"] = name
        if type is not None:
            fields["type"] = coerce_enum(CategoryType, type, "category type")
        if description is not None:
            fields["description"] = description

        if not fields:
            return category
        return self.db.update_category(category_id, **fields)

    def delete_category(self, category_id: int, user_id: str) -> None:
        """Delete a category.

        Raises:
            CategoryNotFound: If category doesn't exist
            ProtectedCategoryError: If it is a default category
            DependencyError: If transactions still use it
        """
        user_id = require_user_id(user_id)
        category = self.require_category(category_id, user_id)
        if category.is_default:
            raise ProtectedCategoryError(f"Default category '{category.name}' cannot be deleted")

        transaction_count = self.db.count_category_transactions(category_id)
        if transaction_count > 0:
            raise DependencyError(category_delete_blocked(category_id, transaction_count))

        self.db.delete_category(category_id)
        logger.info("Deleted category %s '%s'", category_id, category.name)

    def seed_default_categories(self, user_id: str) -> list[Category]:
        """Create the default categories the user does not have yet.

        Returns:
            The categories created by this call
        """
        user_id = require_user_id(user_id)
        existing = {cat.name for cat in self.db.list_categories(user_id)}
        created = []
        with self.db.unit_of_work():
            for name, category_type, description in DEFAULT_CATEGORIES:
                if name in existing:
                    continue
                created.append(
                    self.db.create_category(
                        user_id=user_id,
                        name=name,
                        type=category_type,
                        description=description,
                        is_default=True,
                    )
                )
        logger.info("Seeded %d default categories for user %s", len(created), user_id)
        return created

    def _check_unique_name(self, user_id: str, name: str, exclude_id: Optional[int] = None) -> None:
        for cat in self.db.list_categories(user_id):
            if cat.id != exclude_id and cat.name == name:
                raise ConflictError(duplicate_category_name(name))
