"""Expense category domain service."""

from typing import Optional

from plantbook.database.base import Database
from plantbook.domain.entities import ExpenseCategory
from plantbook.domain.errors import ConflictError, ValidationError


class ExpenseCategoryService:
    """Service for managing expense category labels."""

    def __init__(self, db: Database):
        """Initialize expense category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, code: str, name: str, description: Optional[str] = None) -> int:
        """Create an expense category.

        Args:
            code: Unique category code
            name: Category name
            description: Optional description

        Returns:
            Category ID

        Raises:
            ValidationError: If code or name is empty
            ConflictError: If the code already exists
        """
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("category_code", "is required")
        if not name:
            raise ValidationError("category_name", "is required")

        for category in self.db.list_expense_categories():
            if category.category_code == code:
                raise ConflictError(f"Expense category with code '{code}' already exists")

        return self.db.create_expense_category(
            category_code=code, category_name=name, description=description
        )

    def list_categories(self) -> list[ExpenseCategory]:
        """List all expense categories.

        Returns:
            List of expense categories ordered by name
        """
        return self.db.list_expense_categories()
