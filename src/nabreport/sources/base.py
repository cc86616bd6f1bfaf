"""Abstract budget data source interface."""

from abc import ABC, abstractmethod
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from nabreport.domain.entities import (
    BudgetSummary,
    Category,
    CategoryGroup,
    Transaction,
)


class BudgetSource(ABC):
    """Abstract source of budget data for nabreport."""

    @abstractmethod
    def list_budgets(self) -> list[BudgetSummary]:
        """List the budgets visible to the caller."""
        pass

    @abstractmethod
    def get_category_groups(
        self, budget_id: str
    ) -> tuple[list[CategoryGroup], list[Category]]:
        """Get category groups and their categories for a budget."""
        pass

    @abstractmethod
    def get_month_category(
        self, budget_id: str, month: date, category_id: str
    ) -> Category:
        """Get a category with the budget snapshot of the month containing ``month``."""
        pass

    @abstractmethod
    def get_transactions(self, budget_id: str, since_date: date) -> list[Transaction]:
        """Get categorised transactions dated on or after ``since_date``."""
        pass
