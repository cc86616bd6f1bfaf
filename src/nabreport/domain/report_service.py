"""Report run orchestration domain service."""

from dataclasses import replace
from typing import Sequence

from nabreport.domain.entities import (
    BudgetSnapshot,
    Category,
    DateRange,
    ReportTable,
    WatchedGroup,
)
from nabreport.domain.errors import SourceError, budget_not_found
from nabreport.domain.periods import partition_weeks
from nabreport.domain.report import (
    build_report,
    find_budget_id,
    missing_watch_groups,
    watched_categories,
)
from nabreport.logging_setup import get_logger
from nabreport.sources.base import BudgetSource

logger = get_logger(__name__)


class ReportService:
    """Service that fetches one budget snapshot and builds its report."""

    def __init__(self, source: BudgetSource):
        """Initialize report service.

        Args:
            source: Budget data source
        """
        self.source = source

    def resolve_budget_id(self, budget_name: str) -> str:
        """Return the id of the budget called ``budget_name``.

        Raises:
            SourceError: If no budget has that name
        """
        budget_id = find_budget_id(self.source.list_budgets(), budget_name)
        if budget_id is None:
            raise SourceError(budget_not_found(budget_name))
        return budget_id

    def load_snapshot(
        self,
        budget_name: str,
        date_range: DateRange,
        watch_list: Sequence[WatchedGroup],
    ) -> BudgetSnapshot:
        """Fetch groups, categories and transactions for a report window.

        Watched categories are refreshed with the budget figures of the month
        the window starts in.
        """
        budget_id = self.resolve_budget_id(budget_name)
        groups, categories = self.source.get_category_groups(budget_id)

        missing = missing_watch_groups(groups, watch_list)
        if missing:
            logger.warning(
                "categoryGroupWatchList includes unknown category groups: %s",
                ", ".join(missing),
            )

        month_categories = {
            category.id: self.source.get_month_category(
                budget_id, date_range.start, category.id
            )
            for category in watched_categories(categories, groups, watch_list)
        }
        categories = [
            with_month_figures(category, month_categories.get(category.id))
            for category in categories
        ]

        transactions = self.source.get_transactions(budget_id, date_range.start)
        logger.debug(
            "Loaded %d groups, %d categories, %d transactions for budget %s",
            len(groups),
            len(categories),
            len(transactions),
            budget_id,
        )

        return BudgetSnapshot(
            budget_id=budget_id,
            groups=tuple(groups),
            categories=tuple(categories),
            transactions=tuple(transactions),
        )

    def build_report(
        self,
        budget_name: str,
        date_range: DateRange,
        watch_list: Sequence[WatchedGroup],
        show_all_rows: bool = False,
    ) -> ReportTable:
        """Fetch a snapshot and aggregate it over the weeks of ``date_range``.

        Raises:
            InvalidRange: If the window is inverted
            UnknownCategory: If a transaction has a category not in the budget
            SourceError: If the data source fails
        """
        periods = partition_weeks(date_range)
        snapshot = self.load_snapshot(budget_name, date_range, watch_list)
        return build_report(
            periods,
            snapshot.categories,
            snapshot.groups,
            watch_list,
            snapshot.transactions,
            show_all_rows=show_all_rows,
        )


def with_month_figures(category: Category, month_category: Category | None) -> Category:
    """Copy the month budget figures onto a category, keeping its identity."""
    if month_category is None:
        return category
    return replace(
        category,
        budgeted=month_category.budgeted,
        balance=month_category.balance,
        goal_cadence=month_category.goal_cadence,
    )
