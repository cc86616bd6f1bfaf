"""Budget data sources for nabreport."""

from nabreport.sources.base import BudgetSource
from nabreport.sources.factories import create_ynab_source

__all__ = ["BudgetSource", "create_ynab_source"]
