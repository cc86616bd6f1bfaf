"""Domain layer for nabreport application."""

from nabreport.domain.periods import partition_weeks, month_week_for_date
from nabreport.domain.report import build_report

__all__ = [
    "partition_weeks",
    "month_week_for_date",
    "build_report",
]
