"""Aggregation of transactions into the category x period report table."""

from bisect import bisect_right
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from nabreport.domain.entities import (
    ZERO,
    BudgetSummary,
    Category,
    CategoryGroup,
    GroupTotal,
    Period,
    ReportRow,
    ReportTable,
    Transaction,
    WatchedGroup,
)
from nabreport.domain.errors import InvariantViolation, UnknownCategory
from nabreport.domain.periods import check_periods
from nabreport.logging_setup import get_logger

logger = get_logger(__name__)

WatchListInput = Iterable[Union[WatchedGroup, tuple[str, str]]]


def normalize_watch_list(watch_list: Optional[WatchListInput]) -> tuple[WatchedGroup, ...]:
    """Accept ``WatchedGroup`` entries or ``(name, color)`` pairs, keeping order."""
    normalized = []
    for entry in watch_list or ():
        if isinstance(entry, WatchedGroup):
            normalized.append(entry)
        else:
            name, color = entry
            normalized.append(WatchedGroup(name=name, color=color))
    return tuple(normalized)


def find_budget_id(budgets: Sequence[BudgetSummary], budget_name: str) -> Optional[str]:
    """Return the id of the first budget called ``budget_name``."""
    for budget in budgets:
        if budget.name == budget_name:
            return budget.id
    return None


def missing_watch_groups(
    groups: Sequence[CategoryGroup], watch_list: WatchListInput
) -> list[str]:
    """Return watch-list group names that match no known group, sorted."""
    available = {group.name for group in groups}
    return sorted(
        watched.name
        for watched in normalize_watch_list(watch_list)
        if watched.name not in available
    )


def watched_categories(
    categories: Sequence[Category],
    groups: Sequence[CategoryGroup],
    watch_list: WatchListInput,
) -> list[Category]:
    """Return visible categories belonging to watch-listed groups."""
    watched_names = {watched.name for watched in normalize_watch_list(watch_list)}
    watched_group_ids = {
        group.id for group in groups if group.name in watched_names and not group.hidden
    }
    return [
        category
        for category in categories
        if category.group_id in watched_group_ids and not category.hidden
    ]


def locate_period(starts: Sequence, periods: Sequence[Period], day) -> Optional[int]:
    """Return the index of the period containing ``day``, or None.

    ``starts`` holds the start date of each period, in order.
    """
    index = bisect_right(starts, day) - 1
    if index < 0 or day > periods[index].end:
        return None
    return index


def group_sort_key(group: CategoryGroup, watch_positions: dict[str, int]) -> tuple:
    """Watched groups first in watch-list order, then the rest by name."""
    position = watch_positions.get(group.name)
    if position is not None:
        return (0, position, group.name, group.id)
    return (1, 0, group.name, group.id)


def build_report(
    periods: Sequence[Period],
    categories: Sequence[Category],
    groups: Sequence[CategoryGroup],
    watch_list: Optional[WatchListInput],
    transactions: Iterable[Transaction],
    show_all_rows: bool = False,
) -> ReportTable:
    """Build the report table for a period sequence.

    Args:
        periods: Periods from partition_weeks, in order
        categories: Category snapshot
        groups: Category group snapshot
        watch_list: Ordered (group name, color) entries
        transactions: Transactions to aggregate; dates outside the periods
            are ignored
        show_all_rows: If True, include categories without activity

    Returns:
        ReportTable with one row per selected category

    Raises:
        UnknownCategory: If a transaction references a category that is not
            in ``categories``
        InvariantViolation: If the periods are malformed or a category
            references an unknown group
    """
    periods = tuple(periods)
    check_periods(periods)
    watched = normalize_watch_list(watch_list)

    group_index = {group.id: group for group in groups}
    category_index: dict[str, Category] = {}
    for category in categories:
        if category.group_id not in group_index:
            raise InvariantViolation(
                f"Category '{category.name}' references unknown group '{category.group_id}'"
            )
        category_index[category.id] = category

    cells = accumulate_cells(periods, category_index, transactions)

    rows = select_rows(
        periods, category_index.values(), group_index, watched, cells, show_all_rows
    )
    group_totals = build_group_totals(rows, watched, len(periods))
    total_cells = tuple(
        sum((row.cells[index] for row in rows), ZERO) for index in range(len(periods))
    )

    return ReportTable(
        periods=periods,
        rows=rows,
        group_totals=group_totals,
        total_cells=total_cells,
        grand_total=sum(total_cells, ZERO),
        watch_list=watched,
        show_all_rows=show_all_rows,
    )


def accumulate_cells(
    periods: Sequence[Period],
    category_index: dict[str, Category],
    transactions: Iterable[Transaction],
) -> dict[str, list[Decimal]]:
    """Sum transaction amounts per category and period index."""
    starts = [period.start for period in periods]
    cells: dict[str, list[Decimal]] = defaultdict(lambda: [ZERO] * len(periods))
    out_of_window = 0

    for txn in transactions:
        if txn.category_id not in category_index:
            raise UnknownCategory(txn.category_id, txn)
        index = locate_period(starts, periods, txn.date) if periods else None
        if index is None:
            out_of_window += 1
            continue
        cells[txn.category_id][index] += txn.amount

    if out_of_window:
        logger.debug("Ignored %d transactions outside the report window", out_of_window)
    return dict(cells)


def select_rows(
    periods: Sequence[Period],
    categories: Iterable[Category],
    group_index: dict[str, CategoryGroup],
    watched: Sequence[WatchedGroup],
    cells: dict[str, list[Decimal]],
    show_all_rows: bool,
) -> tuple[ReportRow, ...]:
    """Pick and order the category rows shown in the report."""
    watch_positions: dict[str, int] = {}
    for position, entry in enumerate(watched):
        watch_positions.setdefault(entry.name, position)

    empty = [ZERO] * len(periods)
    rows = []
    for category in categories:
        group = group_index[category.group_id]
        row_cells = tuple(cells.get(category.id, empty))
        row = ReportRow(
            category=category,
            group=group,
            cells=row_cells,
            total=sum(row_cells, ZERO),
        )
        if row.is_active:
            rows.append(row)
        elif show_all_rows and not (category.hidden or group.hidden):
            rows.append(row)

    rows.sort(
        key=lambda row: (
            group_sort_key(row.group, watch_positions),
            row.category.name,
            row.category.id,
        )
    )
    return tuple(rows)


def build_group_totals(
    rows: Sequence[ReportRow], watched: Sequence[WatchedGroup], period_count: int
) -> tuple[GroupTotal, ...]:
    """Roll category rows up into one subtotal per group, in row order."""
    colors: dict[str, str] = {}
    for entry in watched:
        colors.setdefault(entry.name, entry.color)

    members: dict[str, list[ReportRow]] = {}
    for row in rows:
        members.setdefault(row.group.id, []).append(row)

    totals = []
    for group_rows in members.values():
        group = group_rows[0].group
        group_cells = tuple(
            sum((row.cells[index] for row in group_rows), ZERO)
            for index in range(period_count)
        )
        totals.append(
            GroupTotal(
                group=group,
                cells=group_cells,
                total=sum(group_cells, ZERO),
                category_ids=tuple(row.category.id for row in group_rows),
                color=colors.get(group.name),
            )
        )
    return tuple(totals)
