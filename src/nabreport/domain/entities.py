"""Domain model entities for nabreport.

These are pure data classes representing budget data and the report built
from it, independent of where the data came from. Data sources convert their
own payloads into these entities; renderers only ever read them.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator, Optional

from nabreport.domain.errors import InvalidRange, invalid_range

ZERO = Decimal("0")


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRange(invalid_range(self.start, self.end))

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class Period:
    """One report column: a contiguous date span inside a single month.

    A Sunday to Saturday week that crosses a month boundary is represented as
    two periods sharing ``week_index``, both flagged ``is_split``.
    """

    start: date
    end: date
    week_index: int
    month_key: tuple[int, int]
    is_split: bool = False

    @property
    def week_start(self) -> date:
        """Sunday that anchors this period's week."""
        return self.start - timedelta(days=(self.start.weekday() + 1) % 7)

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)

    @property
    def week_number(self) -> int:
        """1-based week of the year; week 1 contains January 1st."""
        jan_first = date(self.month_key[0], 1, 1)
        anchor = jan_first - timedelta(days=(jan_first.weekday() + 1) % 7)
        return (self.week_start - anchor).days // 7 + 1

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def dates(self) -> list[date]:
        return [self.start + timedelta(days=offset) for offset in range(self.days)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CategoryGroup:
    """Category group domain entity."""

    id: str
    name: str
    hidden: bool = False


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    The budget fields are a per-month snapshot and are optional; the
    aggregation itself only needs ``id``, ``name`` and ``group_id``.
    """

    id: str
    name: str
    group_id: str
    hidden: bool = False
    budgeted: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    goal_cadence: str = "annual"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    date: date
    category_id: str
    amount: Decimal
    payee_name: Optional[str] = None


@dataclass(frozen=True)
class BudgetSummary:
    """Budget as listed by a data source."""

    id: str
    name: str


@dataclass(frozen=True)
class BudgetSnapshot:
    """Immutable set of budget data for one report run."""

    budget_id: str
    groups: tuple[CategoryGroup, ...]
    categories: tuple[Category, ...]
    transactions: tuple[Transaction, ...]


@dataclass(frozen=True)
class WatchedGroup:
    """Entry of the ordered category group watch list."""

    name: str
    color: str


@dataclass(frozen=True)
class ReportRow:
    """Category row of a report: one cell per period plus the row total."""

    category: Category
    group: CategoryGroup
    cells: tuple[Decimal, ...]
    total: Decimal

    @property
    def is_active(self) -> bool:
        return any(cell != ZERO for cell in self.cells)


@dataclass(frozen=True)
class GroupTotal:
    """Per-group roll-up of the selected category rows."""

    group: CategoryGroup
    cells: tuple[Decimal, ...]
    total: Decimal
    category_ids: tuple[str, ...]
    color: Optional[str] = None


@dataclass(frozen=True)
class DetailLine:
    """Line of the detail view.

    ``kind`` is ``"category"``, ``"group_total"`` or ``"total"``.
    """

    kind: str
    label: str
    group: Optional[CategoryGroup]
    cells: tuple[Decimal, ...]
    total: Decimal
    category: Optional[Category] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class ReportTable:
    """Immutable result of an aggregation run."""

    periods: tuple[Period, ...]
    rows: tuple[ReportRow, ...]
    group_totals: tuple[GroupTotal, ...]
    total_cells: tuple[Decimal, ...]
    grand_total: Decimal
    watch_list: tuple[WatchedGroup, ...] = ()
    show_all_rows: bool = False

    @property
    def total_row(self) -> DetailLine:
        return DetailLine(
            kind="total",
            label="Total",
            group=None,
            cells=self.total_cells,
            total=self.grand_total,
        )

    def row_for(self, category_id: str) -> Optional[ReportRow]:
        for row in self.rows:
            if row.category.id == category_id:
                return row
        return None

    def cell(self, category_id: str, period_index: int) -> Decimal:
        row = self.row_for(category_id)
        if row is None:
            return ZERO
        return row.cells[period_index]

    def group_total(self, group_id: str) -> Optional[GroupTotal]:
        for subtotal in self.group_totals:
            if subtotal.group.id == group_id:
                return subtotal
        return None

    def color_for(self, group_name: str) -> Optional[str]:
        for watched in self.watch_list:
            if watched.name == group_name:
                return watched.color
        return None

    def rows_in_group(self, group_id: str) -> Iterator[ReportRow]:
        return (row for row in self.rows if row.group.id == group_id)

    def detail_lines(self) -> tuple[DetailLine, ...]:
        """Category rows with each group's subtotal after its categories."""
        lines: list[DetailLine] = []
        for subtotal in self.group_totals:
            for row in self.rows_in_group(subtotal.group.id):
                lines.append(
                    DetailLine(
                        kind="category",
                        label=row.category.name,
                        group=row.group,
                        cells=row.cells,
                        total=row.total,
                        category=row.category,
                        color=subtotal.color,
                    )
                )
            lines.append(_group_line(subtotal, f"Total {subtotal.group.name}"))
        lines.append(self.total_row)
        return tuple(lines)

    def group_summary(self) -> tuple[DetailLine, ...]:
        """One line per group followed by the grand total."""
        lines = [_group_line(subtotal, subtotal.group.name) for subtotal in self.group_totals]
        lines.append(self.total_row)
        return tuple(lines)


def _group_line(subtotal: GroupTotal, label: str) -> DetailLine:
    return DetailLine(
        kind="group_total",
        label=label,
        group=subtotal.group,
        cells=subtotal.cells,
        total=subtotal.total,
        color=subtotal.color,
    )
