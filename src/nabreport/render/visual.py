"""Standalone HTML rendering of a report table.

Each watched category group is a block of category rows in the group's
watch-list color followed by a darker subtotal row. Planned and per-month
figures come from the budget snapshot attached to each category; spent
figures come from the report cells, shown as positive spending.
"""

from dataclasses import dataclass
from decimal import Decimal
from html import escape
from typing import Optional

from nabreport.domain.entities import ZERO, Category, ReportRow, ReportTable
from nabreport.render.formatting import (
    DEFAULT_CURRENCY,
    darken_hex,
    format_currency,
    period_label,
    week_label,
)

TOTAL_COLOR = "#b7b7b7"
GROUP_TOTAL_FACTOR = 0.85
ANNUAL_FACTOR = 0.7
MONTHS = Decimal(12)


@dataclass(frozen=True)
class RowData:
    label: str
    planned: Decimal
    per_month: Decimal
    cells: tuple[Decimal, ...]
    spent: Decimal
    remaining: Decimal
    color: str
    is_total: bool = False
    is_annual: bool = False


def planned_amounts(category: Category) -> tuple[Decimal, Decimal]:
    """Return (planned for the year, planned per month) for a category."""
    budgeted = category.budgeted or ZERO
    planned = budgeted if category.goal_cadence == "annual" else budgeted * MONTHS
    return planned, planned / MONTHS


def _row_data(row: ReportRow, color: str) -> RowData:
    planned, per_month = planned_amounts(row.category)
    return RowData(
        label=row.category.name,
        planned=planned,
        per_month=per_month,
        cells=row.cells,
        spent=row.total,
        remaining=row.category.balance or ZERO,
        color=color,
        is_annual=row.category.goal_cadence == "annual",
    )


def row_html(data: RowData, symbol: str) -> str:
    class_name = "total" if data.is_total else "group"
    show_values = data.is_total or data.spent != 0
    annual_style = (
        f' style="background-color: {darken_hex(data.color, ANNUAL_FACTOR)};"'
        if data.is_annual
        else ""
    )
    remaining = (
        ""
        if data.is_total or not show_values
        else format_currency(data.remaining, True, symbol)
    )

    cells = [
        f'      <tr class="{class_name}" style="background-color: {data.color};">',
        f"        <td>{escape(data.label)}</td>",
        f'        <td class="number"{annual_style}>'
        f"{format_currency(data.planned, data.is_total, symbol)}</td>",
        f'        <td class="number"{annual_style}>'
        f"{format_currency(data.per_month, data.is_total, symbol)}</td>",
    ]
    for cell in data.cells:
        cells.append(
            f'        <td class="number">{format_currency(-cell, data.is_total, symbol)}</td>'
        )
    cells.append(
        f'        <td class="number">{format_currency(-data.spent, show_values, symbol)}</td>'
    )
    cells.append(f'        <td class="number">{remaining}</td>')
    cells.append("      </tr>")
    return "\n".join(cells)


def _sum(values) -> Decimal:
    return sum(values, ZERO)


def _has_spending(data: RowData) -> bool:
    return data.spent != 0 or any(cell != 0 for cell in data.cells)


def body_rows(table: ReportTable, show_all_rows: bool, symbol: str) -> list[str]:
    """Build the ``<tr>`` elements for each watched group and the grand total.

    Only groups on the watch list are shown, in watch-list order, since the
    budget figures are fetched for watched categories only. Group subtotals
    cover every row of the group; rows without spending are only listed
    when ``show_all_rows`` is set, and a group with nothing to list is
    left out.
    """
    rows: list[str] = []
    period_count = len(table.periods)
    total_planned = ZERO
    total_per_month = ZERO
    total_cells = [ZERO] * period_count
    total_spent = ZERO

    for subtotal in table.group_totals:
        color = table.color_for(subtotal.group.name)
        if color is None:
            continue
        group_rows = [_row_data(row, color) for row in table.rows_in_group(subtotal.group.id)]
        visible = [data for data in group_rows if show_all_rows or _has_spending(data)]
        if not visible:
            continue

        group_planned = _sum(data.planned for data in group_rows)
        group_per_month = _sum(data.per_month for data in group_rows)
        total_planned += group_planned
        total_per_month += group_per_month
        total_cells = [a + b for a, b in zip(total_cells, subtotal.cells)]
        total_spent += subtotal.total

        rows.extend(row_html(data, symbol) for data in visible)
        rows.append(
            row_html(
                RowData(
                    label=f"Total {subtotal.group.name}",
                    planned=group_planned,
                    per_month=group_per_month,
                    cells=subtotal.cells,
                    spent=subtotal.total,
                    remaining=_sum(data.remaining for data in group_rows),
                    color=darken_hex(color, GROUP_TOTAL_FACTOR),
                    is_total=True,
                ),
                symbol,
            )
        )

    if rows:
        rows.append(
            row_html(
                RowData(
                    label="Total",
                    planned=total_planned,
                    per_month=total_per_month,
                    cells=tuple(total_cells),
                    spent=total_spent,
                    remaining=ZERO,
                    color=TOTAL_COLOR,
                    is_total=True,
                ),
                symbol,
            )
        )
    return rows


def build_visual_report_html(
    table: ReportTable,
    planned_year: Optional[int] = None,
    show_all_rows: Optional[bool] = None,
    symbol: str = DEFAULT_CURRENCY,
) -> str:
    """Render the report as a standalone HTML document.

    Args:
        table: Report table, ideally built with show_all_rows=True so group
            planned figures include categories without spending
        planned_year: Year shown in the planned column headers; defaults to
            the year of the first period
        show_all_rows: List categories without spending; defaults to the
            table's own setting
        symbol: Currency symbol
    """
    if show_all_rows is None:
        show_all_rows = table.show_all_rows
    if planned_year is None:
        planned_year = table.periods[0].start.year if table.periods else 0

    label = escape(week_label(table.periods))
    period_headers = "\n".join(
        f"        <th>{escape(period_label(period))}</th>" for period in table.periods
    )
    body = "\n".join(body_rows(table, show_all_rows, symbol))

    html = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="utf-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1">',
        "  <title>Budget Visual Report</title>",
        "  <style>",
        STYLE,
        "  </style>",
        "</head>",
        "<body>",
        f"  <h1>{label}</h1>",
        '  <table class="selectable">',
        "    <thead>",
        "      <tr>",
        '        <th rowspan="2">Category</th>',
        f'        <th rowspan="2">{planned_year} (planned)</th>',
        f'        <th rowspan="2">{planned_year} per month</th>',
        f'        <th colspan="{len(table.periods) + 2}">{label}</th>',
        "      </tr>",
        "      <tr>",
        period_headers,
        "        <th>Spent</th>",
        "        <th>Remaining in period</th>",
        "      </tr>",
        "    </thead>",
        "    <tbody>",
        body,
        "    </tbody>",
        "  </table>",
        "  <script>",
        SCRIPT,
        "  </script>",
        "</body>",
        "</html>",
    ]
    return "\n".join(line for line in html if line) + "\n"


STYLE = """\
    :root {
      --grid: #d9d9d9;
      --header-bg: #f7f3e9;
      --text: #1f1f1f;
    }
    body {
      margin: 24px;
      font-family: "Alegreya Sans", "Trebuchet MS", sans-serif;
      color: var(--text);
      background: linear-gradient(180deg, #fbf9f4 0%, #f3efe7 100%);
    }
    h1 {
      font-size: 20px;
      margin: 0 0 16px 0;
      letter-spacing: 0.02em;
      text-transform: uppercase;
    }
    table {
      width: 100%;
      border-collapse: collapse;
      background: #fffefc;
      box-shadow: 0 6px 24px rgba(0, 0, 0, 0.08);
      user-select: none;
    }
    th, td {
      border: 1px solid var(--grid);
      padding: 6px 8px;
      font-size: 13px;
      vertical-align: middle;
    }
    th {
      background: var(--header-bg);
      text-align: left;
      font-weight: 700;
    }
    td.number {
      text-align: right;
      white-space: nowrap;
    }
    tr.total td {
      font-weight: 700;
      border-top: 2px solid #9a9a9a;
    }
    td.selected {
      outline: 2px solid #2a5d86;
      outline-offset: -2px;
    }
    @media (max-width: 760px) {
      body { margin: 12px; }
      th, td { font-size: 12px; }
    }"""

# Rectangular cell selection; copying puts the selection on the clipboard as
# tab-separated text.
SCRIPT = """\
    const table = document.querySelector("table.selectable");
    if (table) {
      const grid = Array.from(table.querySelectorAll("tbody tr")).map((row, r) =>
        Array.from(row.querySelectorAll("td")).map((cell, c) => {
          cell.dataset.row = String(r);
          cell.dataset.col = String(c);
          return cell;
        })
      );
      let selecting = false;
      let startCell = null;
      let selection = null;
      const select = (endCell) => {
        const rows = [Number(startCell.dataset.row), Number(endCell.dataset.row)];
        const cols = [Number(startCell.dataset.col), Number(endCell.dataset.col)];
        selection = {
          minRow: Math.min(...rows), maxRow: Math.max(...rows),
          minCol: Math.min(...cols), maxCol: Math.max(...cols),
        };
        table.querySelectorAll("td.selected").forEach((cell) => cell.classList.remove("selected"));
        for (let r = selection.minRow; r <= selection.maxRow; r += 1) {
          for (let c = selection.minCol; c <= selection.maxCol; c += 1) {
            const cell = (grid[r] || [])[c];
            if (cell) {
              cell.classList.add("selected");
            }
          }
        }
      };
      table.addEventListener("mousedown", (event) => {
        const cell = event.target.closest("td");
        if (!cell) {
          return;
        }
        selecting = true;
        startCell = cell;
        select(cell);
        event.preventDefault();
      });
      table.addEventListener("mouseover", (event) => {
        const cell = event.target.closest("td");
        if (selecting && cell) {
          select(cell);
        }
      });
      document.addEventListener("mouseup", () => {
        selecting = false;
      });
      document.addEventListener("copy", (event) => {
        if (!selection) {
          return;
        }
        const lines = [];
        for (let r = selection.minRow; r <= selection.maxRow; r += 1) {
          const values = [];
          for (let c = selection.minCol; c <= selection.maxCol; c += 1) {
            const cell = (grid[r] || [])[c];
            values.push(cell ? cell.innerText.trim() : "");
          }
          lines.push(values.join("\\t"));
        }
        event.clipboardData.setData("text/plain", lines.join("\\n"));
        event.preventDefault();
      });
    }"""
