"""Fixed-width text rendering of a report table."""

from decimal import Decimal
from typing import Sequence

from nabreport.domain.entities import DetailLine, ReportTable
from nabreport.render.formatting import format_currency, period_label

LABEL_WIDTH = 32
GROUP_WIDTH = 24
MIN_AMOUNT_WIDTH = 12


def _amount(value: Decimal, symbol: str) -> str:
    return format_currency(value, show_zero=False, symbol=symbol) or "-"


def _amount_width(table: ReportTable, lines: Sequence[DetailLine], symbol: str) -> int:
    widths = [MIN_AMOUNT_WIDTH]
    widths.extend(len(period_label(period)) for period in table.periods)
    for line in lines:
        widths.extend(len(_amount(cell, symbol)) for cell in line.cells)
        widths.append(len(_amount(line.total, symbol)))
    return max(widths)


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def render_lines(
    table: ReportTable,
    lines: Sequence[DetailLine],
    first_header: str,
    symbol: str,
    with_group_column: bool,
) -> list[str]:
    """Render detail or summary lines as a list of text rows."""
    amount_width = _amount_width(table, lines, symbol)
    headers = [period_label(period) for period in table.periods] + ["Total"]

    def row(group: str, label: str, values: Sequence[str]) -> str:
        prefix = f"{_fit(group, GROUP_WIDTH):<{GROUP_WIDTH}} " if with_group_column else ""
        cells = " ".join(f"{value:>{amount_width}}" for value in values)
        return f"{prefix}{_fit(label, LABEL_WIDTH):<{LABEL_WIDTH}} {cells}"

    header = row("Category Group", first_header, headers)
    rule = "-" * len(header)
    output = [header, rule]
    for line in lines:
        if line.kind == "total":
            output.append(rule)
        group_name = line.group.name if (line.group and line.kind == "category") else ""
        values = [_amount(cell, symbol) for cell in line.cells]
        values.append(_amount(line.total, symbol))
        output.append(row(group_name, line.label, values))
        if line.kind == "group_total" and with_group_column:
            output.append("")
    return output


def render_table(table: ReportTable, symbol: str = "£") -> str:
    """Render the detail view followed by the category group totals."""
    if not table.rows:
        return "No transactions found.\n"

    output = render_lines(
        table, table.detail_lines(), "Category", symbol, with_group_column=True
    )
    output.append("")
    output.append("Category group totals")
    output.extend(
        render_lines(
            table, table.group_summary(), "Category Group", symbol, with_group_column=False
        )
    )
    return "\n".join(output) + "\n"
