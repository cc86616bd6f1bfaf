"""CSV rendering of a report table."""

import csv
import io
from pathlib import Path

from nabreport.domain.entities import ReportTable
from nabreport.render.formatting import format_plain, period_key

TOTALS_SUFFIX = "_category_group_totals"


def report_to_csv(table: ReportTable) -> str:
    """Category rows as CSV: group, category, one column per period, total."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(
        ["category_group_name", "category_name"]
        + [period_key(period) for period in table.periods]
        + ["total"]
    )
    for row in table.rows:
        writer.writerow(
            [row.group.name, row.category.name]
            + [format_plain(cell) for cell in row.cells]
            + [format_plain(row.total)]
        )
    return buffer.getvalue()


def group_totals_to_csv(table: ReportTable) -> str:
    """Group summary as CSV, ending with the ``Total`` row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(
        ["category_group_name"]
        + [period_key(period) for period in table.periods]
        + ["total"]
    )
    for line in table.group_summary():
        writer.writerow(
            [line.label]
            + [format_plain(cell) for cell in line.cells]
            + [format_plain(line.total)]
        )
    return buffer.getvalue()


def totals_path_for(path: Path) -> Path:
    """Return ``<stem>_category_group_totals<suffix>`` next to ``path``."""
    suffix = path.suffix or ".csv"
    return path.with_name(f"{path.stem}{TOTALS_SUFFIX}{suffix}")


def write_csv_files(path: Path, table: ReportTable) -> tuple[Path, Path]:
    """Write the report CSV and its group totals CSV.

    Returns:
        Tuple of (report path, totals path)
    """
    path = Path(path)
    totals_path = totals_path_for(path)
    path.write_text(report_to_csv(table), encoding="utf-8")
    totals_path.write_text(group_totals_to_csv(table), encoding="utf-8")
    return path, totals_path
