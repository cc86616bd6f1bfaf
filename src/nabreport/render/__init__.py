"""Report renderers: text table, CSV and HTML."""

from nabreport.render.csv_export import report_to_csv, group_totals_to_csv, write_csv_files
from nabreport.render.table import render_table
from nabreport.render.visual import build_visual_report_html

__all__ = [
    "render_table",
    "report_to_csv",
    "group_totals_to_csv",
    "write_csv_files",
    "build_visual_report_html",
]
