"""Tests for the text, CSV and HTML renderers."""

from datetime import date
from decimal import Decimal

import pytest

from nabreport.domain.entities import Category, CategoryGroup, DateRange
from nabreport.domain.periods import partition_weeks
from nabreport.domain.report import build_report
from nabreport.render import (
    build_visual_report_html,
    group_totals_to_csv,
    render_table,
    report_to_csv,
    write_csv_files,
)
from nabreport.render.csv_export import totals_path_for
from nabreport.render.formatting import darken_hex
from nabreport.render.visual import ANNUAL_FACTOR, planned_amounts
from tests.helpers.sources import txn


@pytest.fixture
def report(split_week_periods, categories, groups, watch_list, transactions):
    return build_report(split_week_periods, categories, groups, watch_list, transactions)


@pytest.fixture
def full_report(split_week_periods, categories, groups, watch_list, transactions):
    return build_report(
        split_week_periods, categories, groups, watch_list, transactions, show_all_rows=True
    )


class TestRenderTable:
    def test_detail_and_summary_sections(self, report):
        output = render_table(report)
        lines = output.splitlines()

        assert lines[0].startswith("Category Group")
        for header in ("Feb 25 - Feb 29", "Mar 1 - Mar 2", "Mar 3", "Total"):
            assert header in lines[0]
        assert "Category group totals" in lines
        assert "-£1,000.00" in output
        assert "-£1,067.50" in output

    def test_rows_in_report_order(self, report):
        output = render_table(report)

        positions = [
            output.index(label)
            for label in ("Groceries", "Total Everyday", "Rent", "Total Bills", "Books", "Total Fun")
        ]
        assert positions == sorted(positions)

    def test_zero_cells_render_as_dash(self, report):
        rent_line = next(line for line in render_table(report).splitlines() if "Rent" in line)

        assert rent_line.split()[-4:] == ["-", "-£1,000.00", "-", "-£1,000.00"]

    def test_currency_symbol(self, report):
        output = render_table(report, symbol="$")

        assert "-$55.00" in output
        assert "£" not in output

    def test_empty_report(self, split_week_periods, categories, groups, watch_list):
        table = build_report(split_week_periods, categories, groups, watch_list, [])

        assert render_table(table) == "No transactions found.\n"


class TestCsv:
    def test_report_csv(self, report):
        assert report_to_csv(report).splitlines() == [
            "category_group_name,category_name,"
            "2024-02-25..2024-02-29,2024-03-01..2024-03-02,2024-03-03..2024-03-03,total",
            "Everyday,Groceries,-40.00,-15.00,0.00,-55.00",
            "Bills,Rent,0.00,-1000.00,0.00,-1000.00",
            "Fun,Books,0.00,0.00,-12.50,-12.50",
        ]

    def test_group_totals_csv(self, report):
        assert group_totals_to_csv(report).splitlines() == [
            "category_group_name,"
            "2024-02-25..2024-02-29,2024-03-01..2024-03-02,2024-03-03..2024-03-03,total",
            "Everyday,-40.00,-15.00,0.00,-55.00",
            "Bills,0.00,-1000.00,0.00,-1000.00",
            "Fun,0.00,0.00,-12.50,-12.50",
            "Total,-40.00,-1015.00,-12.50,-1067.50",
        ]

    def test_names_with_commas_are_quoted(self, split_week_periods, watch_list):
        group = CategoryGroup(id="g", name="Food, Drink")
        category = Category(id="c", name="Tea", group_id="g")
        table = build_report(
            split_week_periods, [category], [group], watch_list, [txn("2024-03-03", "c", "-2")]
        )

        assert '"Food, Drink",Tea,0.00,0.00,-2.00,-2.00' in report_to_csv(table)

    def test_totals_path_for(self, tmp_path):
        assert totals_path_for(tmp_path / "week.csv") == tmp_path / "week_category_group_totals.csv"
        assert totals_path_for(tmp_path / "week") == tmp_path / "week_category_group_totals.csv"

    def test_write_csv_files(self, report, tmp_path):
        report_path, totals_path = write_csv_files(tmp_path / "report.csv", report)

        assert report_path == tmp_path / "report.csv"
        assert totals_path == tmp_path / "report_category_group_totals.csv"
        assert report_path.read_text(encoding="utf-8") == report_to_csv(report)
        assert totals_path.read_text(encoding="utf-8") == group_totals_to_csv(report)


class TestVisual:
    def test_document_structure(self, full_report):
        html = build_visual_report_html(full_report)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Budget Visual Report</title>" in html
        assert "<h1>Weeks 9-10 (Feb 25 - Mar 3)</h1>" in html
        assert "<th rowspan=\"2\">2024 (planned)</th>" in html
        assert "<th rowspan=\"2\">2024 per month</th>" in html
        assert "<th>Remaining in period</th>" in html
        assert "<script>" in html

    def test_group_colors(self, full_report):
        html = build_visual_report_html(full_report)

        assert 'style="background-color: #dfe7f5;"' in html
        # Group subtotal rows use the darkened watch list color
        assert 'style="background-color: #bdc4d0;"' in html
        assert 'style="background-color: #b7b7b7;"' in html

    def test_only_watched_groups_are_shown(self, full_report):
        html = build_visual_report_html(full_report, show_all_rows=True)

        assert html.index("<td>Total Everyday</td>") < html.index("<td>Total Bills</td>")
        assert "<td>Books</td>" not in html
        assert "<td>Total Fun</td>" not in html
        assert "<td>Total Savings</td>" not in html

    def test_watched_group_without_spending_left_out_unless_show_all_rows(
        self, split_week_periods, categories, groups, transactions
    ):
        watch = [("Everyday", "#dfe7f5"), ("Savings", "#e1f5df")]
        table = build_report(
            split_week_periods, categories, groups, watch, transactions, show_all_rows=True
        )

        hidden = build_visual_report_html(table, show_all_rows=False)
        shown = build_visual_report_html(table, show_all_rows=True)

        assert "<td>Total Everyday</td>" in hidden
        assert "<td>Total Savings</td>" not in hidden
        assert "<td>Emergency Fund</td>" in shown
        assert "<td>Total Savings</td>" in shown

    def test_planned_and_spent_figures(self, full_report):
        html = build_visual_report_html(full_report)

        # Monthly goal: planned for the year is twelve months of budget
        assert "£3,600.00" in html
        # Grand totals of planned, per month and spent over watched groups
        assert "£16,800.00" in html
        assert "£1,400.00" in html
        assert "£1,055.00" in html
        assert "£1,067.50" not in html

    def test_annual_goal_cells_are_darkened(
        self, split_week_periods, categories, groups, transactions
    ):
        table = build_report(
            split_week_periods, categories, groups, [("Fun", "#dfe7f5")], transactions
        )

        html = build_visual_report_html(table)

        annual = darken_hex("#dfe7f5", ANNUAL_FACTOR)
        assert f'<td class="number" style="background-color: {annual};">£120.00</td>' in html
        assert f'<td class="number" style="background-color: {annual};">£10.00</td>' in html

    def test_rows_without_spending_hidden(self, full_report):
        shown = build_visual_report_html(full_report, show_all_rows=True)
        hidden = build_visual_report_html(full_report, show_all_rows=False)

        assert "<td>Dining</td>" in shown
        assert "<td>Dining</td>" not in hidden
        # The group subtotal still includes Dining's plan
        assert "£4,800.00" in hidden

    def test_labels_are_escaped(self, split_week_periods):
        group = CategoryGroup(id="g", name="Home & Garden")
        category = Category(id="c", name="<Tools>", group_id="g")
        table = build_report(
            split_week_periods,
            [category],
            [group],
            [("Home & Garden", "#ffffff")],
            [txn("2024-03-03", "c", "-2")],
        )

        html = build_visual_report_html(table)

        assert "<td>&lt;Tools&gt;</td>" in html
        assert "<td>Total Home &amp; Garden</td>" in html

    def test_planned_year_override(self, full_report):
        html = build_visual_report_html(full_report, planned_year=2025)

        assert "2025 (planned)" in html


@pytest.mark.parametrize(
    "cadence,budgeted,expected",
    [
        ("monthly", Decimal("300"), (Decimal("3600"), Decimal("300"))),
        ("annual", Decimal("120"), (Decimal("120"), Decimal("10"))),
        ("annual", None, (Decimal("0"), Decimal("0"))),
    ],
)
def test_planned_amounts(cadence, budgeted, expected):
    category = Category(id="c", name="C", group_id="g", budgeted=budgeted, goal_cadence=cadence)

    assert planned_amounts(category) == expected


def test_long_window_renders(categories, groups, watch_list):
    periods = partition_weeks(DateRange(date(2024, 3, 1), date(2024, 3, 31)))
    table = build_report(
        periods, categories, groups, watch_list, [txn("2024-03-15", "c-groceries", "-60.25")]
    )

    assert "Mar 10 - Mar 16" in render_table(table)
    assert "60.25" in build_visual_report_html(table)
