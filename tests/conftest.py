"""Shared pytest fixtures for nabreport tests."""

import json
from datetime import date
from decimal import Decimal

import pytest

from nabreport.domain.entities import Category, DateRange, WatchedGroup
from nabreport.domain.periods import partition_weeks
from tests.helpers.sources import BILLS, EVERYDAY, FUN, SAVINGS, FakeSource, txn


@pytest.fixture
def groups():
    """Category groups of the sample budget."""
    return [BILLS, EVERYDAY, FUN, SAVINGS]


@pytest.fixture
def categories():
    """Categories of the sample budget."""
    return [
        Category(id="c-rent", name="Rent", group_id=BILLS.id, budgeted=Decimal("1000"),
                 balance=Decimal("0"), goal_cadence="monthly"),
        Category(id="c-groceries", name="Groceries", group_id=EVERYDAY.id,
                 budgeted=Decimal("300"), balance=Decimal("245"), goal_cadence="monthly"),
        Category(id="c-dining", name="Dining", group_id=EVERYDAY.id,
                 budgeted=Decimal("100"), balance=Decimal("100"), goal_cadence="monthly"),
        Category(id="c-books", name="Books", group_id=FUN.id,
                 budgeted=Decimal("120"), balance=Decimal("107.50")),
        Category(id="c-games", name="Games", group_id=FUN.id,
                 budgeted=Decimal("60"), balance=Decimal("60")),
        Category(id="c-emergency", name="Emergency Fund", group_id=SAVINGS.id),
    ]


@pytest.fixture
def watch_list():
    """Watch list with Everyday listed before Bills."""
    return (
        WatchedGroup(name="Everyday", color="#dfe7f5"),
        WatchedGroup(name="Bills", color="#f5e6df"),
    )


@pytest.fixture
def split_week_range():
    """Window from Sunday 2024-02-25 to Sunday 2024-03-03."""
    return DateRange(date(2024, 2, 25), date(2024, 3, 3))


@pytest.fixture
def split_week_periods(split_week_range):
    """Periods Feb 25-29, Mar 1-2 and Mar 3."""
    return partition_weeks(split_week_range)


@pytest.fixture
def transactions():
    """Sample transactions around the split week."""
    return [
        txn("2024-02-20", "c-groceries", "-99.00", "Before window"),
        txn("2024-02-27", "c-groceries", "-40.00", "Market"),
        txn("2024-03-01", "c-rent", "-1000.00", "Landlord"),
        txn("2024-03-02", "c-groceries", "-15.00", "Market"),
        txn("2024-03-03", "c-books", "-12.50", "Bookshop"),
        txn("2024-03-04", "c-games", "-30.00", "After window"),
    ]


@pytest.fixture
def fake_source(groups, categories, transactions):
    """FakeSource loaded with the sample budget."""
    return FakeSource(groups, categories, transactions)


@pytest.fixture
def config_data():
    """Minimal valid configuration mapping."""
    return {
        "budgetName": "My Budget",
        "personalAccessToken": "secret-token",
        "categoryGroupWatchList": {"Everyday": "#dfe7f5", "Bills": "#f5e6df"},
        "resolutionDate": "2024-03-01",
    }


@pytest.fixture
def config_file(tmp_path, config_data):
    """Write the configuration to a temporary file and return its path."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
