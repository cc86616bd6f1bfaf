"""Tests for configuration loading."""

import json
from datetime import date
from pathlib import Path

import pytest

from nabreport.config import (
    OUTPUT_CSV,
    OUTPUT_TABLE,
    OUTPUT_VISUAL,
    OutputFormat,
    load_config,
    parse_config,
    parse_output_format,
    resolve_config_path,
)
from nabreport.domain.entities import WatchedGroup
from nabreport.domain.errors import ConfigError


def test_load_config_file(config_file):
    cfg = load_config(config_file)

    assert cfg.budget_name == "My Budget"
    assert cfg.personal_access_token == "secret-token"
    assert cfg.watch_list == (
        WatchedGroup("Everyday", "#dfe7f5"),
        WatchedGroup("Bills", "#f5e6df"),
    )
    assert cfg.resolution_date == date(2024, 3, 1)
    assert cfg.show_all_rows is False
    assert cfg.output_format == OutputFormat(kind=OUTPUT_TABLE)
    assert cfg.currency_symbol == "£"


def test_watch_list_order_is_preserved(config_data):
    config_data["categoryGroupWatchList"] = {"Zeta": "#000000", "Alpha": "#FFFFFF"}

    cfg = parse_config(config_data)

    assert [g.name for g in cfg.watch_list] == ["Zeta", "Alpha"]
    assert cfg.watch_list[1].color == "#ffffff"


def test_missing_budget_name(config_data):
    del config_data["budgetName"]

    with pytest.raises(ConfigError, match="budgetName"):
        parse_config(config_data)


def test_missing_watch_list(config_data):
    del config_data["categoryGroupWatchList"]

    with pytest.raises(ConfigError, match="categoryGroupWatchList"):
        parse_config(config_data)


@pytest.mark.parametrize("color", ["red", "#12345", "#gggggg", 42])
def test_invalid_colors(config_data, color):
    config_data["categoryGroupWatchList"] = {"Bills": color}

    with pytest.raises(ConfigError, match="#rrggbb"):
        parse_config(config_data)


def test_invalid_resolution_date(config_data):
    config_data["resolutionDate"] = "01/03/2024"

    with pytest.raises(ConfigError, match="resolutionDate"):
        parse_config(config_data)


def test_resolution_date_defaults_to_today(config_data):
    del config_data["resolutionDate"]

    cfg = parse_config(config_data)

    assert cfg.resolution_date is None
    assert cfg.effective_resolution_date() == date.today()


def test_show_all_rows_must_be_bool(config_data):
    config_data["showAllRows"] = "yes"

    with pytest.raises(ConfigError, match="showAllRows"):
        parse_config(config_data)


def test_token_is_optional(config_data):
    del config_data["personalAccessToken"]

    assert parse_config(config_data).personal_access_token is None


def test_validation_errors_name_the_config_key(config_data):
    config_data["budgetName"] = 42

    with pytest.raises(ConfigError, match="Invalid configuration: budgetName"):
        parse_config(config_data)


def test_blank_budget_name(config_data):
    config_data["budgetName"] = "   "

    with pytest.raises(ConfigError, match="budgetName"):
        parse_config(config_data)


def test_output_format_from_config(config_data):
    config_data["outputFormat"] = {"visual_output": "report.html"}

    cfg = parse_config(config_data)

    assert cfg.output_format == OutputFormat(OUTPUT_VISUAL, Path("report.html"))


def test_invalid_output_format_in_config(config_data):
    config_data["outputFormat"] = {"pdf_output": "x.pdf"}

    with pytest.raises(ConfigError, match="outputFormat"):
        parse_config(config_data)


def test_config_must_be_object():
    with pytest.raises(ConfigError, match="JSON object"):
        parse_config(["budgetName"])


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, OutputFormat(kind=OUTPUT_TABLE)),
        ("polars_print", OutputFormat(kind=OUTPUT_TABLE)),
        ("table_print", OutputFormat(kind=OUTPUT_TABLE)),
        ("csv_print", OutputFormat(kind=OUTPUT_CSV)),
        ({"csv_output": "out/report.csv"}, OutputFormat(OUTPUT_CSV, Path("out/report.csv"))),
        ({"visual_output": "report.html"}, OutputFormat(OUTPUT_VISUAL, Path("report.html"))),
    ],
)
def test_parse_output_format(value, expected):
    assert parse_output_format(value) == expected


@pytest.mark.parametrize(
    "value",
    ["excel", {"pdf_output": "x.pdf"}, {"csv_output": ""}, {"csv_output": "a", "visual_output": "b"}],
)
def test_invalid_output_format(value):
    with pytest.raises(ConfigError, match="outputFormat"):
        parse_output_format(value)


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigError, match="Could not read config"):
        load_config(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="Could not parse config JSON"):
        load_config(path)


def test_resolve_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("NABREPORT_CONFIG", str(tmp_path / "env.json"))

    assert resolve_config_path() == tmp_path / "env.json"
    assert resolve_config_path("other.json") == Path("other.json")


def test_resolve_config_path_default(monkeypatch):
    monkeypatch.delenv("NABREPORT_CONFIG", raising=False)

    assert resolve_config_path() == Path("config.json")


def test_currency_symbol_override(config_data, tmp_path):
    config_data["currencySymbol"] = "$"
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")

    assert load_config(path).currency_symbol == "$"
