"""Configuration loading for nabreport.

The configuration is a JSON document with camelCase keys::

    {
        "budgetName": "My Budget",
        "personalAccessToken": "...",
        "categoryGroupWatchList": {"Bills": "#dfe7f5", "Fun": "#f5e1df"},
        "resolutionDate": "2024-03-01",
        "showAllRows": false,
        "outputFormat": {"visual_output": "report.html"}
    }
"""

import json
import os
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from nabreport.domain.entities import WatchedGroup
from nabreport.domain.errors import ConfigError

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_CURRENCY = "£"

COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

OUTPUT_TABLE = "table"
OUTPUT_CSV = "csv"
OUTPUT_VISUAL = "visual"

SIMPLE_OUTPUT_FORMATS = {
    "table_print": OUTPUT_TABLE,
    "polars_print": OUTPUT_TABLE,
    "csv_print": OUTPUT_CSV,
}


@dataclass(frozen=True)
class OutputFormat:
    """How and where the report is rendered.

    ``path`` is None when the output goes to stdout.
    """

    kind: str = OUTPUT_TABLE
    path: Optional[Path] = None


class CsvOutputSetting(BaseModel):
    """``{"csv_output": path}``"""

    model_config = ConfigDict(extra="forbid", frozen=True)
    csv_output: str = Field(min_length=1)


class VisualOutputSetting(BaseModel):
    """``{"visual_output": path}``"""

    model_config = ConfigDict(extra="forbid", frozen=True)
    visual_output: str = Field(min_length=1)


OutputFormatSetting = Union[
    Literal["table_print", "polars_print", "csv_print"],
    CsvOutputSetting,
    VisualOutputSetting,
]

_OUTPUT_FORMAT_ADAPTER = TypeAdapter(Optional[OutputFormatSetting])


def _to_output_format(setting: Optional[OutputFormatSetting]) -> OutputFormat:
    if setting is None:
        return OutputFormat()
    if isinstance(setting, CsvOutputSetting):
        return OutputFormat(kind=OUTPUT_CSV, path=Path(setting.csv_output))
    if isinstance(setting, VisualOutputSetting):
        return OutputFormat(kind=OUTPUT_VISUAL, path=Path(setting.visual_output))
    return OutputFormat(kind=SIMPLE_OUTPUT_FORMATS[setting])


class ReportConfig(BaseModel):
    """Validated report configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    budget_name: str = Field(alias="budgetName")
    personal_access_token: Optional[str] = Field(default=None, alias="personalAccessToken")
    category_group_watch_list: dict[str, str] = Field(alias="categoryGroupWatchList")
    resolution_date: Optional[date] = Field(default=None, alias="resolutionDate")
    show_all_rows: StrictBool = Field(default=False, alias="showAllRows")
    output_format_setting: Optional[OutputFormatSetting] = Field(
        default=None, alias="outputFormat"
    )
    currency_symbol: str = Field(default=DEFAULT_CURRENCY, alias="currencySymbol")

    @field_validator("budget_name")
    @classmethod
    def _budget_name_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("personal_access_token")
    @classmethod
    def _empty_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("category_group_watch_list", mode="before")
    @classmethod
    def _watch_list_colors(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            raise ValueError("must map category group names to colors")
        colors = {}
        for name, color in v.items():
            if not isinstance(color, str) or not COLOR_PATTERN.match(color):
                raise ValueError(
                    f"Color for category group '{name}' must look like #rrggbb, got {color!r}"
                )
            colors[name] = color.lower()
        return colors

    @field_validator("resolution_date", mode="before")
    @classmethod
    def _resolution_date_is_iso_string(cls, v: Any) -> Any:
        if v is not None and not isinstance(v, (str, date)):
            raise ValueError("must be a YYYY-MM-DD string")
        return v

    @property
    def watch_list(self) -> tuple[WatchedGroup, ...]:
        """Watched groups in configuration order."""
        return tuple(
            WatchedGroup(name=name, color=color)
            for name, color in self.category_group_watch_list.items()
        )

    @property
    def output_format(self) -> OutputFormat:
        return _to_output_format(self.output_format_setting)

    def effective_resolution_date(self) -> date:
        """Return the configured resolution date, defaulting to today."""
        return self.resolution_date or date.today()


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in error.errors()
    )


def resolve_config_path(path: Optional[str] = None) -> Path:
    """Return the config path from the argument, NABREPORT_CONFIG, or the default."""
    if path is None:
        path = os.environ.get("NABREPORT_CONFIG", DEFAULT_CONFIG_PATH)
    return Path(path)


def load_config(path: Optional[str | Path] = None) -> ReportConfig:
    """Read and validate a JSON configuration file.

    Args:
        path: Config file path; see resolve_config_path for the default

    Returns:
        ReportConfig

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    config_path = resolve_config_path(str(path) if path is not None else None)
    try:
        contents = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config from {config_path}: {e}")

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse config JSON in {config_path}: {e}")

    return parse_config(data)


def parse_config(data: Any) -> ReportConfig:
    """Validate an already-decoded configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")
    try:
        return ReportConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_describe(e)}")


def parse_output_format(value: Any) -> OutputFormat:
    """Parse ``outputFormat``: a format name or a single-key file mapping."""
    try:
        setting = _OUTPUT_FORMAT_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ConfigError(
            "outputFormat must be one of "
            f"{', '.join(sorted(SIMPLE_OUTPUT_FORMATS))} or an object with "
            f"a single csv_output or visual_output path ({_describe(e)})"
        )
    return _to_output_format(setting)
