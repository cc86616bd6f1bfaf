"""Value and label formatting shared by the renderers."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from nabreport.domain.entities import Period

CENT = Decimal("0.01")
DEFAULT_CURRENCY = "£"


def round_amount(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(
    value: Decimal, show_zero: bool = True, symbol: str = DEFAULT_CURRENCY
) -> str:
    """Format an amount as ``-£1,234.50``.

    Zero (after rounding) renders as an empty string unless ``show_zero``.
    """
    rounded = round_amount(value)
    if rounded == 0 and not show_zero:
        return ""
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_plain(value: Decimal) -> str:
    """Format an amount for machine-readable output, e.g. ``-1234.50``."""
    rounded = round_amount(value)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.2f}"


def darken_hex(color: str, factor: float) -> str:
    """Scale each channel of a ``#rrggbb`` color; other strings pass through."""
    if not color.startswith("#") or len(color) != 7:
        return color
    try:
        channels = [int(color[i : i + 2], 16) for i in (1, 3, 5)]
    except ValueError:
        return color
    return "#" + "".join(f"{int(channel * factor):02x}" for channel in channels)


def format_short_date(day: date) -> str:
    """Return ``Mar 3`` style dates."""
    return f"{day:%b} {day.day}"


def period_label(period: Period) -> str:
    """Short column label for a period."""
    if period.start == period.end:
        return format_short_date(period.start)
    return f"{format_short_date(period.start)} - {format_short_date(period.end)}"


def period_key(period: Period) -> str:
    """Stable machine-readable column name for a period."""
    return f"{period.start.isoformat()}..{period.end.isoformat()}"


def week_label(periods: Sequence[Period]) -> str:
    """Label for the weeks covered, e.g. ``Week 10 (Mar 3 - Mar 9)``."""
    if not periods:
        return ""
    first, last = periods[0], periods[-1]
    dates = f"{format_short_date(first.start)} - {format_short_date(last.end)}"
    if first.week_number == last.week_number and first.month_key[0] == last.month_key[0]:
        return f"Week {first.week_number} ({dates})"
    return f"Weeks {first.week_number}-{last.week_number} ({dates})"


def report_heading(periods: Sequence[Period]) -> str:
    """One-line description of the report window."""
    if not periods:
        return "Empty report"
    first, last = periods[0], periods[-1]
    start_label = f"{first.start:%A %Y-%m-%d}"
    end_label = f"{last.end:%A %Y-%m-%d}"
    year = first.start.year
    if first.week_start == last.week_start:
        weeks = f"Week {first.week_number} of {year}"
    else:
        weeks = f"Weeks {first.week_number}-{last.week_number} of {year}"
    return f"{weeks}, starting on {start_label} and ending on {end_label}"
