"""Calendar week partitioning split at month boundaries.

Weeks run Sunday to Saturday. A report window is cut into one period per
week, clipped to the window, and a week that crosses into a new month is
split into two periods so that no period ever spans two months.
"""

from datetime import date, timedelta
from typing import Sequence

from nabreport.domain.entities import DateRange, Period
from nabreport.domain.errors import InvalidRange, InvariantViolation, invalid_range

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)


def previous_sunday(day: date) -> date:
    """Return the Sunday on or before ``day``."""
    # date.weekday() is Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def last_day_of_month(year: int, month: int) -> date:
    """Return the last date of the given month."""
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - ONE_DAY


def partition_weeks(date_range: DateRange) -> tuple[Period, ...]:
    """Partition a date window into week periods split at month boundaries.

    Args:
        date_range: Inclusive report window

    Returns:
        Chronological, contiguous periods covering the whole window

    Raises:
        InvalidRange: If the window starts after it ends
    """
    if date_range.start > date_range.end:
        raise InvalidRange(invalid_range(date_range.start, date_range.end))

    periods: list[Period] = []
    week_start = previous_sunday(date_range.start)
    week_index = 0

    while week_start <= date_range.end:
        week_end = week_start + timedelta(days=6)
        effective_start = max(week_start, date_range.start)
        effective_end = min(week_end, date_range.end)

        if (effective_start.year, effective_start.month) != (
            effective_end.year,
            effective_end.month,
        ):
            month_end = last_day_of_month(effective_start.year, effective_start.month)
            periods.append(
                Period(
                    start=effective_start,
                    end=month_end,
                    week_index=week_index,
                    month_key=(effective_start.year, effective_start.month),
                    is_split=True,
                )
            )
            periods.append(
                Period(
                    start=month_end + ONE_DAY,
                    end=effective_end,
                    week_index=week_index,
                    month_key=(effective_end.year, effective_end.month),
                    is_split=True,
                )
            )
        else:
            periods.append(
                Period(
                    start=effective_start,
                    end=effective_end,
                    week_index=week_index,
                    month_key=(effective_start.year, effective_start.month),
                    is_split=False,
                )
            )

        week_start += ONE_WEEK
        week_index += 1

    return tuple(periods)


def partition_year(year: int) -> tuple[Period, ...]:
    """Partition a whole calendar year.

    ``week_index`` counts from 0 for the week containing January 1st, so
    ``week_index + 1`` is the week number shown in report headings.
    """
    return partition_weeks(DateRange(date(year, 1, 1), date(year, 12, 31)))


def month_weeks(year: int, month: int) -> tuple[Period, ...]:
    """Return the periods of one calendar month, indexed as in the year."""
    return tuple(p for p in partition_year(year) if p.month_key == (year, month))


def month_week_for_date(day: date) -> Period:
    """Return the period of the year partition that contains ``day``.

    This is the default report window: the Sunday to Saturday week around
    ``day``, clipped to the month of ``day``.
    """
    for period in month_weeks(day.year, day.month):
        if period.contains(day):
            return period
    raise InvariantViolation(
        f"Date {day} not found in month weeks for {day.year:04d}-{day.month:02d}"
    )


def check_periods(periods: Sequence[Period]) -> None:
    """Verify that periods are ordered, contiguous and month-bounded.

    Raises:
        InvariantViolation: If the sequence could not have come from
            partition_weeks
    """
    previous = None
    for index, period in enumerate(periods):
        if period.start > period.end:
            raise InvariantViolation(f"Period {index} starts after it ends")
        if (period.start.year, period.start.month) != period.month_key or (
            period.end.year,
            period.end.month,
        ) != period.month_key:
            raise InvariantViolation(
                f"Period {index} ({period.start}..{period.end}) "
                f"does not lie in month {period.month_key}"
            )
        if period.end > period.week_end:
            raise InvariantViolation(
                f"Period {index} ({period.start}..{period.end}) spans two weeks"
            )
        if previous is not None:
            if period.start != previous.end + ONE_DAY:
                raise InvariantViolation(
                    f"Periods {index - 1} and {index} are not contiguous: "
                    f"{previous.end} then {period.start}"
                )
            same_week = period.week_start == previous.week_start
            if same_week != (period.week_index == previous.week_index):
                raise InvariantViolation(
                    f"Periods {index - 1} and {index} have inconsistent week indexes"
                )
        previous = period
