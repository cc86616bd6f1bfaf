"""CLI helpers for report window resolution."""

from datetime import date

import click

from nabreport.domain.entities import DateRange
from nabreport.domain.errors import InvalidRange
from nabreport.cli.error_handling import handle_domain_error
from nabreport.utils.date_parser import get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date],
    today: date | None = None,
) -> DateRange:
    """Resolve the report window from period flags, explicit dates or the default.

    A lone ``start_date`` runs up to ``today``; a lone ``end_date`` starts on
    the first of its month.
    """
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-week, --last-week, --this-month, --last-month, "
            "--this-year, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-week, --last-month, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    today = today or date.today()
    start, end = default_range

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period, today=today)
                break
    elif start_date or end_date:
        start = end = None
        if start_date:
            try:
                start = parse_date(start_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        if end is None:
            end = today
        if start is None:
            start = end.replace(day=1)

    try:
        return DateRange(start, end)
    except InvalidRange as e:
        handle_domain_error(ctx, e)
