"""Week partition command."""

from datetime import date

import click

from nabreport.domain.periods import month_week_for_date, month_weeks, partition_year
from nabreport.utils.date_parser import parse_date


@click.command("weeks")
@click.option("--year", type=int, help="Year to partition (default current year)")
@click.option("--month", type=click.IntRange(1, 12), help="Only show this month")
@click.option("--date", "for_date", help="Only show the week containing this date")
@click.pass_context
def weeks(ctx, year: int | None, month: int | None, for_date: str | None):
    """List the Sunday to Saturday report weeks, split at month boundaries."""
    if for_date:
        try:
            periods = (month_week_for_date(parse_date(for_date)),)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)
    else:
        year = year or date.today().year
        periods = month_weeks(year, month) if month else partition_year(year)

    click.echo(f"{'Week':>4}  {'Start':<10}  {'End':<10}  {'Days':>4}  Month")
    click.echo("-" * 44)
    for period in periods:
        split = "  (split)" if period.is_split else ""
        month_label = f"{period.month_key[0]:04d}-{period.month_key[1]:02d}"
        click.echo(
            f"{period.week_number:>4}  {period.start.isoformat():<10}  "
            f"{period.end.isoformat():<10}  {period.days:>4}  {month_label}{split}"
        )


def register_commands(cli):
    """Register weeks command with main CLI."""
    cli.add_command(weeks)
