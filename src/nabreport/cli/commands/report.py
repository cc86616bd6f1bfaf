"""Report command."""

from dataclasses import replace
from pathlib import Path

import click

from nabreport.cli.date_filters import resolve_cli_date_range
from nabreport.cli.error_handling import handle_domain_error
from nabreport.config import (
    OUTPUT_CSV,
    OUTPUT_TABLE,
    OUTPUT_VISUAL,
    OutputFormat,
    ReportConfig,
    load_config,
)
from nabreport.domain.entities import ReportTable
from nabreport.domain.errors import DomainError
from nabreport.domain.periods import month_week_for_date
from nabreport.domain.report_service import ReportService
from nabreport.logging_setup import get_logger
from nabreport.render.csv_export import group_totals_to_csv, report_to_csv, write_csv_files
from nabreport.render.formatting import report_heading
from nabreport.render.table import render_table
from nabreport.render.visual import build_visual_report_html
from nabreport.sources.factories import create_ynab_source
from nabreport.utils.date_parser import parse_date

logger = get_logger(__name__)


def _write_or_echo(text: str, path: Path | None) -> None:
    if path is None:
        click.echo(text, nl=False)
        return
    path.write_text(text, encoding="utf-8")
    click.echo(f"Wrote {path}")


def render_output(
    table: ReportTable, output_format: OutputFormat, cfg: ReportConfig, show_all_rows: bool
) -> None:
    """Render ``table`` in the requested format to stdout or a file."""
    symbol = cfg.currency_symbol

    if output_format.kind == OUTPUT_VISUAL:
        html = build_visual_report_html(table, show_all_rows=show_all_rows, symbol=symbol)
        _write_or_echo(html, output_format.path)

    elif output_format.kind == OUTPUT_CSV:
        if output_format.path is None:
            click.echo(report_to_csv(table), nl=False)
            click.echo("category_group_totals")
            click.echo(group_totals_to_csv(table), nl=False)
        else:
            report_path, totals_path = write_csv_files(output_format.path, table)
            click.echo(f"Wrote {report_path}")
            click.echo(f"Wrote {totals_path}")

    else:
        text = f"{report_heading(table.periods)}\n\n{render_table(table, symbol)}"
        _write_or_echo(text, output_format.path)


@click.command("report")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-week", is_flag=True, help="Report on the current week")
@click.option("--last-week", is_flag=True, help="Report on the previous week")
@click.option("--this-month", is_flag=True, help="Report on the current month so far")
@click.option("--last-month", is_flag=True, help="Report on the previous month")
@click.option("--this-year", is_flag=True, help="Report on the current year so far")
@click.option("--last-year", is_flag=True, help="Report on the previous year")
@click.option(
    "--resolution-date",
    help="Reference date (overrides resolutionDate in the config, default today)",
)
@click.option(
    "--show-all-rows/--hide-empty-rows",
    default=None,
    help="Include categories without activity (overrides showAllRows)",
)
@click.option(
    "--format",
    "output_kind",
    type=click.Choice([OUTPUT_TABLE, OUTPUT_CSV, OUTPUT_VISUAL]),
    help="Output format (overrides outputFormat)",
)
@click.option("--output", type=click.Path(dir_okay=False), help="Write output to this file")
@click.pass_context
def report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    last_week: bool,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    resolution_date: str | None,
    show_all_rows: bool | None,
    output_kind: str | None,
    output: str | None,
):
    """Show spending per category for each week of the report window.

    By default the window is the week containing the resolution date,
    clipped to that date's month.
    """
    try:
        cfg = load_config(ctx.obj.get("config_path"))
    except DomainError as e:
        handle_domain_error(ctx, e)

    if resolution_date:
        try:
            resolved = parse_date(resolution_date)
        except ValueError as e:
            click.echo(f"Error: Invalid resolution date: {e}", err=True)
            ctx.exit(1)
    else:
        resolved = cfg.effective_resolution_date()

    default_week = month_week_for_date(resolved)
    date_range = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "last-week": last_week,
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
        },
        default_range=(default_week.start, default_week.end),
        today=resolved,
    )

    output_format = cfg.output_format
    if output_kind is not None:
        output_format = OutputFormat(kind=output_kind)
    if output is not None:
        output_format = replace(output_format, path=Path(output))

    if show_all_rows is None:
        show_all_rows = cfg.show_all_rows

    source_factory = ctx.obj.get("source_factory", create_ynab_source)
    try:
        service = ReportService(source_factory(cfg.personal_access_token))
        # The visual report totals planned figures over every category and
        # hides empty rows itself.
        table = service.build_report(
            cfg.budget_name,
            date_range,
            cfg.watch_list,
            show_all_rows=show_all_rows or output_format.kind == OUTPUT_VISUAL,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    logger.info(
        "Built report for %s..%s: %d rows, %d periods",
        date_range.start,
        date_range.end,
        len(table.rows),
        len(table.periods),
    )
    render_output(table, output_format, cfg, show_all_rows)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
