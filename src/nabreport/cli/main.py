"""Main CLI entry point."""

import click

from nabreport.logging_setup import configure_logging

# Import and register all commands at module level
from nabreport.cli.commands import report, weeks


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config.json (overrides NABREPORT_CONFIG environment variable)",
    envvar="NABREPORT_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, config_path: str | None, verbose: bool):
    """nabreport - Weekly YNAB spending reports.

    Sums spending per category for each Sunday to Saturday week, splitting
    weeks that cross a month boundary, with category group roll-ups.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    configure_logging("DEBUG" if verbose else None)


# Register all commands
report.register_commands(cli)
weeks.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
