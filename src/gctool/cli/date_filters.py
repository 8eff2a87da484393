"""CLI helpers for date range resolution."""

from datetime import date

import click

from gctool.utils.date_parser import parse_date


def resolve_cli_date_range(
    ctx: click.Context, *, start_date: str | None, end_date: str | None
) -> tuple[date | None, date | None]:
    """Parse --start-date/--end-date, exiting with a CLI error when invalid."""
    start = None
    end = None

    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is not None and end is not None and start > end:
        click.echo("Error: --start-date must not be after --end-date", err=True)
        ctx.exit(1)

    return start, end
