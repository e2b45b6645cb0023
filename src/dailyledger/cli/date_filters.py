"""CLI helpers for day and date range resolution."""

from datetime import date

import click

from dailyledger.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = (
    "this-week",
    "this-month",
    "this-year",
    "last-week",
    "last-month",
    "last-year",
    "last-30-days",
)


def period_option(func):
    """Attach a --period choice to a command."""
    return click.option(
        "--period",
        type=click.Choice(PERIOD_OPTIONS, case_sensitive=False),
        help="Named period ending today (cannot be combined with --start-date/--end-date)",
    )(func)


def parse_day_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date:
    """Parse a day argument, defaulting to today, or exit with a CLI error."""
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from a period flag or explicit dates."""
    if period is not None and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period is not None:
        return get_date_range(period)

    start = parse_day_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_day_or_exit(ctx, end_date, "end date") if end_date else None
    return start, end
