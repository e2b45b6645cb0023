"""CSV export command."""

import sys

import click
from dailyledger.cli.date_filters import period_option, resolve_cli_date_range
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.cli.services import get_ledger_service
from dailyledger.domain.csv_export import write_csv


@click.command("export")
@click.option("--start-date", help="Start date (dd/mm/yyyy or relative like 'last month')")
@click.option("--end-date", help="End date (dd/mm/yyyy or relative like 'today')")
@period_option
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="CSV file to write (default: stdout)")
@click.option("--private", is_flag=True, help="Mask values marked as sensitive")
@click.option("--persisted-names", is_flag=True, help="Use saldo_anterior/entradas/... as headers")
@click.pass_context
def export_csv(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    output: str | None,
    private: bool,
    persisted_names: bool,
):
    """Export saved days as CSV, one row per account per day.

    Examples:
        dailyledger export --period this-month -o january.csv
        dailyledger export --start-date 01/01/2026 --private
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        snapshots = [
            snapshot
            for snapshot in service.load_snapshots()
            if (start is None or snapshot.date >= start) and (end is None or snapshot.date <= end)
        ]

    if output is None:
        write_csv(snapshots, sys.stdout, private=private, persisted_names=persisted_names)
        return

    with open(output, "w", newline="", encoding="utf-8") as f:
        count = write_csv(snapshots, f, private=private, persisted_names=persisted_names)
    click.echo(f"Exported {count} row(s) from {len(snapshots)} day(s) to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
