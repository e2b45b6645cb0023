"""Range view command."""

import click
from dailyledger.cli.date_filters import parse_day_or_exit
from dailyledger.cli.display import echo_accounts
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.cli.services import get_ledger_service


@click.command("range")
@click.argument("start_date", metavar="START")
@click.argument("end_date", metavar="END")
@click.option("--private", is_flag=True, help="Mask values marked as sensitive")
@click.pass_context
def range_view(ctx, start_date: str, end_date: str, private: bool):
    """Consolidate every recorded day between START and END.

    Each account opens with its balance on the first day of the range and
    closes with its balance on the last day; inflows, outflows and fees are
    summed. When START and END are the same day this is the day view.

    Examples:
        dailyledger range 01/01/2026 31/01/2026
        dailyledger range "last month" today
    """
    start = parse_day_or_exit(ctx, start_date, "start date")
    end = parse_day_or_exit(ctx, end_date, "end date")
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        view = service.get_range_view(start, end)

    click.echo(f"\n{view.label}" + (" (consolidated, read-only)" if view.read_only else ""))
    if not view.accounts:
        click.echo("No accounts recorded in this range.")
        return
    echo_accounts(view.accounts, view.totals, private=private, show_status=not view.read_only)


def register_commands(cli):
    """Register range command with main CLI."""
    cli.add_command(range_view)
