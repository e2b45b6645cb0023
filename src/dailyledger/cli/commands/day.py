"""Single day commands."""

import click
from dailyledger.cli.date_filters import parse_day_or_exit, period_option, resolve_cli_date_range
from dailyledger.cli.display import echo_accounts, format_currency
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.cli.services import get_ledger_service
from dailyledger.domain.consistency import check_consistency
from dailyledger.utils.date_parser import format_ledger_date


@click.group()
def day_group():
    """View daily snapshots."""
    pass


@day_group.command("show")
@click.argument("day", required=False, metavar="[DATE]")
@click.option("--private", is_flag=True, help="Mask values marked as sensitive")
@click.pass_context
def show_day(ctx, day: str | None, private: bool):
    """Show every account for a day (defaults to today).

    Days without their own entry show the closest earlier day's closing
    balances carried forward as opening balances.

    Examples:
        dailyledger day show
        dailyledger day show 16/01/2026
        dailyledger day show yesterday --private
    """
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        snapshot = service.get_snapshot_for_date(target)

    click.echo(f"\n{format_ledger_date(snapshot.date)}")
    if snapshot.carried_from is not None:
        click.echo(f"(no entry yet; balances carried forward from {format_ledger_date(snapshot.carried_from)})")
    if not snapshot.accounts:
        click.echo("No accounts recorded on or before this day.")
        return
    echo_accounts(snapshot.accounts, snapshot.totals, private=private)


@day_group.command("check")
@click.argument("day", required=False, metavar="[DATE]")
@click.pass_context
def check_day(ctx, day: str | None):
    """List accounts whose closing balance does not match the formula.

    Exits with status 1 when any mismatch is found.
    """
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        snapshot = service.get_snapshot_for_date(target)

    mismatches = []
    for account in snapshot.accounts:
        result = check_consistency(account)
        if not result.is_consistent:
            mismatches.append((account, result))

    if not mismatches:
        click.echo(f"All {len(snapshot.accounts)} account(s) on {format_ledger_date(target)} are consistent.")
        return

    for account, result in mismatches:
        click.echo(f"{account.name}: off by {format_currency(result.diff)}")
    ctx.exit(1)


@day_group.command("history")
@click.option("--start-date", help="Start date (dd/mm/yyyy or relative like 'last month')")
@click.option("--end-date", help="End date (dd/mm/yyyy or relative like 'today')")
@period_option
@click.pass_context
def day_history(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show the totals of every recorded day."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        points = service.balance_history(start=start, end=end)

    if not points:
        click.echo("No recorded days found.")
        return

    click.echo(f"{'Date':<12}{'Inflow':>18}{'Outflow':>18}{'Fees':>18}{'Closing':>18}")
    click.echo("-" * 84)
    for point in points:
        totals = point.totals
        click.echo(
            f"{format_ledger_date(point.date):<12}"
            f"{format_currency(totals.inflow_total):>18}"
            f"{format_currency(totals.outflow_total):>18}"
            f"{format_currency(totals.fees):>18}"
            f"{format_currency(totals.closing_balance):>18}"
        )
    if len(points) > 1:
        change = points[-1].totals.closing_balance - points[0].totals.closing_balance
        click.echo(f"\nChange in closing balance: {format_currency(change)}")


def register_commands(cli):
    """Register day commands with main CLI."""
    cli.add_command(day_group, name="day")
