"""Account commands: add, edit and remove accounts on a day."""

import click
from dailyledger.cli.date_filters import parse_day_or_exit
from dailyledger.cli.display import format_currency
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.cli.services import get_ledger_service
from dailyledger.domain.consistency import check_consistency
from dailyledger.domain.snapshot import SENSITIVE_FIELDS, new_account
from dailyledger.utils.amount_parser import parse_amount
from dailyledger.utils.date_parser import format_ledger_date

# Option name -> account field, in the order edits are applied. The closing
# balance goes last so that an explicit value overrides the formula.
EDIT_OPTIONS = (
    ("rename", "name"),
    ("opening", "opening_balance"),
    ("inflow_base", "inflow_base"),
    ("outflow_base", "outflow_base"),
    ("inflow", "inflow_total"),
    ("outflow", "outflow_total"),
    ("fees", "fees"),
    ("note", "note"),
    ("closing", "closing_balance"),
)
TEXT_FIELDS = {"name", "note"}


def _echo_balance(account) -> None:
    result = check_consistency(account)
    click.echo(f"Closing balance: {format_currency(account.closing_balance)}")
    if not result.is_consistent:
        click.echo(
            f"Warning: closing balance differs from the formula by {format_currency(result.diff)}"
        )


@click.group()
def account_group():
    """Manage accounts on a day."""
    pass


@account_group.command("add")
@click.argument("day", metavar="DATE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--opening", default="0", help="Opening balance")
@click.option("--inflow", default="0", help="Inflow total")
@click.option("--outflow", default="0", help="Outflow total")
@click.option("--fees", default="0", help="Fees")
@click.option("--closing", help="Closing balance (computed when omitted)")
@click.option("--note", help="Free-text note")
@click.pass_context
def add_account(
    ctx,
    day: str,
    name: str,
    opening: str,
    inflow: str,
    outflow: str,
    fees: str,
    closing: str | None,
    note: str | None,
):
    """Add an account to a day.

    Examples:
        dailyledger account add 16/01/2026 "Caixa" --opening 100 --inflow 50 --outflow 20
        dailyledger account add today "Brasil C&Z" --opening "339.199,79"
    """
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        account = new_account(
            name=name,
            opening_balance=parse_amount(opening),
            inflow_total=parse_amount(inflow),
            outflow_total=parse_amount(outflow),
            fees=parse_amount(fees),
            note=note,
            closing_balance=parse_amount(closing) if closing is not None else None,
        )
        service.add_account(target, account)

    click.echo(f"Added account '{account.name}' on {format_ledger_date(target)}")
    _echo_balance(account)


@account_group.command("set")
@click.argument("day", metavar="DATE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--rename", help="New account name")
@click.option("--opening", help="Opening balance")
@click.option("--inflow-base", help="Inflow amount not covered by itemized transactions")
@click.option("--outflow-base", help="Outflow amount not covered by itemized transactions")
@click.option("--inflow", help="Inflow total (only when there are no itemized inflows)")
@click.option("--outflow", help="Outflow total (only when there are no itemized outflows)")
@click.option("--fees", help="Fees")
@click.option("--note", help="Free-text note")
@click.option("--closing", help="Closing balance (manual override)")
@click.pass_context
def set_account(ctx, day: str, name: str, **options):
    """Edit fields of an account on a day.

    The closing balance is recomputed after every edit unless --closing is
    given, which overrides it.

    Examples:
        dailyledger account set 16/01/2026 "Caixa" --inflow 75
        dailyledger account set 16/01/2026 "Caixa" --closing 130.00
    """
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        edits = []
        for option, field in EDIT_OPTIONS:
            value = options.get(option)
            if value is None:
                continue
            edits.append((field, value if field in TEXT_FIELDS else parse_amount(value)))

        if not edits:
            click.echo("Error: Nothing to change. Pass at least one field option.", err=True)
            ctx.exit(1)

        account = service.edit_account(target, name, edits)

    click.echo(f"Updated account '{account.name}' on {format_ledger_date(target)}")
    _echo_balance(account)


@account_group.command("remove")
@click.argument("day", metavar="DATE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def remove_account(ctx, day: str, name: str):
    """Remove an account from a day."""
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        _, index = service.find_account(target, name)
        service.remove_account(target, index)

    click.echo(f"Removed account '{name}' from {format_ledger_date(target)}")


@account_group.command("hide")
@click.argument("day", metavar="DATE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.argument("field", type=click.Choice(sorted(SENSITIVE_FIELDS)))
@click.pass_context
def hide_field(ctx, day: str, name: str, field: str):
    """Toggle masking of FIELD in private output."""
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        account = service.toggle_sensitive(target, name, field)

    state = "hidden" if field in account.sensitive_flags else "visible"
    click.echo(f"'{field}' of '{name}' is now {state} in private mode")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
