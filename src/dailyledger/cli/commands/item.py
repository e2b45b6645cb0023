"""Itemized transaction commands."""

import click
from dailyledger.cli.date_filters import parse_day_or_exit
from dailyledger.cli.display import format_currency
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.cli.services import FLOW_CHOICE, get_ledger_service
from dailyledger.domain.entities import FlowKind
from dailyledger.utils.amount_parser import parse_amount
from dailyledger.utils.date_parser import format_ledger_date


@click.group()
def item_group():
    """Manage itemized inflows and outflows of an account."""
    pass


@item_group.command("add")
@click.argument("day", metavar="DATE")
@click.argument("account_name")
@click.argument("kind", type=FLOW_CHOICE)
@click.argument("description")
@click.argument("value")
@click.pass_context
def add_item(ctx, day: str, account_name: str, kind: str, description: str, value: str):
    """Add an itemized transaction to an account.

    The account's inflow or outflow total becomes its base plus the sum of
    its items, and the closing balance is recomputed.

    Examples:
        dailyledger item add 16/01/2026 "Caixa" inflow "Venda balcão" 25,00
        dailyledger item add today "Caixa" outflow "Fornecedor" "1.200,00"
    """
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)
    flow = FlowKind(kind.lower())

    with exit_on_domain_error(ctx):
        transaction = service.add_item(target, account_name, flow, description, parse_amount(value))

    click.echo(
        f"Added {flow.value} '{transaction.description}' "
        f"({format_currency(transaction.value)}) to '{account_name}' "
        f"on {format_ledger_date(target)}"
    )
    click.echo(f"ID: {transaction.id}")


@item_group.command("remove")
@click.argument("day", metavar="DATE")
@click.argument("account_name")
@click.argument("kind", type=FLOW_CHOICE)
@click.argument("transaction_id")
@click.pass_context
def remove_item(ctx, day: str, account_name: str, kind: str, transaction_id: str):
    """Remove an itemized transaction by ID."""
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)
    flow = FlowKind(kind.lower())

    with exit_on_domain_error(ctx):
        account = service.remove_item(target, account_name, flow, transaction_id)

    click.echo(
        f"Removed {flow.value} {transaction_id} from '{account_name}'; "
        f"{flow.value} total is now {format_currency(account.total(flow))}"
    )


@item_group.command("list")
@click.argument("day", metavar="DATE")
@click.argument("account_name")
@click.pass_context
def list_items(ctx, day: str, account_name: str):
    """List the itemized transactions of an account."""
    target = parse_day_or_exit(ctx, day)
    service = get_ledger_service(ctx)

    with exit_on_domain_error(ctx):
        snapshot, index = service.find_account(target, account_name)
    account = snapshot.accounts[index]

    for flow in FlowKind:
        items = account.items(flow)
        click.echo(f"\n{flow.value.capitalize()} (base {format_currency(account.base(flow))})")
        if not items:
            click.echo("  (no items)")
            continue
        for transaction in items:
            click.echo(
                f"  {transaction.id:<34}{transaction.description:<30}"
                f"{format_currency(transaction.value):>18}"
            )
        click.echo(f"  {'Total':<64}{format_currency(account.total(flow)):>18}")


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
