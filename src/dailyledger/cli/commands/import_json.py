"""Legacy JSON import command."""

import click
from dailyledger.cli.error_handling import handle_domain_error
from dailyledger.cli.services import get_ledger_service
from dailyledger.domain.json_import import JSONImportService


@click.command("import-json")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_json(ctx, json_file: str):
    """Import days from a JSON file in the legacy local format.

    Each imported day replaces whatever is saved for that day.
    """
    service = JSONImportService(get_ledger_service(ctx))

    try:
        count = service.import_file(json_file)
        click.echo(f"Imported {count} day(s) from {json_file}")
    except ValueError as e:
        handle_domain_error(ctx, e)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import-json command with main CLI."""
    cli.add_command(import_json)
