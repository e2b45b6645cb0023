"""Main CLI entry point."""

import logging

import click
from dailyledger.database.factories import create_sqlite_database
from dailyledger.domain.ledger import DEFAULT_USER

# Import and register all commands at module level
from dailyledger.cli.commands import (
    account,
    audit,
    day,
    export,
    import_json,
    item,
    range_cmd,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Configure the root logger once for the CLI process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s - %(name)s - %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DAILYLEDGER_DB_PATH environment variable)",
    envvar="DAILYLEDGER_DB_PATH",
)
@click.option(
    "--user",
    default=DEFAULT_USER,
    show_default=True,
    help="User recorded in the audit log (or DAILYLEDGER_USER)",
    envvar="DAILYLEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (or DAILYLEDGER_LOG_LEVEL)",
    envvar="DAILYLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """Dailyledger - daily cash position ledger.

    Record each account's opening balance, inflows, outflows, fees and
    closing balance per day, carry balances into days without entries, and
    consolidate date ranges.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.call_on_close(db.disconnect)


# Register all commands
day.register_commands(cli)
range_cmd.register_commands(cli)
account.register_commands(cli)
item.register_commands(cli)
audit.register_commands(cli)
export.register_commands(cli)
import_json.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
