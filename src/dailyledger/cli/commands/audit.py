"""Audit log commands."""

import click
from dailyledger.cli.error_handling import exit_on_domain_error
from dailyledger.domain.audit import AuditService


@click.group()
def audit_group():
    """Inspect the audit trail of changes."""
    pass


@audit_group.command("list")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum number of entries")
@click.pass_context
def list_audit(ctx, limit: int):
    """List audit entries, newest first."""
    service = AuditService(ctx.obj["db"])

    with exit_on_domain_error(ctx):
        entries = service.list_entries(limit=limit)

    if not entries:
        click.echo("No audit entries found.")
        return

    click.echo(f"{'When (UTC)':<21}{'User':<14}{'Action':<9}Description")
    click.echo("-" * 80)
    for entry in entries:
        click.echo(
            f"{entry.timestamp.strftime('%d/%m/%Y %H:%M:%S'):<21}"
            f"{entry.user:<14}{entry.action:<9}{entry.description}"
        )


@audit_group.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_audit(ctx, yes: bool):
    """Delete every audit entry."""
    if not yes:
        click.confirm("Delete the whole audit trail?", abort=True)

    service = AuditService(ctx.obj["db"])
    with exit_on_domain_error(ctx):
        count = service.clear()
    click.echo(f"Deleted {count} audit entr{'y' if count == 1 else 'ies'}")


def register_commands(cli):
    """Register audit commands with main CLI."""
    cli.add_command(audit_group, name="audit")
