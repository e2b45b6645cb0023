"""CLI error handling helpers."""

from collections.abc import Iterator
from contextlib import contextmanager

import click

from dailyledger.domain.errors import DomainError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, PersistenceError):
        click.echo(f"Error: changes were not saved. {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


@contextmanager
def exit_on_domain_error(ctx: click.Context) -> Iterator[None]:
    """Turn domain and parsing errors raised inside the block into a CLI failure."""
    try:
        yield
    except ValueError as e:
        handle_domain_error(ctx, e)
