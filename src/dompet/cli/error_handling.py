"""CLI error handling helpers."""

from typing import Callable, TypeVar

import click

from dompet.domain.errors import DomainError

T = TypeVar("T")


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_or_exit(ctx: click.Context, parser: Callable[[str], T], value: str, label: str) -> T:
    """Parse a CLI value, exiting with ``Error: Invalid <label>: ...`` on failure."""
    try:
        return parser(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
