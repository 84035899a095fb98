"""Main CLI entry point."""

import logging

import click

from dompet.database.factories import create_sqlite_database
from dompet.domain.cache import QueryCache

# Import and register all commands at module level
from dompet.cli.commands import (
    account,
    advice,
    asset,
    category,
    dashboard,
    report,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DOMPET_DB_PATH environment variable)",
    envvar="DOMPET_DB_PATH",
)
@click.option(
    "--user",
    help="User whose data is read and written (overrides DOMPET_USER environment variable)",
    envvar="DOMPET_USER",
)
@click.option("--verbose", "-v", count=True, help="Log progress (-v) or debug details (-vv)")
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, verbose: int):
    """Dompet - Personal finance tracking and reporting.

    Record income and expenses against categories and bank accounts, keep
    track of assets, and view dashboards and exportable reports.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path, user_id=user)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
    ctx.obj.setdefault("cache", QueryCache())


# Register all commands
transaction.register_commands(cli)
category.register_commands(cli)
account.register_commands(cli)
asset.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)
advice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
