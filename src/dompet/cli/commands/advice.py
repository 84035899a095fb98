"""Financial advice command."""

from datetime import date

import click

from dompet.domain.advice import build_advice_request, create_advice_client
from dompet.domain.category import CategoryService
from dompet.domain.transaction import TransactionService
from dompet.utils.currency import format_currency
from dompet.utils.date_parser import month_range


@click.command("advice")
@click.option("--url", help="Advice endpoint (overrides DOMPET_ADVICE_URL environment variable)")
@click.pass_context
def advice(ctx, url: str | None):
    """Ask the advice service for suggestions on this month's spending."""
    client = create_advice_client(url=url)
    if client is None:
        click.echo("Error: No advice service configured. Set DOMPET_ADVICE_URL.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    this_month = month_range(date.today())
    transactions = TransactionService(db, ctx.obj["cache"]).list_transactions(
        start_date=this_month.start, end_date=this_month.end
    )
    categories = CategoryService(db, ctx.obj["cache"]).list_categories()
    request = build_advice_request(transactions, categories)

    click.echo(
        f"This month: income {format_currency(request.total_income)}, "
        f"expense {format_currency(request.total_expense)}, "
        f"top expense {request.top_expense_category} "
        f"({format_currency(request.top_expense_amount)})"
    )

    suggestion = client.get_advice(request)
    if suggestion is None:
        click.echo("No advice available right now.")
        return
    click.echo(f"\n{suggestion}")


def register_commands(cli):
    """Register advice command with main CLI."""
    cli.add_command(advice)
