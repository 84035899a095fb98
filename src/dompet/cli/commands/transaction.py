"""Transaction management commands."""

import click

from dompet.cli.date_filters import resolve_cli_date_range
from dompet.cli.error_handling import handle_domain_error, parse_or_exit
from dompet.cli.resolution import resolve_bank_account_or_exit, resolve_category_or_exit
from dompet.domain.bank_account import BankAccountService
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType
from dompet.domain.transaction import TransactionService
from dompet.utils.currency import format_currency, parse_amount
from dompet.utils.date_parser import PERIODS, parse_date

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage income and expense transactions."""
    pass


@transaction_group.command("add")
@click.option("--type", "txn_type", type=TYPE_CHOICE, required=True, help="income or expense")
@click.option("--amount", required=True, help="Amount, e.g. 50000, 50.000 or Rp 1.250.000")
@click.option("--date", "txn_date", default="today", show_default=True,
              help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--category", help="Category name or ID")
@click.option("--account", help="Bank account name or ID (omit for cash)")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    txn_date: str,
    category: str | None,
    account: str | None,
    description: str | None,
) -> None:
    """Record a new transaction.

    Examples:
        dompet transaction add --type expense --amount 45000 --category "Makanan & Minuman"
        dompet transaction add --type income --amount "Rp 8.500.000" --account BCA --date 2024-05-25
    """
    db = ctx.obj["db"]
    service = TransactionService(db, ctx.obj["cache"])
    kind = TransactionType(txn_type.lower())

    value = parse_or_exit(ctx, parse_amount, amount, "amount")
    day = parse_or_exit(ctx, parse_date, txn_date, "date")

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), category, type=kind)
    account_id = None
    if account is not None:
        account_id = resolve_bank_account_or_exit(ctx, BankAccountService(db), account)

    try:
        transaction_id = service.create_transaction(
            type=kind,
            amount=value,
            transaction_date=day,
            category_id=category_id,
            bank_account_id=account_id,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {kind.label.lower()} of {format_currency(value)} (ID: {transaction_id})")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"], ctx.obj["cache"])
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    transactions = service.list_transactions(start_date=start, end_date=end)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.transaction_date} | {txn.type.label:11s} | "
            f"{format_currency(txn.amount):>16s} | {txn.category_name or 'Uncategorized':20s} | "
            f"{txn.bank_account_name or 'Tunai/Lainnya':15s} | {txn.description or ''}"
        )
        click.echo(f"    ID: {txn.id}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="income or expense")
@click.option("--amount", help="New amount")
@click.option("--date", "txn_date", help="New transaction date")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--account", help="Bank account name or ID, or empty string for cash")
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    txn_type: str | None,
    amount: str | None,
    txn_date: str | None,
    category: str | None,
    account: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --category "" to clear the
    category and --account "" to mark the transaction as cash.
    """
    db = ctx.obj["db"]
    service = TransactionService(db, ctx.obj["cache"])
    new_type = TransactionType(txn_type.lower()) if txn_type else None

    value = parse_or_exit(ctx, parse_amount, amount, "amount") if amount is not None else None
    day = parse_or_exit(ctx, parse_date, txn_date, "date") if txn_date is not None else None

    category_id = None
    clear_category = category == ""
    if category:
        kind = new_type
        if kind is None:
            existing = service.get_transaction(transaction_id)
            kind = existing.type if existing is not None else None
        category_id = resolve_category_or_exit(ctx, CategoryService(db), category, type=kind)

    account_id = None
    clear_account = account == ""
    if account:
        account_id = resolve_bank_account_or_exit(ctx, BankAccountService(db), account)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            type=new_type,
            amount=value,
            transaction_date=day,
            category_id=category_id,
            bank_account_id=account_id,
            description=description,
            clear_category=clear_category,
            clear_bank_account=clear_account,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"], ctx.obj["cache"])

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes:
        click.confirm(
            f"Delete {txn.type.label.lower()} of {format_currency(txn.amount)} "
            f"on {txn.transaction_date}?",
            abort=True,
        )

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
