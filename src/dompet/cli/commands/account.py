"""Bank account management commands."""

import click

from dompet.cli.error_handling import handle_domain_error, parse_or_exit
from dompet.cli.resolution import resolve_bank_account_or_exit
from dompet.domain.bank_account import BankAccountService
from dompet.utils.currency import format_currency, parse_amount


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", required=True, help="Bank name")
@click.option("--number", help="Account number")
@click.option("--balance", default="0", show_default=True, help="Current balance")
@click.pass_context
def add_account(ctx, name: str, bank: str, number: str | None, balance: str):
    """Create a bank account.

    Examples:
        dompet account add "Tabungan Utama" --bank BCA --number 1234567890
        dompet account add "Dompet Digital" --bank GoPay --balance 250000
    """
    service = BankAccountService(ctx.obj["db"], ctx.obj["cache"])
    amount = parse_or_exit(ctx, parse_amount, balance, "balance")
    try:
        account_id = service.create_bank_account(
            name=name, bank_name=bank, account_number=number, balance=amount
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all bank accounts."""
    service = BankAccountService(ctx.obj["db"], ctx.obj["cache"])

    accounts = service.list_bank_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 90)
    for acc in accounts:
        click.echo(
            f"{acc.name:20s} | Bank: {acc.bank_name:12s} | No: {acc.account_number or '-':15s} | "
            f"{format_currency(acc.balance):>16s} | ID: {acc.id}"
        )
    click.echo(f"\nTotal balance: {format_currency(sum(acc.balance for acc in accounts))}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--bank", help="New bank name")
@click.option("--number", help="New account number, or empty string to clear")
@click.option("--balance", help="New balance")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    bank: str | None,
    number: str | None,
    balance: str | None,
) -> None:
    """Update a bank account.

    ACCOUNT can be an account name or ID.
    """
    service = BankAccountService(ctx.obj["db"], ctx.obj["cache"])
    account_id = resolve_bank_account_or_exit(ctx, service, account)
    amount = parse_or_exit(ctx, parse_amount, balance, "balance") if balance is not None else None
    try:
        service.update_bank_account(
            account_id, name=name, bank_name=bank, account_number=number, balance=amount
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {account_id}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete a bank account.

    ACCOUNT can be an account name or ID. Transactions recorded against the
    account are kept and shown as cash afterwards.
    """
    service = BankAccountService(ctx.obj["db"], ctx.obj["cache"])
    account_id = resolve_bank_account_or_exit(ctx, service, account)
    if not yes:
        click.confirm(f"Delete account '{account}'?", abort=True)
    try:
        service.delete_bank_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account {account_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
