"""CLI helpers for resolving categories and bank accounts by name or ID."""

from __future__ import annotations

import click

from dompet.domain.bank_account import BankAccountService
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType


def resolve_category_or_exit(
    ctx: click.Context,
    category_service: CategoryService,
    category: str,
    type: TransactionType | None = None,
) -> str:
    """Resolve a category name or ID, or exit with a CLI error.

    Names are matched case-insensitively. When ``type`` is given, a name is
    looked up among that type's categories only.
    """
    if category_service.get_category(category) is not None:
        return category

    matches = [
        cat
        for cat in category_service.list_categories(type=type)
        if cat.name.lower() == category.lower()
    ]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        click.echo(
            f"Error: Category name '{category}' is ambiguous, use --type or the category ID",
            err=True,
        )
    else:
        click.echo(f"Error: Category '{category}' not found", err=True)
    ctx.exit(1)


def resolve_bank_account_or_exit(
    ctx: click.Context, account_service: BankAccountService, account: str
) -> str:
    """Resolve a bank account name or ID, or exit with a CLI error."""
    if account_service.get_bank_account(account) is not None:
        return account

    for acc in account_service.list_bank_accounts():
        if acc.name.lower() == account.lower():
            return acc.id

    click.echo(f"Error: Bank account '{account}' not found", err=True)
    ctx.exit(1)
