"""Mapper functions to convert SQLAlchemy models into domain entities."""

from decimal import Decimal
from typing import Optional

from dompet.domain import entities as domain
from dompet.database.models import (
    Asset as ORMAsset,
    BankAccount as ORMBankAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        type=domain.TransactionType(orm_category.type),
        color=orm_category.color,
        icon=orm_category.icon,
        created_at=orm_category.created_at,
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        name=orm_account.account_name,
        bank_name=orm_account.bank_name,
        account_number=orm_account.account_number,
        balance=_decimal(orm_account.balance),
        created_at=orm_account.created_at,
    )


def asset_to_domain(orm_asset: ORMAsset) -> domain.Asset:
    """Convert SQLAlchemy Asset model to domain Asset entity."""
    return domain.Asset(
        id=orm_asset.id,
        name=orm_asset.asset_name,
        type=orm_asset.asset_type,
        purchase_value=_decimal(orm_asset.purchase_value),
        current_value=_decimal(orm_asset.current_value),
        purchase_date=orm_asset.purchase_date,
        description=orm_asset.description,
        created_at=orm_asset.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity.

    The joined category and bank account are converted as well.
    """
    category: Optional[domain.Category] = None
    if orm_transaction.category is not None:
        category = category_to_domain(orm_transaction.category)

    bank_account: Optional[domain.BankAccount] = None
    if orm_transaction.bank_account is not None:
        bank_account = bank_account_to_domain(orm_transaction.bank_account)

    return domain.Transaction(
        id=orm_transaction.id,
        type=domain.TransactionType(orm_transaction.type),
        amount=_decimal(orm_transaction.amount),
        transaction_date=orm_transaction.transaction_date,
        category_id=orm_transaction.category_id,
        bank_account_id=orm_transaction.bank_account_id,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
        category=category,
        bank_account=bank_account,
    )
