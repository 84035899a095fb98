"""Tests for the SQLAlchemy data-access layer."""

from datetime import date
from decimal import Decimal

import pytest

from dompet.database.factories import create_sqlite_database
from dompet.database.sqlalchemy_db import SQLAlchemyDatabase
from dompet.domain.entities import TransactionType
from dompet.domain.errors import NotFoundError


def test_factory_reads_environment(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("DOMPET_DB_PATH", str(db_path))
    monkeypatch.setenv("DOMPET_USER", "alice")

    db = create_sqlite_database()

    assert isinstance(db, SQLAlchemyDatabase)
    assert db.user_id == "alice"
    assert db.database_url == f"sqlite:///{db_path}"


def test_factory_defaults_to_local_user(tmp_path):
    db = create_sqlite_database(database_path=str(tmp_path / "x.db"))
    assert db.user_id == "local"


def test_rows_are_scoped_to_user(temp_db, reopen):
    category_id = temp_db.create_category("Gaji", TransactionType.INCOME)
    account_id = temp_db.create_bank_account("Tabungan", "BCA")
    temp_db.create_transaction(
        TransactionType.INCOME, Decimal("100"), date(2024, 5, 1), category_id=category_id
    )

    other = reopen("someone-else")

    assert other.list_categories() == []
    assert other.list_bank_accounts() == []
    assert other.list_transactions() == []
    assert other.get_category(category_id) is None
    with pytest.raises(NotFoundError):
        other.delete_category(category_id)
    with pytest.raises(NotFoundError):
        other.update_bank_account(account_id, name="Diambil alih")

    assert len(temp_db.list_transactions()) == 1


def test_list_transactions_joins_and_orders(temp_db):
    category_id = temp_db.create_category("Makan", TransactionType.EXPENSE, color="#f87171")
    account_id = temp_db.create_bank_account("Tabungan", "BCA", balance=Decimal("10"))
    temp_db.create_transaction(TransactionType.EXPENSE, Decimal("5"), date(2024, 5, 1))
    temp_db.create_transaction(
        TransactionType.EXPENSE,
        Decimal("7"),
        date(2024, 5, 2),
        category_id=category_id,
        bank_account_id=account_id,
    )

    transactions = temp_db.list_transactions()

    assert [t.transaction_date for t in transactions] == [date(2024, 5, 2), date(2024, 5, 1)]
    assert transactions[0].category.color == "#f87171"
    assert transactions[0].bank_account_name == "Tabungan"
    assert transactions[1].category is None

    assert temp_db.list_transactions(start_date=date(2024, 5, 2))[0].amount == Decimal("7")


def test_list_categories_by_type(temp_db):
    temp_db.create_category("Gaji", TransactionType.INCOME)
    temp_db.create_category("Belanja", TransactionType.EXPENSE)

    assert [c.name for c in temp_db.list_categories(TransactionType.INCOME)] == ["Gaji"]
    assert [c.name for c in temp_db.list_categories()] == ["Belanja", "Gaji"]


def test_asset_round_trip(temp_db):
    asset_id = temp_db.create_asset(
        "Rumah", "Properti", Decimal("500000000"), Decimal("650000000"), date(2019, 2, 1)
    )

    asset = temp_db.get_asset(asset_id)
    assert asset.name == "Rumah"
    assert asset.profit_loss == Decimal("150000000")

    temp_db.delete_asset(asset_id)
    assert temp_db.get_asset(asset_id) is None
