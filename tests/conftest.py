"""Shared pytest fixtures for dompet tests."""

import os
import tempfile
from datetime import date, timedelta
from decimal import Decimal

import pytest

from dompet.database.factories import DEFAULT_USER, create_sqlite_database
from dompet.domain.asset import AssetService
from dompet.domain.bank_account import BankAccountService
from dompet.domain.cache import QueryCache
from dompet.domain.category import CategoryService
from dompet.domain.entities import Category, Transaction, TransactionType
from dompet.domain.transaction import TransactionService


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's DOMPET_* settings out of the tests."""
    for name in ("DOMPET_DB_PATH", "DOMPET_USER", "DOMPET_ADVICE_URL", "DOMPET_ADVICE_TOKEN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, user_id=DEFAULT_USER)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen(temp_db):
    """Open a second connection to the temporary database.

    Useful after CLI invocations, which write through their own session.
    """
    opened = []

    def _reopen(user_id=DEFAULT_USER):
        db = create_sqlite_database(database_path=temp_db.database_path, user_id=user_id)
        opened.append(db)
        return db

    yield _reopen

    for db in opened:
        db.disconnect()


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def category_service(temp_db, cache):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db, cache)


@pytest.fixture
def bank_account_service(temp_db, cache):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db, cache)


@pytest.fixture
def asset_service(temp_db, cache):
    """Create an AssetService with a temporary database."""
    return AssetService(temp_db, cache)


@pytest.fixture
def transaction_service(temp_db, cache):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, cache)


@pytest.fixture
def sample_categories(category_service):
    """Create one income and two expense categories, keyed by name."""
    ids = {
        "Gaji": category_service.create_category("Gaji", TransactionType.INCOME, color="#22c55e"),
        "Makan": category_service.create_category("Makan", TransactionType.EXPENSE, color="#f87171"),
        "Transport": category_service.create_category("Transport", TransactionType.EXPENSE),
    }
    return {name: category_service.get_category(category_id) for name, category_id in ids.items()}


@pytest.fixture
def sample_account(bank_account_service):
    """Create a sample bank account for testing."""
    account_id = bank_account_service.create_bank_account(
        name="Tabungan", bank_name="BCA", account_number="1234567890", balance=Decimal("5000000")
    )
    return bank_account_service.get_bank_account(account_id)


@pytest.fixture
def sample_transactions(transaction_service, sample_categories, sample_account):
    """Record a small mixed set of transactions within the last few days."""
    today = date.today()
    ids = [
        transaction_service.create_transaction(
            type=TransactionType.INCOME,
            amount=Decimal("8000000"),
            transaction_date=today,
            category_id=sample_categories["Gaji"].id,
            bank_account_id=sample_account.id,
            description="Gaji bulanan",
        ),
        transaction_service.create_transaction(
            type=TransactionType.EXPENSE,
            amount=Decimal("45000"),
            transaction_date=today,
            category_id=sample_categories["Makan"].id,
            description="Makan siang",
        ),
        transaction_service.create_transaction(
            type=TransactionType.EXPENSE,
            amount=Decimal("20000"),
            transaction_date=today,
            category_id=sample_categories["Transport"].id,
            bank_account_id=sample_account.id,
            description="Ojek ke kantor",
        ),
    ]
    return [transaction_service.get_transaction(txn_id) for txn_id in ids]


@pytest.fixture
def make_transaction():
    """Build in-memory Transaction entities for the pure aggregation tests."""
    counter = iter(range(1, 10_000))

    def _make(
        amount,
        type=TransactionType.EXPENSE,
        day=None,
        category_id=None,
        description=None,
        category=None,
        bank_account=None,
    ):
        return Transaction(
            id=f"txn-{next(counter)}",
            type=TransactionType(type),
            amount=Decimal(str(amount)),
            transaction_date=day or date.today(),
            category_id=category_id,
            bank_account_id=bank_account.id if bank_account is not None else None,
            description=description,
            category=category,
            bank_account=bank_account,
        )

    return _make


@pytest.fixture
def food_category():
    return Category(id="food", name="Food", type=TransactionType.EXPENSE, color="#ff0000")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def yesterday():
    return date.today() - timedelta(days=1)
