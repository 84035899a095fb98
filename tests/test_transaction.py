"""Tests for the transaction service."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from dompet.domain.cache import CATEGORIES, TRANSACTIONS, QueryCache
from dompet.domain.entities import TransactionType
from dompet.domain.errors import NotFoundError, ValidationError

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def test_create_transaction(transaction_service, sample_categories, sample_account):
    txn_id = transaction_service.create_transaction(
        type=EXPENSE,
        amount=Decimal("45000"),
        transaction_date=date(2024, 5, 3),
        category_id=sample_categories["Makan"].id,
        bank_account_id=sample_account.id,
        description="  Nasi Padang  ",
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.type == EXPENSE
    assert txn.amount == Decimal("45000")
    assert txn.description == "Nasi Padang"
    assert txn.category_name == "Makan"
    assert txn.bank_account_name == "Tabungan"


def test_create_cash_transaction_without_category(transaction_service):
    txn_id = transaction_service.create_transaction(
        type=INCOME, amount=Decimal("100"), transaction_date=date.today()
    )
    txn = transaction_service.get_transaction(txn_id)
    assert txn.category is None
    assert txn.bank_account is None


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
def test_amount_must_be_positive(transaction_service, amount):
    with pytest.raises(ValidationError, match="greater than 0"):
        transaction_service.create_transaction(
            type=EXPENSE, amount=amount, transaction_date=date.today()
        )


@pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity")])
def test_amount_must_be_finite(transaction_service, amount):
    with pytest.raises(ValidationError, match="finite"):
        transaction_service.create_transaction(
            type=EXPENSE, amount=amount, transaction_date=date.today()
        )


def test_date_cannot_be_in_future(transaction_service):
    with pytest.raises(ValidationError, match="future"):
        transaction_service.create_transaction(
            type=EXPENSE, amount=Decimal("1"), transaction_date=date.today() + timedelta(days=1)
        )


def test_description_length_limit(transaction_service):
    with pytest.raises(ValidationError, match="255"):
        transaction_service.create_transaction(
            type=EXPENSE, amount=Decimal("1"), transaction_date=date.today(), description="x" * 256
        )


def test_category_must_match_type(transaction_service, sample_categories):
    with pytest.raises(ValidationError, match="Makan"):
        transaction_service.create_transaction(
            type=INCOME,
            amount=Decimal("1"),
            transaction_date=date.today(),
            category_id=sample_categories["Makan"].id,
        )


def test_unknown_references(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            type=EXPENSE, amount=Decimal("1"), transaction_date=date.today(), category_id="nope"
        )
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            type=EXPENSE, amount=Decimal("1"), transaction_date=date.today(), bank_account_id="nope"
        )


def test_list_transactions_newest_first(transaction_service, yesterday):
    older = transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("1"), transaction_date=yesterday
    )
    newer = transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("2"), transaction_date=date.today()
    )

    assert [t.id for t in transaction_service.list_transactions()] == [newer, older]
    assert [t.id for t in transaction_service.list_transactions(end_date=yesterday)] == [older]


def test_update_transaction(transaction_service, sample_transactions, sample_categories):
    lunch = sample_transactions[1]

    transaction_service.update_transaction(
        lunch.id,
        amount=Decimal("50000"),
        category_id=sample_categories["Transport"].id,
        description="",
    )

    updated = transaction_service.get_transaction(lunch.id)
    assert updated.amount == Decimal("50000")
    assert updated.category_name == "Transport"
    assert updated.description is None


def test_update_type_rechecks_category(transaction_service, sample_transactions):
    lunch = sample_transactions[1]

    with pytest.raises(ValidationError):
        transaction_service.update_transaction(lunch.id, type=INCOME)

    transaction_service.update_transaction(lunch.id, type=INCOME, clear_category=True)
    updated = transaction_service.get_transaction(lunch.id)
    assert updated.type == INCOME
    assert updated.category_id is None


def test_update_clear_bank_account(transaction_service, sample_transactions):
    salary = sample_transactions[0]

    transaction_service.update_transaction(salary.id, clear_bank_account=True)

    assert transaction_service.get_transaction(salary.id).bank_account_id is None


def test_update_conflicting_flags(transaction_service, sample_transactions, sample_categories):
    with pytest.raises(ValidationError):
        transaction_service.update_transaction(
            sample_transactions[1].id,
            category_id=sample_categories["Makan"].id,
            clear_category=True,
        )


def test_update_and_delete_missing(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction("missing", amount=Decimal("1"))
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction("missing")


def test_delete_transaction(transaction_service, sample_transactions):
    transaction_service.delete_transaction(sample_transactions[0].id)

    assert transaction_service.get_transaction(sample_transactions[0].id) is None
    assert len(transaction_service.list_transactions()) == 2


def test_mutations_invalidate_transaction_cache(transaction_service, cache):
    txn_key = QueryCache.key(TRANSACTIONS)
    cat_key = QueryCache.key(CATEGORIES)
    cache.store(txn_key, cache.begin(txn_key), [])
    cache.store(cat_key, cache.begin(cat_key), [])

    transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("1"), transaction_date=date.today()
    )

    assert txn_key not in cache
    assert cat_key in cache


def test_list_reads_through_cache(transaction_service, temp_db, cache):
    transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("1000"), transaction_date=date.today()
    )
    assert len(transaction_service.list_transactions()) == 1

    # Written behind the service's back, so the cached list is still served
    temp_db.create_transaction(EXPENSE, Decimal("2000"), date.today())
    assert len(transaction_service.list_transactions()) == 1
    assert QueryCache.key(TRANSACTIONS, start=None, end=None) in cache

    transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("3000"), transaction_date=date.today()
    )
    assert len(transaction_service.list_transactions()) == 3


def test_list_cache_is_keyed_by_date_range(transaction_service, yesterday):
    transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("1000"), transaction_date=yesterday
    )
    transaction_service.create_transaction(
        type=EXPENSE, amount=Decimal("2000"), transaction_date=date.today()
    )

    assert len(transaction_service.list_transactions()) == 2
    assert len(transaction_service.list_transactions(start_date=date.today())) == 1
