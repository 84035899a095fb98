"""Tests for the bank account service."""

from decimal import Decimal

import pytest

from dompet.domain.errors import NotFoundError, ValidationError


def test_create_bank_account(bank_account_service):
    account_id = bank_account_service.create_bank_account(
        name="Giro", bank_name="Mandiri", balance=Decimal("250000")
    )

    account = bank_account_service.get_bank_account(account_id)
    assert account.name == "Giro"
    assert account.bank_name == "Mandiri"
    assert account.account_number is None
    assert account.balance == Decimal("250000")


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "G", "bank_name": "Mandiri"},
        {"name": "Giro", "bank_name": "M" * 51},
        {"name": "Giro", "bank_name": "Mandiri", "account_number": "9" * 31},
        {"name": "Giro", "bank_name": "Mandiri", "balance": Decimal("-1")},
    ],
)
def test_create_validation(bank_account_service, fields):
    with pytest.raises(ValidationError):
        bank_account_service.create_bank_account(**fields)


def test_balance_must_be_finite(bank_account_service):
    with pytest.raises(ValidationError, match="finite"):
        bank_account_service.create_bank_account(
            name="Giro", bank_name="Mandiri", balance=Decimal("NaN")
        )


def test_update_bank_account(bank_account_service, sample_account):
    bank_account_service.update_bank_account(
        sample_account.id, balance=Decimal("0"), account_number=""
    )

    updated = bank_account_service.get_bank_account(sample_account.id)
    assert updated.balance == Decimal("0")
    assert updated.account_number is None
    assert updated.name == "Tabungan"


def test_delete_bank_account_keeps_transactions(
    bank_account_service, transaction_service, sample_transactions, sample_account
):
    bank_account_service.delete_bank_account(sample_account.id)

    assert bank_account_service.list_bank_accounts() == []
    remaining = transaction_service.list_transactions()
    assert len(remaining) == 3
    assert all(txn.bank_account_id is None for txn in remaining)


def test_missing_account(bank_account_service):
    with pytest.raises(NotFoundError):
        bank_account_service.update_bank_account("missing", name="Apa saja")
    with pytest.raises(NotFoundError):
        bank_account_service.delete_bank_account("missing")


def test_list_is_refreshed_after_update(bank_account_service, sample_account):
    assert [a.name for a in bank_account_service.list_bank_accounts()] == ["Tabungan"]

    bank_account_service.update_bank_account(sample_account.id, name="Tabungan Utama")

    assert [a.name for a in bank_account_service.list_bank_accounts()] == ["Tabungan Utama"]
