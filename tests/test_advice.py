"""Tests for the advice service client."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from dompet.domain.advice import (
    AdviceClient,
    build_advice_request,
    create_advice_client,
    request_to_payload,
)
from dompet.domain.entities import AdviceRequest, TransactionType

REQUEST = AdviceRequest(
    total_income=Decimal("8000000"),
    total_expense=Decimal("2500000"),
    top_expense_category="Makan",
    top_expense_amount=Decimal("1200000"),
)


def test_build_advice_request_uses_current_month(make_transaction, food_category):
    now = date(2024, 5, 20)
    transactions = [
        make_transaction(5000, TransactionType.INCOME, day=date(2024, 5, 2)),
        make_transaction(700, TransactionType.EXPENSE, day=date(2024, 5, 10), category_id="food"),
        make_transaction(300, TransactionType.EXPENSE, day=date(2024, 4, 30), category_id="food"),
        make_transaction(900, TransactionType.EXPENSE, day=date(2024, 5, 25), category_id="food"),
    ]

    request = build_advice_request(transactions, [food_category], now)

    assert request.total_income == Decimal("5000")
    assert request.total_expense == Decimal("700")
    assert request.top_expense_category == "Food"
    assert request.top_expense_amount == Decimal("700")
    assert request.balance == Decimal("4300")


def test_request_to_payload():
    assert request_to_payload(REQUEST) == {
        "totalIncome": 8000000.0,
        "totalExpense": 2500000.0,
        "topExpenseCategory": "Makan",
        "topExpenseAmount": 1200000.0,
        "balance": 5500000.0,
    }


@pytest.fixture
def mock_session():
    with patch("dompet.domain.advice.requests.Session") as session_class:
        session = MagicMock()
        session_class.return_value = session
        yield session


def test_get_advice(mock_session):
    mock_session.post.return_value.json.return_value = {"suggestion": "Kurangi makan di luar."}

    client = AdviceClient("https://advice.example/api", token="secret")
    suggestion = client.get_advice(REQUEST)

    assert suggestion == "Kurangi makan di luar."
    mock_session.headers.update.assert_any_call({"Authorization": "Bearer secret"})
    _, kwargs = mock_session.post.call_args
    assert kwargs["json"]["topExpenseCategory"] == "Makan"
    assert kwargs["timeout"] == 30.0


def test_get_advice_network_error(mock_session):
    mock_session.post.side_effect = requests.ConnectionError("unreachable")

    assert AdviceClient("https://advice.example/api").get_advice(REQUEST) is None


def test_get_advice_http_error(mock_session):
    mock_session.post.return_value.raise_for_status.side_effect = requests.HTTPError("500")

    assert AdviceClient("https://advice.example/api").get_advice(REQUEST) is None


def test_get_advice_invalid_json(mock_session):
    mock_session.post.return_value.json.side_effect = ValueError("not json")

    assert AdviceClient("https://advice.example/api").get_advice(REQUEST) is None


def test_get_advice_without_suggestion(mock_session):
    mock_session.post.return_value.json.return_value = {"error": "quota"}

    assert AdviceClient("https://advice.example/api").get_advice(REQUEST) is None


def test_create_advice_client_from_environment(monkeypatch):
    assert create_advice_client() is None

    monkeypatch.setenv("DOMPET_ADVICE_URL", "https://advice.example/api")
    client = create_advice_client()
    assert isinstance(client, AdviceClient)
    assert client.url == "https://advice.example/api"
