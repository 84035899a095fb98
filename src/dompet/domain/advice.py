"""Client for the external financial advice service."""

import logging
import os
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence, Union

import requests

from dompet.domain import aggregation
from dompet.domain.entities import AdviceRequest, Category, Transaction
from dompet.utils.date_parser import month_range

logger = logging.getLogger(__name__)


def build_advice_request(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    now: Optional[Union[date, datetime]] = None,
) -> AdviceRequest:
    """Summarize the current month (up to today) for the advice service."""
    today = now.date() if isinstance(now, datetime) else (now or date.today())
    month_start = month_range(today).start
    this_month = [
        txn for txn in transactions if month_start <= txn.transaction_date <= today
    ]

    totals = aggregation.sum_by_type(this_month)
    top_name, top_amount = aggregation.top_expense_category(this_month, categories)
    return AdviceRequest(
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        top_expense_category=top_name,
        top_expense_amount=top_amount,
    )


def request_to_payload(advice_request: AdviceRequest) -> dict[str, Any]:
    """Convert an AdviceRequest to the service's JSON payload."""
    return {
        "totalIncome": float(advice_request.total_income),
        "totalExpense": float(advice_request.total_expense),
        "topExpenseCategory": advice_request.top_expense_category,
        "topExpenseAmount": float(advice_request.top_expense_amount),
        "balance": float(advice_request.balance),
    }


class AdviceClient:
    """Best-effort client for the advice endpoint.

    Failures are logged and reported as ``None``; nothing else in the
    application depends on the service being reachable.
    """

    def __init__(self, url: str, token: Optional[str] = None, timeout: float = 30.0) -> None:
        """Initialize client with endpoint URL and optional bearer token."""
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def get_advice(self, advice_request: AdviceRequest) -> Optional[str]:
        """Ask the service for suggestions.

        Returns:
            Suggestion text, or None if the service could not provide one
        """
        try:
            response = self._session.post(
                self.url, json=request_to_payload(advice_request), timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Advice service request failed: %s", e)
            return None
        except ValueError as e:
            logger.warning("Advice service returned invalid JSON: %s", e)
            return None

        suggestion = data.get("suggestion") if isinstance(data, dict) else None
        if not suggestion:
            logger.warning("Advice service returned no suggestion: %s", data)
            return None
        return str(suggestion)


def create_advice_client(
    url: Optional[str] = None, token: Optional[str] = None
) -> Optional[AdviceClient]:
    """Create an advice client from arguments or the environment.

    Falls back to DOMPET_ADVICE_URL and DOMPET_ADVICE_TOKEN. Returns None if
    no endpoint is configured.
    """
    url = url or os.environ.get("DOMPET_ADVICE_URL")
    token = token or os.environ.get("DOMPET_ADVICE_TOKEN")
    if not url:
        return None
    return AdviceClient(url, token=token)
