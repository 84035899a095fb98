"""Dashboard domain service."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError

from dompet.database.base import Database
from dompet.domain import aggregation
from dompet.domain.cache import DASHBOARD, QueryCache
from dompet.domain.entities import (
    Asset,
    BankAccount,
    Category,
    DashboardView,
    Transaction,
    TransactionType,
)
from dompet.domain.errors import FetchError
from dompet.utils.date_parser import DEFAULT_PERIOD, month_range, resolve_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardInputs:
    """Fetched collections the dashboard is computed from.

    A field left as None has not been loaded; the dashboard is only built
    once every collection is present.
    """

    transactions: Optional[Sequence[Transaction]] = None
    categories: Optional[Sequence[Category]] = None
    bank_accounts: Optional[Sequence[BankAccount]] = None
    assets: Optional[Sequence[Asset]] = None

    @property
    def is_ready(self) -> bool:
        return all(
            collection is not None
            for collection in (self.transactions, self.categories, self.bank_accounts, self.assets)
        )


def _as_date(now: Optional[Union[date, datetime]]) -> date:
    if now is None:
        return date.today()
    return now.date() if isinstance(now, datetime) else now


def fetch_window(period: str, now: Optional[Union[date, datetime]] = None) -> tuple[date, date]:
    """Earliest and latest transaction dates any dashboard widget needs."""
    today = _as_date(now)
    starts = (
        resolve_period(period, today).start,
        month_range(today, months_back=1).start,
        today - timedelta(days=aggregation.TREND_DAYS - 1),
    )
    return min(starts), today


def build_dashboard(
    inputs: DashboardInputs,
    period: str = DEFAULT_PERIOD,
    now: Optional[Union[date, datetime]] = None,
) -> Optional[DashboardView]:
    """Compute every dashboard view model from fetched inputs.

    Returns:
        DashboardView, or None when some input has not been loaded yet
    """
    if not inputs.is_ready:
        logger.debug("Dashboard inputs incomplete, skipping aggregation")
        return None

    today = _as_date(now)
    date_range = resolve_period(period, today)
    transactions = list(inputs.transactions)
    categories = list(inputs.categories)

    return DashboardView(
        period=period,
        date_range=date_range,
        summary=aggregation.period_summary(
            transactions, inputs.bank_accounts, inputs.assets, date_range=date_range
        ),
        income_slices=tuple(
            aggregation.category_slices(
                transactions, categories, TransactionType.INCOME, date_range=date_range
            )
        ),
        expense_slices=tuple(
            aggregation.category_slices(
                transactions, categories, TransactionType.EXPENSE, date_range=date_range
            )
        ),
        comparison=tuple(aggregation.compare_periods(transactions, today)),
        trend=tuple(aggregation.daily_trend(transactions, today)),
        category_summary=tuple(
            aggregation.category_summary(transactions, categories, date_range=date_range)
        ),
    )


class DashboardService:
    """Service that loads dashboard inputs and recomputes the view on request."""

    def __init__(self, db: Database, cache: Optional[QueryCache] = None):
        """Initialize dashboard service.

        Args:
            db: Database instance
            cache: Query cache shared with the mutation services
        """
        self.db = db
        self.cache = cache if cache is not None else QueryCache()

    def fetch_inputs(
        self, period: str = DEFAULT_PERIOD, now: Optional[Union[date, datetime]] = None
    ) -> DashboardInputs:
        """Fetch every collection the dashboard depends on.

        Raises:
            FetchError: If any collection cannot be loaded
        """
        start, end = fetch_window(period, now)
        try:
            return DashboardInputs(
                transactions=self.db.list_transactions(start_date=start, end_date=end),
                categories=self.db.list_categories(),
                bank_accounts=self.db.list_bank_accounts(),
                assets=self.db.list_assets(),
            )
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to load dashboard data: %s", e)
            raise FetchError(f"Could not load dashboard data: {e}")

    def refresh(
        self, period: str = DEFAULT_PERIOD, now: Optional[Union[date, datetime]] = None
    ) -> DashboardView:
        """Fetch fresh inputs and recompute the dashboard for a period.

        On a fetch failure nothing is recomputed and the previously cached
        view for the period is left as it was.

        Raises:
            FetchError: If the inputs cannot be loaded
        """
        key = QueryCache.key(DASHBOARD, period=period)
        ticket = self.cache.begin(key)
        inputs = self.fetch_inputs(period, now)
        view = build_dashboard(inputs, period, now)
        self.cache.store(key, ticket, view)
        return view

    def current(self, period: str = DEFAULT_PERIOD) -> Optional[DashboardView]:
        """Last successfully computed view for a period, if any."""
        return self.cache.get(QueryCache.key(DASHBOARD, period=period))
