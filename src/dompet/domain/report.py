"""Report table engine: filtering, sorting and pagination of transactions."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from dompet.database.base import Database
from dompet.domain.aggregation import sum_by_type
from dompet.domain.entities import (
    Page,
    ReportFilter,
    ReportTotals,
    SortDirection,
    SortKey,
    Transaction,
)
from dompet.domain.errors import ValidationError

logger = logging.getLogger(__name__)

ALL = "all"
DEFAULT_PAGE_SIZE = 10


def _matches(txn: Transaction, report_filter: ReportFilter) -> bool:
    if report_filter.start_date is not None and txn.transaction_date < report_filter.start_date:
        return False
    if report_filter.end_date is not None and txn.transaction_date > report_filter.end_date:
        return False

    if report_filter.type and report_filter.type != ALL and txn.type != report_filter.type:
        return False

    if (
        report_filter.category_id
        and report_filter.category_id != ALL
        and txn.category_id != report_filter.category_id
    ):
        return False

    # None selects transactions without an account
    if report_filter.bank_account_id != ALL and txn.bank_account_id != report_filter.bank_account_id:
        return False

    if report_filter.search:
        needle = report_filter.search.lower()
        if needle not in (txn.description or "").lower():
            return False

    return True


def filter_transactions(
    transactions: Iterable[Transaction], report_filter: Optional[ReportFilter] = None
) -> list[Transaction]:
    """Keep transactions matching every active field of the filter.

    Args:
        transactions: Transactions to filter
        report_filter: Filter predicate; None keeps everything

    Returns:
        Matching transactions in their original order
    """
    if report_filter is None:
        return list(transactions)
    return [txn for txn in transactions if _matches(txn, report_filter)]


_SORT_VALUES: dict[SortKey, Callable[[Transaction], Any]] = {
    SortKey.DATE: lambda txn: txn.transaction_date,
    SortKey.TYPE: lambda txn: str(getattr(txn.type, "value", txn.type)).lower(),
    SortKey.AMOUNT: lambda txn: txn.amount,
    SortKey.DESCRIPTION: lambda txn: (txn.description or "").lower(),
    SortKey.CATEGORY: lambda txn: (txn.category_name or "").lower(),
    SortKey.ACCOUNT: lambda txn: (txn.bank_account_name or "").lower(),
}


def sort_transactions(
    transactions: Iterable[Transaction],
    key: SortKey | str = SortKey.DATE,
    direction: SortDirection | str = SortDirection.DESCENDING,
) -> list[Transaction]:
    """Sort transactions by a report column.

    Category and account columns sort on the joined display name, lower-cased,
    with missing joins as the empty string. Equal values keep their input
    order in both directions.

    Raises:
        ValidationError: If key or direction is not recognized
    """
    try:
        sort_key = SortKey(key)
        sort_direction = SortDirection(direction)
    except ValueError as e:
        raise ValidationError(str(e))

    return sorted(
        transactions,
        key=_SORT_VALUES[sort_key],
        reverse=sort_direction is SortDirection.DESCENDING,
    )


def paginate(
    transactions: Sequence[Transaction], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    """Slice one page out of an ordered list.

    Pages are 1-based. Requests outside the valid range are clamped to the
    first or last page.

    Raises:
        ValidationError: If page_size is smaller than 1
    """
    if page_size < 1:
        raise ValidationError(f"Page size must be at least 1, got {page_size}")

    total_items = len(transactions)
    total_pages = math.ceil(total_items / page_size)
    current = min(max(page, 1), max(total_pages, 1))
    if current != page:
        logger.debug("Page %s out of range, showing page %s of %s", page, current, total_pages)

    offset = (current - 1) * page_size
    return Page(
        items=tuple(transactions[offset : offset + page_size]),
        page=current,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


def report_totals(transactions: Iterable[Transaction]) -> ReportTotals:
    """Income, expense and net flow over a (filtered, never paginated) set."""
    return sum_by_type(transactions)


@dataclass(frozen=True)
class ReportResult:
    """Outcome of one report run.

    ``transactions`` is the complete filtered and sorted list used for
    totals and exports; ``page`` is the slice to display.
    """

    report_filter: ReportFilter
    transactions: tuple[Transaction, ...]
    page: Page
    totals: ReportTotals


class ReportService:
    """Service for building the transaction report table."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def run(
        self,
        report_filter: Optional[ReportFilter] = None,
        sort_key: SortKey | str = SortKey.DATE,
        direction: SortDirection | str = SortDirection.DESCENDING,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ReportResult:
        """Fetch, filter, sort and paginate transactions.

        Args:
            report_filter: Filter predicate (defaults to no filtering)
            sort_key: Column to sort by
            direction: Sort direction
            page: Requested page, clamped to the valid range
            page_size: Rows per page

        Returns:
            ReportResult with the page slice and totals over the filtered set
        """
        report_filter = report_filter or ReportFilter()
        fetched = self.db.list_transactions(
            start_date=report_filter.start_date, end_date=report_filter.end_date
        )
        filtered = filter_transactions(fetched, report_filter)
        ordered = sort_transactions(filtered, sort_key, direction)
        return ReportResult(
            report_filter=report_filter,
            transactions=tuple(ordered),
            page=paginate(ordered, page, page_size),
            totals=report_totals(ordered),
        )
