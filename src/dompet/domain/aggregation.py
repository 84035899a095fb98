"""Dashboard aggregation over already-fetched transactions.

Every function here is pure: it takes resident lists and returns view models
without touching the database. Lookup misses never raise; transactions whose
category cannot be resolved are grouped into an "Uncategorized" bucket.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from dompet.domain.entities import (
    Asset,
    BankAccount,
    Category,
    CategorySlice,
    CategorySummaryRow,
    ComparisonRow,
    DailyPoint,
    DateRange,
    PeriodSummary,
    ReportTotals,
    Transaction,
    TransactionType,
)
from dompet.utils.date_parser import month_range

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
UNCATEGORIZED_COLOR = "#888888"
DEFAULT_SLICE_COLORS = {
    TransactionType.INCOME: "#22c55e",
    TransactionType.EXPENSE: "#f87171",
}

TREND_DAYS = 30
TREND_POINTS = 15

ZERO = Decimal("0")


def _today(now: Optional[Union[date, datetime]]) -> date:
    if now is None:
        return date.today()
    return now.date() if isinstance(now, datetime) else now


def _in_range(
    transactions: Iterable[Transaction], date_range: Optional[DateRange]
) -> Iterable[Transaction]:
    if date_range is None:
        return transactions
    return (txn for txn in transactions if date_range.contains(txn.transaction_date))


def build_category_index(categories: Iterable[Category]) -> dict[str, Category]:
    """Index categories by ID, keeping the first record seen for each ID."""
    index: dict[str, Category] = {}
    for category in categories:
        if category is not None and category.id and category.id not in index:
            index[category.id] = category
    return index


def uncategorized_label(transaction_type: TransactionType) -> str:
    """Bucket name for unresolvable categories, unique per transaction type."""
    return f"{UNCATEGORIZED} ({TransactionType(transaction_type).label})"


def sum_by_type(transactions: Iterable[Transaction]) -> ReportTotals:
    """Sum income and expense amounts."""
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return ReportTotals(total_income=income, total_expense=expense, net=income - expense)


def category_slices(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    transaction_type: TransactionType,
    date_range: Optional[DateRange] = None,
) -> list[CategorySlice]:
    """Group one transaction type by category for a pie chart.

    Transactions without a category and transactions pointing at a category
    that no longer exists share a single Uncategorized bucket. The category
    record found for an ID is used even if its type differs.

    Args:
        transactions: Transactions to group
        categories: Known categories of any type
        transaction_type: Type to aggregate
        date_range: Optional inclusive date filter

    Returns:
        Slices sorted by value, largest first, without zero-value buckets
    """
    transaction_type = TransactionType(transaction_type)
    index = build_category_index(categories)

    totals: dict[Optional[str], Decimal] = defaultdict(Decimal)
    for txn in _in_range(transactions, date_range):
        if txn.type != transaction_type:
            continue
        key = txn.category_id if txn.category_id in index else None
        if key is None and txn.category_id is not None:
            logger.debug("Category %s not found, grouping as uncategorized", txn.category_id)
        totals[key] += txn.amount

    slices: list[CategorySlice] = []
    for key, value in totals.items():
        if value <= 0:
            continue
        if key is None:
            slices.append(
                CategorySlice(
                    name=uncategorized_label(transaction_type),
                    value=value,
                    color=DEFAULT_SLICE_COLORS[transaction_type],
                )
            )
        else:
            category = index[key]
            slices.append(
                CategorySlice(
                    name=category.name,
                    value=value,
                    color=category.color or DEFAULT_SLICE_COLORS[transaction_type],
                    icon=category.icon,
                )
            )

    slices.sort(key=lambda item: item.value, reverse=True)
    return slices


def compare_periods(
    transactions: Iterable[Transaction], now: Optional[Union[date, datetime]] = None
) -> list[ComparisonRow]:
    """Compare this calendar month with the previous one.

    Returns:
        Exactly two rows, Income then Expense
    """
    today = _today(now)
    current_range = month_range(today)
    previous_range = month_range(today, months_back=1)

    transactions = list(transactions)
    current = sum_by_type(_in_range(transactions, current_range))
    previous = sum_by_type(_in_range(transactions, previous_range))

    return [
        ComparisonRow("Income", current.total_income, previous.total_income),
        ComparisonRow("Expense", current.total_expense, previous.total_expense),
    ]


def daily_totals(
    transactions: Iterable[Transaction],
    now: Optional[Union[date, datetime]] = None,
    days: int = TREND_DAYS,
) -> list[DailyPoint]:
    """Build a dense day-by-day series ending today.

    Days without activity are present with zero totals.

    Returns:
        ``days`` points in chronological order
    """
    today = _today(now)
    start = today - timedelta(days=days - 1)

    buckets: dict[date, list[Decimal]] = {
        start + timedelta(days=offset): [ZERO, ZERO] for offset in range(days)
    }
    for txn in transactions:
        bucket = buckets.get(txn.transaction_date)
        if bucket is None:
            continue
        if txn.type == TransactionType.INCOME:
            bucket[0] += txn.amount
        else:
            bucket[1] += txn.amount

    return [
        DailyPoint(date=day, income=income, expense=expense)
        for day, (income, expense) in buckets.items()
    ]


def daily_trend(
    transactions: Iterable[Transaction],
    now: Optional[Union[date, datetime]] = None,
    days: int = TREND_DAYS,
    keep: int = TREND_POINTS,
) -> list[DailyPoint]:
    """Return the most recent ``keep`` points of the trailing daily series."""
    points = daily_totals(transactions, now=now, days=max(days, keep))
    return points[-keep:]


def category_summary(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    date_range: Optional[DateRange] = None,
) -> list[CategorySummaryRow]:
    """Cross-tabulate transactions against all categories.

    Each transaction lands in exactly one row: its category's row, or the
    synthetic Uncategorized row when the category is unset or unknown. Rows
    whose income and expense totals are both zero are left out.
    """
    index = build_category_index(categories)

    totals: dict[Optional[str], list[Decimal]] = {
        category_id: [ZERO, ZERO] for category_id in index
    }
    totals[None] = [ZERO, ZERO]

    for txn in _in_range(transactions, date_range):
        key = txn.category_id if txn.category_id in index else None
        if txn.type == TransactionType.INCOME:
            totals[key][0] += txn.amount
        else:
            totals[key][1] += txn.amount

    rows: list[CategorySummaryRow] = []
    for key, (income, expense) in totals.items():
        if income == 0 and expense == 0:
            continue
        if key is None:
            name, color = UNCATEGORIZED, UNCATEGORIZED_COLOR
        else:
            name, color = index[key].name, index[key].color
        rows.append(
            CategorySummaryRow(
                id=key,
                name=name,
                color=color,
                total_income=income,
                total_expense=expense,
                net=income - expense,
            )
        )
    return rows


def summary_grand_total(rows: Iterable[CategorySummaryRow]) -> ReportTotals:
    """Sum category summary rows into a grand total."""
    income = ZERO
    expense = ZERO
    for row in rows:
        income += row.total_income
        expense += row.total_expense
    return ReportTotals(total_income=income, total_expense=expense, net=income - expense)


def period_summary(
    transactions: Iterable[Transaction],
    accounts: Iterable[BankAccount] = (),
    assets: Iterable[Asset] = (),
    date_range: Optional[DateRange] = None,
) -> PeriodSummary:
    """Headline figures: period income/expense plus stored balances and asset values."""
    totals = sum_by_type(_in_range(transactions, date_range))
    return PeriodSummary(
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        total_balance=sum((account.balance for account in accounts), ZERO),
        total_assets=sum((asset.current_value for asset in assets), ZERO),
    )


def top_expense_category(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
) -> tuple[str, Decimal]:
    """Find the categorized expense bucket with the largest total.

    Returns:
        (category name, amount); ("Uncategorized", 0) when nothing qualifies
    """
    index = build_category_index(categories)
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        if txn.type == TransactionType.EXPENSE and txn.category_id:
            totals[txn.category_id] += txn.amount

    best_name, best_amount = UNCATEGORIZED, ZERO
    for category_id, amount in totals.items():
        if amount > best_amount:
            best_amount = amount
            category = index.get(category_id)
            best_name = category.name if category is not None else UNCATEGORIZED
    return best_name, best_amount
