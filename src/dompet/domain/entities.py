"""Domain model entities for dompet.

These are pure data classes representing business concepts, independent of
database schema. View models at the bottom of the module are derived by the
aggregation and report layers and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction (and of the categories it may use)."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Display label used in chart buckets and exports."""
        return "Pemasukan" if self is TransactionType.INCOME else "Pengeluaran"


class SortKey(str, Enum):
    """Sortable report columns."""

    DATE = "date"
    TYPE = "type"
    AMOUNT = "amount"
    DESCRIPTION = "description"
    CATEGORY = "category"
    ACCOUNT = "account"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


ASSET_TYPES = ("Properti", "Kendaraan", "Investasi", "Elektronik", "Lainnya")


@dataclass(frozen=True)
class Category:
    """Transaction category domain entity."""

    id: str
    name: str
    type: TransactionType
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class BankAccount:
    """Bank account domain entity.

    The balance is a stored value; transactions never adjust it.
    """

    id: str
    name: str
    bank_name: str
    account_number: Optional[str] = None
    balance: Decimal = Decimal("0")
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Asset:
    """Owned asset domain entity."""

    id: str
    name: str
    type: str
    purchase_value: Decimal
    current_value: Decimal
    purchase_date: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def profit_loss(self) -> Decimal:
        return self.current_value - self.purchase_value


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``category`` and ``bank_account`` carry the joined records as fetched;
    either may be None even when the matching id is set (deleted record).
    """

    id: str
    type: TransactionType
    amount: Decimal
    transaction_date: date
    category_id: Optional[str] = None
    bank_account_id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    category: Optional[Category] = None
    bank_account: Optional[BankAccount] = None

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category is not None else None

    @property
    def bank_account_name(self) -> Optional[str]:
        return self.bank_account.name if self.bank_account is not None else None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class ReportFilter:
    """Report filter predicate.

    ``type`` and ``category_id`` accept "all". ``bank_account_id`` accepts
    "all", an account id, or None to match transactions without an account.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: str = "all"
    category_id: str = "all"
    bank_account_id: Optional[str] = "all"
    search: Optional[str] = None


@dataclass(frozen=True)
class PeriodSummary:
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    total_balance: Decimal = Decimal("0")
    total_assets: Decimal = Decimal("0")


@dataclass(frozen=True)
class CategorySlice:
    """One grouped data point of a category chart."""

    name: str
    value: Decimal
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class ComparisonRow:
    name: str
    current_period: Decimal
    previous_period: Decimal


@dataclass(frozen=True)
class DailyPoint:
    date: date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class CategorySummaryRow:
    """Per-category cross tabulation row; ``id`` is None for Uncategorized."""

    id: Optional[str]
    name: str
    color: Optional[str]
    total_income: Decimal
    total_expense: Decimal
    net: Decimal


@dataclass(frozen=True)
class ReportTotals:
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")


@dataclass(frozen=True)
class Page:
    """A page slice of an ordered transaction list."""

    items: tuple[Transaction, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard renders for one period."""

    period: str
    date_range: DateRange
    summary: PeriodSummary
    income_slices: tuple[CategorySlice, ...] = ()
    expense_slices: tuple[CategorySlice, ...] = ()
    comparison: tuple[ComparisonRow, ...] = ()
    trend: tuple[DailyPoint, ...] = ()
    category_summary: tuple[CategorySummaryRow, ...] = ()
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class AdviceRequest:
    """Current-month figures sent to the advice service."""

    total_income: Decimal
    total_expense: Decimal
    top_expense_category: str
    top_expense_amount: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense
