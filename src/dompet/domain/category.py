"""Category domain service."""

import logging
from typing import Optional

from dompet.database.base import Database
from dompet.domain.cache import CATEGORIES, DASHBOARD, TRANSACTIONS, QueryCache
from dompet.domain.entities import Category as CategoryEntity
from dompet.domain.entities import TransactionType
from dompet.domain.errors import NotFoundError, ValidationError, category_not_found
from dompet.domain.validation import normalize_color, require_length

logger = logging.getLogger(__name__)

NAME_MIN = 2
NAME_MAX = 50

# Starter categories: (name, type, color, icon)
DEFAULT_CATEGORIES = [
    ("Gaji", TransactionType.INCOME, "#22c55e", "wallet"),
    ("Bonus", TransactionType.INCOME, "#16a34a", "gift"),
    ("Investasi", TransactionType.INCOME, "#0ea5e9", "trending-up"),
    ("Pendapatan Lain", TransactionType.INCOME, "#84cc16", "plus-circle"),
    ("Makanan & Minuman", TransactionType.EXPENSE, "#f87171", "utensils"),
    ("Transportasi", TransactionType.EXPENSE, "#fb923c", "car"),
    ("Belanja", TransactionType.EXPENSE, "#f472b6", "shopping-bag"),
    ("Tagihan & Utilitas", TransactionType.EXPENSE, "#facc15", "receipt"),
    ("Hiburan", TransactionType.EXPENSE, "#a78bfa", "film"),
    ("Kesehatan", TransactionType.EXPENSE, "#2dd4bf", "heart"),
    ("Pendidikan", TransactionType.EXPENSE, "#60a5fa", "book"),
    ("Lainnya", TransactionType.EXPENSE, "#94a3b8", "more-horizontal"),
]


class CategoryService:
    """Service for managing income and expense categories."""

    def __init__(self, db: Database, cache: Optional[QueryCache] = None):
        """Initialize category service.

        Args:
            db: Database instance
            cache: Query cache to invalidate after mutations
        """
        self.db = db
        self.cache = cache if cache is not None else QueryCache()

    def _invalidate(self) -> None:
        # Transactions embed category names, so their cached lists go too
        self.cache.invalidate(CATEGORIES, TRANSACTIONS, DASHBOARD)

    def create_category(
        self,
        name: str,
        type: TransactionType,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> str:
        """Create a category.

        Args:
            name: Category name, 2 to 50 characters
            type: Income or expense
            color: Optional ``#RRGGBB`` color
            icon: Optional icon name

        Returns:
            Category ID

        Raises:
            ValidationError: If name or color is invalid
        """
        name = require_length(name, "Category name", NAME_MIN, NAME_MAX)
        category_id = self.db.create_category(
            name=name,
            type=TransactionType(type),
            color=normalize_color(color),
            icon=(icon or "").strip() or None,
        )
        self._invalidate()
        return category_id

    def get_category(self, category_id: str) -> Optional[CategoryEntity]:
        return self.db.get_category(category_id)

    def list_categories(self, type: Optional[TransactionType] = None) -> list[CategoryEntity]:
        """List categories ordered by name.

        Args:
            type: Optional type to restrict the list to
        """
        key = QueryCache.key(CATEGORIES, type=type)
        return list(self.cache.fetch(key, lambda: self.db.list_categories(type=type)))

    def update_category(
        self,
        category_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update a category. A blank color or icon clears it.

        Raises:
            NotFoundError: If category doesn't exist
            ValidationError: If name or color is invalid
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        if name is not None:
            name = require_length(name, "Category name", NAME_MIN, NAME_MAX)
        if color is not None:
            color = normalize_color(color) or ""
        if icon is not None:
            icon = icon.strip()

        self.db.update_category(category_id, name=name, color=color, icon=icon)
        self._invalidate()

    def delete_category(self, category_id: str) -> None:
        """Delete a category; its transactions become uncategorized.

        Raises:
            NotFoundError: If category doesn't exist
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        self.db.delete_category(category_id)
        self._invalidate()

    def init_defaults(self, force: bool = False) -> int:
        """Seed the starter categories.

        Args:
            force: Create missing defaults even if categories already exist

        Returns:
            Number of categories created

        Raises:
            ValidationError: If categories exist and force is not set
        """
        existing = self.db.list_categories()
        if existing and not force:
            raise ValidationError(
                f"{len(existing)} categories already exist. Use --force to add the defaults anyway."
            )

        taken = {(cat.name.lower(), cat.type) for cat in existing}
        created = 0
        for name, txn_type, color, icon in DEFAULT_CATEGORIES:
            if (name.lower(), txn_type) in taken:
                continue
            self.db.create_category(name=name, type=txn_type, color=color, icon=icon)
            created += 1

        logger.info("Seeded %d default categories", created)
        if created:
            self._invalidate()
        return created
