"""Transaction domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from dompet.database.base import Database
from dompet.domain.cache import DASHBOARD, TRANSACTIONS, QueryCache
from dompet.domain.entities import Transaction as TransactionEntity
from dompet.domain.entities import TransactionType
from dompet.domain.errors import (
    NotFoundError,
    ValidationError,
    bank_account_not_found,
    category_not_found,
    category_type_mismatch,
    transaction_not_found,
)
from dompet.domain.validation import optional_text, require_not_future, require_positive

logger = logging.getLogger(__name__)

DESCRIPTION_MAX = 255


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, cache: Optional[QueryCache] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            cache: Query cache to invalidate after mutations
        """
        self.db = db
        self.cache = cache if cache is not None else QueryCache()

    def _check_category(self, category_id: str, txn_type: TransactionType) -> None:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.type != txn_type:
            raise ValidationError(
                category_type_mismatch(category.name, category.type.value, txn_type.value)
            )

    def _check_bank_account(self, bank_account_id: str) -> None:
        if self.db.get_bank_account(bank_account_id) is None:
            raise NotFoundError(bank_account_not_found(bank_account_id))

    def _invalidate(self) -> None:
        self.cache.invalidate(TRANSACTIONS, DASHBOARD)

    def create_transaction(
        self,
        type: TransactionType,
        amount: Decimal,
        transaction_date: date,
        category_id: Optional[str] = None,
        bank_account_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Create a transaction.

        Args:
            type: Income or expense
            amount: Positive amount
            transaction_date: Date of the transaction, not in the future
            category_id: Optional category of the same type
            bank_account_id: Optional bank account, None for cash
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If the category or bank account doesn't exist
        """
        txn_type = TransactionType(type)
        amount = require_positive(amount, "Amount")
        require_not_future(transaction_date, "Transaction date")
        description = optional_text(description, "Description", DESCRIPTION_MAX)

        if category_id is not None:
            self._check_category(category_id, txn_type)
        if bank_account_id is not None:
            self._check_bank_account(bank_account_id)

        transaction_id = self.db.create_transaction(
            type=txn_type,
            amount=amount,
            transaction_date=transaction_date,
            category_id=category_id,
            bank_account_id=bank_account_id,
            description=description,
        )
        logger.info("Created %s transaction %s", txn_type.value, transaction_id)
        self._invalidate()
        return transaction_id

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[TransactionEntity]:
        """List transactions, newest first. Results are cached per date range."""
        key = QueryCache.key(TRANSACTIONS, start=start_date, end=end_date)
        return list(
            self.cache.fetch(
                key, lambda: self.db.list_transactions(start_date=start_date, end_date=end_date)
            )
        )

    def update_transaction(
        self,
        transaction_id: str,
        type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        transaction_date: Optional[date] = None,
        category_id: Optional[str] = None,
        bank_account_id: Optional[str] = None,
        description: Optional[str] = None,
        clear_category: bool = False,
        clear_bank_account: bool = False,
    ) -> None:
        """Update transaction fields.

        The category is re-checked against the resulting type, so changing
        the type of a categorized transaction requires a matching category
        (or clearing it).

        Raises:
            NotFoundError: If the transaction, category or bank account doesn't exist
            ValidationError: If a field is invalid
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        if clear_category and category_id is not None:
            raise ValidationError("Cannot set both category_id and clear_category")
        if clear_bank_account and bank_account_id is not None:
            raise ValidationError("Cannot set both bank_account_id and clear_bank_account")

        new_type = TransactionType(type) if type is not None else txn.type
        if amount is not None:
            amount = require_positive(amount, "Amount")
        if transaction_date is not None:
            require_not_future(transaction_date, "Transaction date")
        if description is not None:
            description = optional_text(description, "Description", DESCRIPTION_MAX) or ""

        resulting_category = None if clear_category else (category_id or txn.category_id)
        if resulting_category is not None and (
            category_id is not None or new_type != txn.type
        ):
            self._check_category(resulting_category, new_type)
        if bank_account_id is not None:
            self._check_bank_account(bank_account_id)

        self.db.update_transaction(
            transaction_id=transaction_id,
            type=type if type is None else new_type,
            amount=amount,
            transaction_date=transaction_date,
            category_id=category_id,
            bank_account_id=bank_account_id,
            description=description,
            clear_category=clear_category,
            clear_bank_account=clear_bank_account,
        )
        self._invalidate()

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)
        self._invalidate()
