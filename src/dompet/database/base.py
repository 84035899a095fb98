"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid pulling services through domain/__init__.py
from dompet.domain.entities import (
    Asset,
    BankAccount,
    Category,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract data-access interface for dompet.

    Every implementation is bound to a single user: reads only return that
    user's rows and writes are attributed to that user.
    """

    user_id: str

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        type: TransactionType,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> str:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, type: Optional[TransactionType] = None) -> list[Category]:
        """List categories ordered by name, optionally only one type."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update category fields that are not None."""
        pass

    @abstractmethod
    def delete_category(self, category_id: str) -> None:
        """Delete a category, clearing it from transactions that use it."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        name: str,
        bank_name: str,
        account_number: Optional[str] = None,
        balance: Decimal = Decimal("0"),
    ) -> str:
        """Create a bank account. Returns account ID."""
        pass

    @abstractmethod
    def get_bank_account(self, account_id: str) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self) -> list[BankAccount]:
        """List all bank accounts."""
        pass

    @abstractmethod
    def update_bank_account(
        self,
        account_id: str,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        account_number: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> None:
        """Update bank account fields that are not None."""
        pass

    @abstractmethod
    def delete_bank_account(self, account_id: str) -> None:
        """Delete a bank account, clearing it from transactions that use it."""
        pass

    # Asset operations
    @abstractmethod
    def create_asset(
        self,
        name: str,
        type: str,
        purchase_value: Decimal,
        current_value: Decimal,
        purchase_date: date,
        description: Optional[str] = None,
    ) -> str:
        """Create an asset. Returns asset ID."""
        pass

    @abstractmethod
    def get_asset(self, asset_id: str) -> Optional[Asset]:
        """Get asset by ID."""
        pass

    @abstractmethod
    def list_assets(self) -> list[Asset]:
        """List all assets."""
        pass

    @abstractmethod
    def update_asset(
        self,
        asset_id: str,
        name: Optional[str] = None,
        type: Optional[str] = None,
        purchase_value: Optional[Decimal] = None,
        current_value: Optional[Decimal] = None,
        purchase_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update asset fields that are not None."""
        pass

    @abstractmethod
    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        type: TransactionType,
        amount: Decimal,
        transaction_date: date,
        category_id: Optional[str] = None,
        bank_account_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, with category and bank account joined."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with category and bank account joined.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
        """
        pass

    @abstractmethod
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
        """Update transaction fields that are not None.

        Args:
            clear_category: If True, set category_id to None
            clear_bank_account: If True, set bank_account_id to None
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass
