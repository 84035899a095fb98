"""Bank account domain service."""

from decimal import Decimal
from typing import Optional

from dompet.database.base import Database
from dompet.domain.cache import BANK_ACCOUNTS, DASHBOARD, TRANSACTIONS, QueryCache
from dompet.domain.entities import BankAccount as BankAccountEntity
from dompet.domain.errors import NotFoundError, bank_account_not_found
from dompet.domain.validation import optional_text, require_length, require_non_negative

NAME_MIN = 2
NAME_MAX = 50
ACCOUNT_NUMBER_MAX = 30


class BankAccountService:
    """Service for managing bank accounts."""

    def __init__(self, db: Database, cache: Optional[QueryCache] = None):
        """Initialize bank account service.

        Args:
            db: Database instance
            cache: Query cache to invalidate after mutations
        """
        self.db = db
        self.cache = cache if cache is not None else QueryCache()

    def _invalidate(self) -> None:
        self.cache.invalidate(BANK_ACCOUNTS, TRANSACTIONS, DASHBOARD)

    def create_bank_account(
        self,
        name: str,
        bank_name: str,
        account_number: Optional[str] = None,
        balance: Decimal = Decimal("0"),
    ) -> str:
        """Create a bank account.

        Args:
            name: Account name, 2 to 50 characters
            bank_name: Bank name, 2 to 50 characters
            account_number: Optional account number, up to 30 characters
            balance: Stored balance, not negative

        Returns:
            Bank account ID

        Raises:
            ValidationError: If a field is invalid
        """
        account_id = self.db.create_bank_account(
            name=require_length(name, "Account name", NAME_MIN, NAME_MAX),
            bank_name=require_length(bank_name, "Bank name", NAME_MIN, NAME_MAX),
            account_number=optional_text(account_number, "Account number", ACCOUNT_NUMBER_MAX),
            balance=require_non_negative(balance, "Balance"),
        )
        self._invalidate()
        return account_id

    def get_bank_account(self, account_id: str) -> Optional[BankAccountEntity]:
        return self.db.get_bank_account(account_id)

    def list_bank_accounts(self) -> list[BankAccountEntity]:
        return list(
            self.cache.fetch(QueryCache.key(BANK_ACCOUNTS), self.db.list_bank_accounts)
        )

    def update_bank_account(
        self,
        account_id: str,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        account_number: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> None:
        """Update a bank account. A blank account number clears it.

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If a field is invalid
        """
        if self.db.get_bank_account(account_id) is None:
            raise NotFoundError(bank_account_not_found(account_id))

        if name is not None:
            name = require_length(name, "Account name", NAME_MIN, NAME_MAX)
        if bank_name is not None:
            bank_name = require_length(bank_name, "Bank name", NAME_MIN, NAME_MAX)
        if account_number is not None:
            account_number = (
                optional_text(account_number, "Account number", ACCOUNT_NUMBER_MAX) or ""
            )
        if balance is not None:
            balance = require_non_negative(balance, "Balance")

        self.db.update_bank_account(
            account_id,
            name=name,
            bank_name=bank_name,
            account_number=account_number,
            balance=balance,
        )
        self._invalidate()

    def delete_bank_account(self, account_id: str) -> None:
        """Delete a bank account; its transactions keep no account.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        if self.db.get_bank_account(account_id) is None:
            raise NotFoundError(bank_account_not_found(account_id))
        self.db.delete_bank_account(account_id)
        self._invalidate()
