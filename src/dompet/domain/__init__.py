"""Domain layer for dompet application.

Services are imported from their own modules; this package only re-exports
the plain entity and error types so that lower layers can import it freely.
"""

from dompet.domain.entities import (
    TransactionType,
    Transaction,
    Category,
    BankAccount,
    Asset,
    ReportFilter,
)
from dompet.domain.errors import DomainError, ValidationError, NotFoundError

__all__ = [
    "TransactionType",
    "Transaction",
    "Category",
    "BankAccount",
    "Asset",
    "ReportFilter",
    "DomainError",
    "ValidationError",
    "NotFoundError",
]
