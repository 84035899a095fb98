"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class FetchError(DomainError):
    """Data could not be loaded from the data-access layer."""


class ExportError(DomainError):
    """An export could not be produced or written."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def bank_account_not_found(account_id: str) -> str:
    """Return message for missing bank account."""
    return f"Bank account {account_id} not found"


def asset_not_found(asset_id: str) -> str:
    return f"Asset {asset_id} not found"


def category_type_mismatch(category_name: str, category_type: str, transaction_type: str) -> str:
    """Return message when a category is used for the other transaction type."""
    return (
        f"Category '{category_name}' is an {category_type} category and cannot be "
        f"used for an {transaction_type} transaction"
    )


def length_out_of_range(field_name: str, minimum: int, maximum: int) -> str:
    """Return message for text fields outside their allowed length."""
    if minimum <= 0:
        return f"{field_name} must be at most {maximum} characters"
    return f"{field_name} must be between {minimum} and {maximum} characters"


def future_date(field_name: str) -> str:
    return f"{field_name} cannot be in the future"
