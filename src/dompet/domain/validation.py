"""Input checks shared by the mutation services."""

import re
from datetime import date
from decimal import Decimal
from typing import Optional

from dompet.domain.errors import ValidationError, future_date, length_out_of_range

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def require_length(value: Optional[str], field_name: str, minimum: int, maximum: int) -> str:
    """Strip ``value`` and check its length, returning the stripped text."""
    text = (value or "").strip()
    if not minimum <= len(text) <= maximum:
        raise ValidationError(length_out_of_range(field_name, minimum, maximum))
    return text


def optional_text(value: Optional[str], field_name: str, maximum: int) -> Optional[str]:
    """Strip optional free text; blank becomes None."""
    if value is None:
        return None
    text = value.strip()
    if len(text) > maximum:
        raise ValidationError(length_out_of_range(field_name, 0, maximum))
    return text or None


def _require_finite(value: Optional[Decimal], field_name: str) -> Decimal:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    amount = Decimal(value)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return amount


def require_positive(value: Decimal, field_name: str) -> Decimal:
    amount = _require_finite(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    amount = _require_finite(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


def require_not_future(value: date, field_name: str, today: Optional[date] = None) -> date:
    if value > (today or date.today()):
        raise ValidationError(future_date(field_name))
    return value


def normalize_color(value: Optional[str]) -> Optional[str]:
    """Accept a ``#RRGGBB`` color or blank (None)."""
    if value is None or not value.strip():
        return None
    color = value.strip()
    if not HEX_COLOR.match(color):
        raise ValidationError(f"Color '{color}' must be in #RRGGBB format")
    return color.lower()
