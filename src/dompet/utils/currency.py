"""Rupiah formatting and user-input parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re
from typing import Union

Number = Union[Decimal, int, float]

CURRENCY_PREFIX = "Rp"

_NON_DIGITS = re.compile(r"\D")

# (unit size, suffix, decimal places), largest first
SHORT_UNITS = (
    (Decimal(1_000_000_000), "M", 1),
    (Decimal(1_000_000), "jt", 1),
    (Decimal(1_000), "rb", 0),
)


def _group_thousands(whole: int) -> str:
    """Group an integer with Indonesian thousands separators."""
    return f"{whole:,}".replace(",", ".")


def _group_digits(digits: str) -> str:
    """Group a plain digit string in threes from the right."""
    digits = digits.lstrip("0") or "0"
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return ".".join(groups)


def _format_short(magnitude: Decimal) -> str | None:
    """Abbreviate a non-negative amount, or None below one thousand.

    A value that rounds up to 1000 of a unit moves to the next larger unit.
    """
    for index, (size, suffix, places) in enumerate(SHORT_UNITS):
        if magnitude < size:
            continue
        exponent = Decimal(1).scaleb(-places)
        scaled = (magnitude / size).quantize(exponent, rounding=ROUND_HALF_UP)
        if scaled >= 1000 and index > 0:
            size, suffix, places = SHORT_UNITS[index - 1]
            exponent = Decimal(1).scaleb(-places)
            scaled = (magnitude / size).quantize(exponent, rounding=ROUND_HALF_UP)
        return f"{scaled} {suffix}"
    return None


def format_currency(amount: Number, short: bool = False) -> str:
    """Format an amount as Rupiah.

    Standard format groups thousands with "." and has no decimal digits,
    e.g. 1500000 -> "Rp 1.500.000" and -2500 -> "-Rp 2.500".

    Short format abbreviates large magnitudes:
    - >= 1 billion: "Rp 1.2 M" (one decimal)
    - >= 1 million: "Rp 1.5 jt" (one decimal)
    - >= 1 thousand: "Rp 15 rb" (no decimals)
    Smaller values fall back to the standard format. Negative amounts put
    the sign before the prefix in both formats, e.g. "-Rp 1.5 jt".

    Args:
        amount: Amount to format
        short: Use magnitude abbreviations

    Returns:
        Formatted string
    """
    value = Decimal(str(amount))

    if short:
        abbreviated = _format_short(abs(value))
        if abbreviated is not None:
            sign = "-" if value < 0 else ""
            return f"{sign}{CURRENCY_PREFIX} {abbreviated}"

    whole = int(abs(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if value < 0 and whole != 0 else ""
    return f"{sign}{CURRENCY_PREFIX} {_group_thousands(whole)}"


def format_number(amount: Number) -> str:
    """Format a number with thousands grouping and no currency prefix."""
    return format_currency(amount).replace(f"{CURRENCY_PREFIX} ", "")


def format_user_input(value: str) -> str:
    """Live-format a typed amount with thousands separators.

    Every non-digit character is dropped first: "1000000" -> "1.000.000".
    Returns an empty string when no digits remain.
    """
    digits = _NON_DIGITS.sub("", value or "")
    if not digits:
        return ""
    return _group_digits(digits)


def parse_user_input(value: str) -> int:
    """Parse a live-formatted amount back into an integer.

    Strips all non-digit characters; returns 0 for empty input. Never raises,
    validation happens in the domain services.
    """
    digits = _NON_DIGITS.sub("", str(value) if value is not None else "")
    if not digits:
        return 0
    try:
        return int(digits)
    except ValueError:
        # Longer than the interpreter's integer string conversion limit
        return 0


def parse_amount(amount_str: str) -> Decimal:
    """Parse an entered amount string into a Decimal.

    Handles various formats:
    - "150000"
    - "Rp 150.000"
    - "150.000,50" (Indonesian thousands and decimal separators)
    - "1,5" (decimal comma)
    - "12.5" (a dot not followed by exactly three digits is a decimal point)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()
    cleaned = re.sub(r"^-?\s*rp\.?", lambda m: "-" if m.group(0).startswith("-") else "",
                     cleaned, flags=re.IGNORECASE)
    cleaned = cleaned.replace(" ", "")

    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")
    elif cleaned.count(".") > 1 or re.search(r"\.\d{3}$", cleaned):
        cleaned = cleaned.replace(".", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
