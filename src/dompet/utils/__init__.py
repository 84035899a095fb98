"""Utility functions for dompet."""

from dompet.utils.date_parser import parse_date, resolve_period, month_range
from dompet.utils.currency import (
    format_currency,
    format_user_input,
    parse_user_input,
    parse_amount,
)

__all__ = [
    "parse_date",
    "resolve_period",
    "month_range",
    "format_currency",
    "format_user_input",
    "parse_user_input",
    "parse_amount",
]
