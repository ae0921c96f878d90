"""Decimal-comma amount helpers shared by the receipt parsers."""

import re
from decimal import Decimal

from receiptsplit.domain.receipt import CENTS, to_cents

__all__ = [
    "CENTS",
    "is_decimal_amount",
    "is_integer_token",
    "is_numeric_token",
    "parse_decimal_comma",
    "parse_numeric_token",
    "to_cents",
]

DECIMAL_AMOUNT_PATTERN = re.compile(r"^\d+,\d+$")
INTEGER_PATTERN = re.compile(r"^\d+$")


def is_decimal_amount(token: str | None) -> bool:
    """Return True if token looks like "1,99"."""
    if not token:
        return False
    return DECIMAL_AMOUNT_PATTERN.match(token) is not None


def is_integer_token(token: str | None) -> bool:
    """Return True for a bare integer such as a quantity "2"."""
    if not token:
        return False
    return INTEGER_PATTERN.match(token) is not None


def is_numeric_token(token: str | None) -> bool:
    """Return True for an integer or a decimal-comma number."""
    return is_integer_token(token) or is_decimal_amount(token)


def parse_decimal_comma(token: str) -> Decimal:
    """
    Parse a decimal-comma amount.

    "12,50" -> Decimal("12.50"). The digits after the comma are kept as-is so
    weights like "1,310" stay exact.

    Raises:
        ValueError: if the token is not a decimal-comma number.
    """
    if not is_decimal_amount(token):
        raise ValueError(f"Not a decimal-comma amount: {token!r}")
    return Decimal(token.replace(",", "."))


def parse_numeric_token(token: str) -> Decimal:
    """Parse either an integer quantity or a decimal-comma number."""
    if is_integer_token(token):
        return Decimal(token)
    return parse_decimal_comma(token)
