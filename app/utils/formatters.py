"""
Formatters utility.

Utility functions for formatting data exposed outside the service.
"""

import re
from decimal import Decimal

_EMAIL_MASK_RE = re.compile(r"(.{2})(.*)(@.*)")


def mask_email(email: str | None) -> str:
    """
    Mask counterparty email.

    Keeps the first 2 characters and the domain, the rest of the
    local part becomes ***. Values that do not fit the pattern
    (e.g. a 1-character local part) are returned unchanged.

    Args:
        email: Email address

    Returns:
        Masked email like "jo***@example.com"
    """
    if not email:
        return ""
    return _EMAIL_MASK_RE.sub(r"\1***\3", email, count=1)


def money_to_number(value: Decimal | int | float | None) -> float:
    """
    Convert stored money to a JSON number.

    Args:
        value: Decimal amount (None treated as zero)

    Returns:
        Float for JSON payloads
    """
    if value is None:
        return 0.0
    return float(value)


def format_money(value: Decimal) -> str:
    """
    Format money for human-readable messages without trailing zeros.

    Args:
        value: Decimal amount

    Returns:
        String like "19" or "16.5"
    """
    normalized = Decimal(value).normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")
