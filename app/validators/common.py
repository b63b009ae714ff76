"""
Common validators for user input.

Each validator returns a tuple of (is_valid, parsed_value, error_message).
"""

import re
from decimal import Decimal, InvalidOperation

# Local part accepts the RFC 5322 atom characters, domain needs a 2+ letter TLD
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$"
)
REFERRAL_CODE_PATTERN = re.compile(r"^\d{6}$")

MAX_AMOUNT_DECIMALS = 8
# DECIMAL(18, 8) columns hold at most 10 integer digits
MAX_AMOUNT_EXCLUSIVE = Decimal("1e10")


def normalize_email(email: str) -> str:
    """
    Normalize email for lookups and storage.

    Args:
        email: Email address

    Returns:
        Trimmed, lowercased email
    """
    return email.strip().lower()


def validate_email(value: object) -> tuple[bool, str | None, str | None]:
    """
    Validate email address.

    Args:
        value: Raw email from query string or JSON body

    Returns:
        Tuple of (is_valid, normalized_email, error_message)

    Examples:
        >>> validate_email(" User@Example.com ")
        (True, 'user@example.com', None)
        >>> validate_email("")
        (False, None, 'Email is required')
        >>> validate_email("invalid")
        (False, None, 'Invalid email format')
    """
    if value is None or not isinstance(value, str) or not value.strip():
        return False, None, "Email is required"

    email = normalize_email(value)

    if len(email) > 255:
        return False, None, "Email is too long (maximum 255 characters)"

    if not EMAIL_PATTERN.match(email):
        return False, None, "Invalid email format"

    return True, email, None


def validate_amount(
    value: object,
    min_exclusive: Decimal = Decimal("0"),
) -> tuple[bool, Decimal | None, str | None]:
    """
    Validate deposit amount.

    Accepts JSON numbers and numeric strings. Floats are converted
    through their string form so 0.1 stays 0.1.

    Args:
        value: Raw amount
        min_exclusive: Amount must be strictly greater than this

    Returns:
        Tuple of (is_valid, parsed_value, error_message)

    Examples:
        >>> validate_amount("100.50")
        (True, Decimal('100.50'), None)
        >>> validate_amount(-10)
        (False, None, 'Amount must be a positive number')
    """
    if value is None or isinstance(value, bool):
        return False, None, "Amount is required"

    if isinstance(value, int | float):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip().replace(",", ".")
    else:
        return False, None, "Invalid amount format"

    if not raw:
        return False, None, "Amount is required"

    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return False, None, "Invalid amount format"

    if not amount.is_finite():
        return False, None, "Amount must be a finite number"

    if amount <= min_exclusive:
        return False, None, "Amount must be a positive number"

    if amount >= MAX_AMOUNT_EXCLUSIVE:
        return False, None, "Amount is too large (maximum 9999999999.99999999)"

    if amount.as_tuple().exponent < -MAX_AMOUNT_DECIMALS:
        return False, None, (
            f"Amount has too many decimal places (maximum {MAX_AMOUNT_DECIMALS})"
        )

    return True, amount, None


def validate_referral_code(value: object) -> tuple[bool, str | None, str | None]:
    """
    Validate referral code format.

    Args:
        value: Raw referral code

    Returns:
        Tuple of (is_valid, stripped_code, error_message)
    """
    if value is None or not isinstance(value, str | int) or isinstance(value, bool):
        return False, None, "Referral code is required"

    code = str(value).strip()
    if not code:
        return False, None, "Referral code is required"

    if not REFERRAL_CODE_PATTERN.match(code):
        return False, None, "Referral code must be 6 digits"

    return True, code, None
