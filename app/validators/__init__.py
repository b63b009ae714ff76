"""
Validators package.

Provides common validation functions for user input.
"""

from app.validators.common import (
    normalize_email,
    validate_amount,
    validate_email,
    validate_referral_code,
)


__all__ = [
    "normalize_email",
    "validate_amount",
    "validate_email",
    "validate_referral_code",
]
