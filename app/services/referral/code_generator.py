"""
Referral code generation.

Codes are derived from the email so the same address always maps to
the same code.
"""

import hashlib

from app.services.referral.config import REFERRAL_CODE_MIN, REFERRAL_CODE_SPAN


def generate_referral_code(email: str, attempt: int = 0) -> str:
    """
    Derive a 6-digit referral code from an email.

    MD5 of the normalized email, first 8 hex chars read as an unsigned
    integer, reduced into [100000, 999999]. A non-zero ``attempt`` salts
    the digest input so a colliding code can be replaced by another
    deterministic candidate.

    Args:
        email: Email address (normalized here)
        attempt: Collision retry counter, 0 for the primary code

    Returns:
        Referral code as a decimal string
    """
    normalized = email.strip().lower()
    source = normalized if attempt == 0 else f"{normalized}:{attempt}"
    digest = hashlib.md5(source.encode("utf-8")).hexdigest()
    numeric_hash = int(digest[:8], 16)
    return str(numeric_hash % REFERRAL_CODE_SPAN + REFERRAL_CODE_MIN)
