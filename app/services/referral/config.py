"""
Referral system configuration.

Contains constants and configuration for the referral system.
"""

from decimal import Decimal

# 3-level commission on deposits, rates in percent of the deposit amount
REFERRAL_DEPTH = 3
REFERRAL_RATES = {
    1: Decimal("16.00"),  # direct referrer
    2: Decimal("3.00"),
    3: Decimal("2.00"),
}

# Commission amounts are stored with 8 decimal places
MONEY_QUANTUM = Decimal("0.00000001")

EARNINGS_HISTORY_LIMIT = 50

# Referral codes are 6 decimal digits
REFERRAL_CODE_MIN = 100000
REFERRAL_CODE_SPAN = 900000
REFERRAL_CODE_MAX_ATTEMPTS = 10
