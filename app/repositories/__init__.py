"""
Repositories.

Data access layer over the users, deposits and referral_earnings tables.
"""

from app.repositories.deposit_repository import DepositRepository
from app.repositories.referral_earning_repository import (
    ReferralEarningRepository,
)
from app.repositories.user_repository import UserRepository

__all__ = [
    "DepositRepository",
    "ReferralEarningRepository",
    "UserRepository",
]
