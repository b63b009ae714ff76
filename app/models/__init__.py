"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base
from app.models.deposit import Deposit
from app.models.enums import DepositStatus, EarningStatus
from app.models.referral_earning import ReferralEarning
from app.models.user import User

__all__ = [
    "Base",
    "Deposit",
    "DepositStatus",
    "EarningStatus",
    "ReferralEarning",
    "User",
]
