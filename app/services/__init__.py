"""
Services.

Business logic layer.
"""

from app.services.deposit_service import DepositService
from app.services.user_service import UserService

__all__ = [
    "DepositService",
    "UserService",
]
