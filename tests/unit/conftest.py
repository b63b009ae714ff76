"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Mock user repository
- Factory for detached User objects
"""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.models.user import User


@pytest.fixture
def make_user():
    """
    Build detached User objects without a database.

    Returns:
        Callable(id, code, referred_by=None) -> User
    """
    def _make_user(
        user_id: int, referral_code: str, referred_by_code: str | None = None
    ) -> User:
        return User(
            id=user_id,
            email=f"user{user_id}@example.com",
            referral_code=referral_code,
            referred_by_code=referred_by_code,
            balance=Decimal("0"),
            created_at=datetime(2026, 1, user_id % 28 + 1, tzinfo=UTC),
        )

    return _make_user


@pytest.fixture
def mock_user_repo():
    """
    Mock UserRepository.

    Returns:
        AsyncMock with get_by_id, get_referrer and get_direct_referrals
    """
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_referrer = AsyncMock(return_value=None)
    repo.get_direct_referrals = AsyncMock(return_value=[])
    return repo
