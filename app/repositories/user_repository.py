"""
User repository.

Data access layer for User model, including the referral-edge lookups
used by the chain walker and the team expander.
"""

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository
from app.validators.common import normalize_email


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> User | None:
        """
        Get user by email (normalized before lookup).

        Args:
            email: Email address (any case, may have surrounding spaces)

        Returns:
            User or None
        """
        return await self.get_by(email=normalize_email(email))

    async def get_by_referral_code(
        self, referral_code: str
    ) -> User | None:
        """
        Get user by referral code.

        Args:
            referral_code: Referral code

        Returns:
            User or None
        """
        return await self.get_by(referral_code=referral_code.strip())

    async def get_referrer(self, user: User) -> User | None:
        """
        Get the user whose referral code this user registered with.

        Args:
            user: Referred user

        Returns:
            Direct referrer or None
        """
        if not user.referred_by_code:
            return None
        return await self.get_by_referral_code(user.referred_by_code)

    async def get_direct_referrals(
        self, referral_code: str
    ) -> list[User]:
        """
        Get users registered with this referral code, oldest first.

        Args:
            referral_code: Referrer's own referral code

        Returns:
            List of direct referrals
        """
        stmt = (
            select(User)
            .where(User.referred_by_code == referral_code)
            .order_by(User.created_at, User.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def lock_by_id(self, user_id: int) -> User | None:
        """
        Load user with SELECT FOR UPDATE.

        Serializes concurrent balance changes for the same user.
        SQLite ignores the lock clause.

        Args:
            user_id: User ID

        Returns:
            Locked user or None
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_balance(
        self, user_id: int, amount: Decimal
    ) -> Decimal:
        """
        Add amount to user's settled balance in one statement.

        Args:
            user_id: User ID
            amount: Amount to add

        Returns:
            New balance
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
            .returning(User.balance)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
