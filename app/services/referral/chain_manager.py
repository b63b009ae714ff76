"""
Referral chain management module.

Walks the referred-by edges upward from a user.
"""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.referral.config import REFERRAL_DEPTH


@dataclass(frozen=True)
class ChainLink:
    """One ancestor in a referral chain."""

    user: User
    level: int


class ReferralChainManager:
    """Manages referral chain operations."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
    ) -> None:
        """Initialize chain manager."""
        self.session = session
        self.user_repo = user_repo or UserRepository(session)

    async def get_referral_chain(
        self, user_id: int, max_level: int = REFERRAL_DEPTH
    ) -> list[ChainLink]:
        """
        Get referral chain.

        Follows referred_by_code -> referral_code one level at a time.
        There is no cycle detection: max_level bounds the walk even if
        the stored edges were corrupted into a loop.

        Args:
            user_id: User ID
            max_level: Chain depth to retrieve

        Returns:
            Links from direct referrer (level 1) up to max_level
        """
        chain: list[ChainLink] = []

        current = await self.user_repo.get_by_id(user_id)
        if current is None:
            return chain

        level = 0
        while level < max_level:
            referrer = await self.user_repo.get_referrer(current)
            if referrer is None:
                break

            level += 1
            chain.append(ChainLink(user=referrer, level=level))
            current = referrer

        logger.debug(
            "Referral chain retrieved",
            extra={
                "user_id": user_id,
                "depth": max_level,
                "chain_length": len(chain)
            },
        )

        return chain
