"""
Deposit service.

Records deposits and accrues the referral commissions they trigger.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.deposit import Deposit
from app.repositories.deposit_repository import DepositRepository
from app.services.referral.referral_reward_processor import (
    ProcessResult,
    ReferralRewardProcessor,
)
from app.services.user_service import UserService
from app.utils.db_decorators import transactional


class DepositService:
    """Deposit recording with commission accrual."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize deposit service.

        Args:
            session: Database session
        """
        self.session = session
        self.deposit_repo = DepositRepository(session)
        self.user_service = UserService(session)
        self.reward_processor = ReferralRewardProcessor(session)

    @transactional
    async def record_deposit(
        self, email: str, amount: Decimal
    ) -> tuple[Deposit, ProcessResult]:
        """
        Record a completed deposit and accrue commissions.

        The deposit and all its earnings are committed together.

        Args:
            email: Depositing user's email
            amount: Positive deposit amount

        Returns:
            Tuple of (deposit, accrual result)

        Raises:
            NotFoundError: Unknown email
        """
        user = await self.user_service.get_by_email_or_raise(email)

        deposit = await self.deposit_repo.create_completed(user.id, amount)

        result = await self.reward_processor.process_rewards(
            deposit_id=deposit.id,
            user_id=user.id,
            amount=amount,
        )

        logger.info(
            "Deposit recorded",
            extra={
                "deposit_id": deposit.id,
                "user_id": user.id,
                "amount": str(amount),
                "rewards_count": result.rewards_count,
            },
        )

        return deposit, result
