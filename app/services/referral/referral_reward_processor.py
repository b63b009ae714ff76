"""
Referral reward processor.

Commission accrual: turns a deposit into one pending ledger entry per
ancestor in the referral chain.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import EarningStatus
from app.models.referral_earning import ReferralEarning
from app.repositories.referral_earning_repository import (
    ReferralEarningRepository,
)
from app.services.referral.chain_manager import ReferralChainManager
from app.services.referral.config import MONEY_QUANTUM, REFERRAL_RATES


@dataclass
class ProcessResult:
    """Result of reward processing."""

    total_rewards: Decimal
    rewards_count: int = 0
    earnings: list[ReferralEarning] = field(default_factory=list)


def calculate_level_reward(amount: Decimal, level: int) -> Decimal:
    """
    Calculate commission for a referral level.

    Args:
        amount: Deposit amount
        level: Referral level (1-3)

    Returns:
        amount * rate / 100, rounded half-up to 8 decimal places
        (0 if level not configured)
    """
    rate = REFERRAL_RATES.get(level, Decimal("0"))

    if rate == Decimal("0"):
        return Decimal("0")

    return (amount * rate / Decimal("100")).quantize(
        MONEY_QUANTUM, rounding=ROUND_HALF_UP
    )


class ReferralRewardProcessor:
    """
    Commission accrual engine.

    Does not commit: the caller owns the transaction so a deposit and
    the earnings it triggers are stored together.
    """

    def __init__(
        self,
        session: AsyncSession,
        chain_manager: ReferralChainManager | None = None,
        earning_repo: ReferralEarningRepository | None = None,
    ) -> None:
        """
        Initialize referral reward processor.

        Args:
            session: Async database session
            chain_manager: Override for the ancestor lookup
            earning_repo: Override for ledger writes
        """
        self.session = session
        self.chain_manager = chain_manager or ReferralChainManager(session)
        self.earning_repo = earning_repo or ReferralEarningRepository(session)

    async def process_rewards(
        self,
        deposit_id: int,
        user_id: int,
        amount: Decimal,
    ) -> ProcessResult:
        """
        Accrue pending commissions for a deposit.

        Args:
            deposit_id: Triggering deposit ID
            user_id: User who made the deposit
            amount: Deposit amount

        Returns:
            ProcessResult with created earnings and their total
        """
        chain = await self.chain_manager.get_referral_chain(user_id)

        if not chain:
            logger.debug(
                "No referrers found for user",
                extra={"user_id": user_id, "deposit_id": deposit_id},
            )
            return ProcessResult(
                total_rewards=Decimal("0"),
                rewards_count=0,
            )

        total_rewards = Decimal("0")
        earnings: list[ReferralEarning] = []

        for link in chain:
            percentage = REFERRAL_RATES[link.level]
            reward_amount = calculate_level_reward(amount, link.level)

            earning = await self.earning_repo.create(
                referrer_id=link.user.id,
                referred_user_id=user_id,
                deposit_id=deposit_id,
                level=link.level,
                percentage=percentage,
                amount=reward_amount,
                status=EarningStatus.PENDING.value,
            )
            earnings.append(earning)
            total_rewards += reward_amount

            logger.info(
                "Referral deposit reward accrued",
                extra={
                    "referrer_id": link.user.id,
                    "referral_user_id": user_id,
                    "deposit_id": deposit_id,
                    "level": link.level,
                    "rate": str(percentage),
                    "amount": str(reward_amount),
                },
            )

        logger.info(
            "Referral rewards processed",
            extra={
                "user_id": user_id,
                "deposit_id": deposit_id,
                "total_rewards": str(total_rewards),
                "rewards_count": len(earnings),
            },
        )

        return ProcessResult(
            total_rewards=total_rewards,
            rewards_count=len(earnings),
            earnings=earnings,
        )
