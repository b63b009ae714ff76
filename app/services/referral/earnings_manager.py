"""
Referral earnings management module.

Claim settlement: pending commissions become settled balance.
"""

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.referral_earning_repository import (
    ReferralEarningRepository,
)
from app.repositories.user_repository import UserRepository
from app.utils.datetime_utils import utc_now
from app.utils.db_decorators import transactional
from app.utils.exceptions import NotFoundError, NothingToClaimError


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a successful claim."""

    claimed_amount: Decimal
    new_balance: Decimal
    claimed_count: int


class ReferralEarningsManager:
    """Manages referral earnings settlement."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
        earning_repo: ReferralEarningRepository | None = None,
    ) -> None:
        """Initialize earnings manager."""
        self.session = session
        self.user_repo = user_repo or UserRepository(session)
        self.earning_repo = earning_repo or ReferralEarningRepository(session)

    @transactional
    async def claim(self, email: str) -> ClaimResult:
        """
        Claim all pending earnings of a user into their balance.

        Runs as one transaction: the user row is locked, pending rows are
        flipped to claimed by a single conditional UPDATE that returns the
        amounts it touched, and the balance grows by exactly that sum.
        Concurrent claims for the same user serialize on the lock and the
        later one finds nothing pending.

        Args:
            email: User email

        Returns:
            ClaimResult with claimed amount and new balance

        Raises:
            NotFoundError: Unknown email
            NothingToClaimError: No pending earnings (nothing is changed)
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        await self.user_repo.lock_by_id(user.id)

        claimed_amounts = await self.earning_repo.claim_pending(
            user.id, claimed_at=utc_now()
        )
        claimed_amount = sum(claimed_amounts, Decimal("0"))

        if claimed_amount <= 0:
            # Rolled back by @transactional, zero-amount rows stay pending
            raise NothingToClaimError()

        new_balance = await self.user_repo.increment_balance(
            user.id, claimed_amount
        )

        logger.info(
            "Referral earnings claimed",
            extra={
                "user_id": user.id,
                "claimed_amount": str(claimed_amount),
                "claimed_count": len(claimed_amounts),
                "new_balance": str(new_balance),
            },
        )

        return ClaimResult(
            claimed_amount=claimed_amount,
            new_balance=Decimal(new_balance),
            claimed_count=len(claimed_amounts),
        )
