"""
ReferralEarning repository.

Data access layer for the commission ledger.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import EarningStatus
from app.models.referral_earning import ReferralEarning
from app.models.user import User
from app.repositories.base import BaseRepository


class ReferralEarningRepository(BaseRepository[ReferralEarning]):
    """ReferralEarning repository with ledger queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral earning repository."""
        super().__init__(ReferralEarning, session)

    async def get_by_deposit(
        self, deposit_id: int
    ) -> list[ReferralEarning]:
        """
        Get earnings triggered by a deposit, ordered by level.

        Args:
            deposit_id: Deposit ID

        Returns:
            List of earnings
        """
        stmt = (
            select(ReferralEarning)
            .where(ReferralEarning.deposit_id == deposit_id)
            .order_by(ReferralEarning.level)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_referrer(
        self, referrer_id: int, status: EarningStatus | None = None
    ) -> list[ReferralEarning]:
        """
        Get earnings owed to a referrer.

        Args:
            referrer_id: Referrer user ID
            status: Optional status filter

        Returns:
            List of earnings
        """
        filters: dict[str, int | str] = {"referrer_id": referrer_id}
        if status:
            filters["status"] = status.value

        return await self.find_by(**filters)

    async def sum_by_status(
        self, referrer_id: int, status: EarningStatus
    ) -> Decimal:
        """
        Sum earnings of one status for a referrer.

        Args:
            referrer_id: Referrer user ID
            status: Earning status

        Returns:
            Sum (zero when there are no rows)
        """
        stmt = select(
            func.coalesce(func.sum(ReferralEarning.amount), Decimal("0"))
        ).where(
            ReferralEarning.referrer_id == referrer_id,
            ReferralEarning.status == status.value,
        )
        result = await self.session.execute(stmt)
        return Decimal(result.scalar() or 0)

    async def sum_by_level(
        self, referrer_id: int
    ) -> dict[int, Decimal]:
        """
        Sum all earnings of a referrer grouped by level in a single query.

        Args:
            referrer_id: Referrer user ID

        Returns:
            Dict mapping level to total {1: ..., 2: ..., 3: ...}
        """
        stmt = (
            select(
                ReferralEarning.level,
                func.coalesce(
                    func.sum(ReferralEarning.amount),
                    Decimal("0")
                ).label("total")
            )
            .where(ReferralEarning.referrer_id == referrer_id)
            .group_by(ReferralEarning.level)
        )

        result = await self.session.execute(stmt)
        rows = result.all()

        # Build result dict with all levels (default to 0)
        totals = {1: Decimal("0"), 2: Decimal("0"), 3: Decimal("0")}
        for row in rows:
            totals[row.level] = Decimal(row.total)

        return totals

    async def claim_pending(
        self, referrer_id: int, claimed_at: datetime
    ) -> list[Decimal]:
        """
        Move every pending earning of a referrer to claimed.

        Single conditional UPDATE ... RETURNING, so rows claimed by a
        concurrent transaction are never returned twice.

        Args:
            referrer_id: Referrer user ID
            claimed_at: Claim timestamp

        Returns:
            Amounts of the rows that were claimed
        """
        stmt = (
            update(ReferralEarning)
            .where(
                ReferralEarning.referrer_id == referrer_id,
                ReferralEarning.status == EarningStatus.PENDING.value,
            )
            .values(
                status=EarningStatus.CLAIMED.value,
                claimed_at=claimed_at,
            )
            .returning(ReferralEarning.amount)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return [Decimal(amount) for amount in result.scalars().all()]

    async def get_history(
        self, referrer_id: int, limit: int
    ) -> list[tuple[ReferralEarning, str]]:
        """
        Get newest earnings of a referrer with the referred user's email.

        Args:
            referrer_id: Referrer user ID
            limit: Max number of entries

        Returns:
            List of (earning, referred_email) tuples, newest first
        """
        stmt = (
            select(ReferralEarning, User.email)
            .join(User, ReferralEarning.referred_user_id == User.id)
            .where(ReferralEarning.referrer_id == referrer_id)
            .order_by(
                ReferralEarning.created_at.desc(),
                ReferralEarning.id.desc(),
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
