"""
Referral statistics module.

Read-only aggregations over the commission ledger.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import EarningStatus
from app.models.user import User
from app.repositories.referral_earning_repository import (
    ReferralEarningRepository,
)
from app.services.referral.config import EARNINGS_HISTORY_LIMIT
from app.utils.formatters import mask_email


@dataclass
class BalanceSummary:
    """Pending/claimed commission totals and settled balance."""

    pending: Decimal
    claimed: Decimal
    balance: Decimal
    by_level: dict[int, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class EarningHistoryEntry:
    """Earning as shown to the referrer."""

    level: int
    percentage: Decimal
    amount: Decimal
    status: str
    referred_email: str
    created_at: datetime
    claimed_at: datetime | None


class ReferralStatisticsManager:
    """Provides balance and earnings history queries."""

    def __init__(
        self,
        session: AsyncSession,
        earning_repo: ReferralEarningRepository | None = None,
    ) -> None:
        """Initialize statistics manager."""
        self.session = session
        self.earning_repo = earning_repo or ReferralEarningRepository(session)

    async def get_balance(self, user: User) -> BalanceSummary:
        """
        Get user's commission balance summary.

        Args:
            user: Referrer

        Returns:
            BalanceSummary with per-level breakdown over all statuses
        """
        pending = await self.earning_repo.sum_by_status(
            user.id, EarningStatus.PENDING
        )
        claimed = await self.earning_repo.sum_by_status(
            user.id, EarningStatus.CLAIMED
        )
        by_level = await self.earning_repo.sum_by_level(user.id)

        return BalanceSummary(
            pending=pending,
            claimed=claimed,
            balance=Decimal(user.balance or 0),
            by_level=by_level,
        )

    async def get_earnings_history(
        self, user: User, limit: int = EARNINGS_HISTORY_LIMIT
    ) -> list[EarningHistoryEntry]:
        """
        Get user's most recent earnings.

        Args:
            user: Referrer
            limit: Max entries

        Returns:
            Entries newest first, counterparty email masked
        """
        rows = await self.earning_repo.get_history(user.id, limit=limit)

        return [
            EarningHistoryEntry(
                level=earning.level,
                percentage=Decimal(earning.percentage),
                amount=Decimal(earning.amount),
                status=earning.status,
                referred_email=mask_email(referred_email),
                created_at=earning.created_at,
                claimed_at=earning.claimed_at,
            )
            for earning, referred_email in rows
        ]
