"""
ReferralEarning model.

Commission ledger entry: one row per ancestor per deposit.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    DECIMAL,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.enums import EarningStatus


class ReferralEarning(Base):
    """
    ReferralEarning entity.

    Tracks a tier-percentage share of a referred user's deposit:
    - Created pending by the accrual engine
    - Moved to claimed (with claimed_at) by claim settlement
    - Never deleted

    Attributes:
        id: Primary key
        referrer_id: User who earns the commission
        referred_user_id: User whose deposit triggered it
        deposit_id: Triggering deposit
        level: Distance in the ancestor chain (1-3)
        percentage: Tier rate applied, in percent
        amount: Computed commission
        status: pending or claimed
        created_at: Accrual timestamp
        claimed_at: Claim timestamp (claimed rows only)
    """

    __tablename__ = "referral_earnings"
    __table_args__ = (
        CheckConstraint(
            'level >= 1 AND level <= 3',
            name='check_referral_earning_level_range'
        ),
        CheckConstraint(
            'amount >= 0', name='check_referral_earning_amount_non_negative'
        ),
        UniqueConstraint(
            "deposit_id", "referrer_id",
            name="uq_referral_earning_deposit_referrer",
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Parties
    referrer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    referred_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Triggering deposit
    deposit_id: Mapped[int] = mapped_column(
        ForeignKey("deposits.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Tier
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    percentage: Mapped[Decimal] = mapped_column(
        DECIMAL(5, 2), nullable=False
    )

    # Amount
    amount: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 8), nullable=False
    )

    # pending -> claimed
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=EarningStatus.PENDING.value,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    claimed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"ReferralEarning(id={self.id}, "
            f"referrer_id={self.referrer_id}, "
            f"level={self.level}, "
            f"amount={self.amount}, "
            f"status={self.status})"
        )


# Composite indexes
Index(
    "idx_referral_earning_referrer_status",
    ReferralEarning.referrer_id,
    ReferralEarning.status,
)
Index(
    "idx_referral_earning_referrer_created",
    ReferralEarning.referrer_id,
    ReferralEarning.created_at,
)
