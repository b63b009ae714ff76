"""
Deposit repository.

Data access layer for Deposit model.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.deposit import Deposit
from app.models.enums import DepositStatus
from app.repositories.base import BaseRepository


class DepositRepository(BaseRepository[Deposit]):
    """Deposit repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize deposit repository."""
        super().__init__(Deposit, session)

    async def create_completed(
        self, user_id: int, amount: Decimal
    ) -> Deposit:
        """
        Record a completed deposit.

        Args:
            user_id: Owner user ID
            amount: Positive deposit amount

        Returns:
            Created deposit
        """
        return await self.create(
            user_id=user_id,
            amount=amount,
            status=DepositStatus.COMPLETED.value,
        )

    async def get_by_user(self, user_id: int) -> list[Deposit]:
        """
        Get deposits by user.

        Args:
            user_id: User ID

        Returns:
            List of deposits, oldest first
        """
        return await self.find_by(user_id=user_id)
