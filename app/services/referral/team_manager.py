"""
Referral team management module.

Expands a user's downline level by level.
"""

from dataclasses import dataclass, field

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.referral.config import REFERRAL_DEPTH


@dataclass
class TeamLevels:
    """Descendants of a user grouped by distance."""

    level1: list[User] = field(default_factory=list)
    level2: list[User] = field(default_factory=list)
    level3: list[User] = field(default_factory=list)

    def by_level(self) -> dict[int, list[User]]:
        """Members keyed by level number."""
        return {1: self.level1, 2: self.level2, 3: self.level3}

    @property
    def total(self) -> int:
        """Total number of members across all levels."""
        return len(self.level1) + len(self.level2) + len(self.level3)


class ReferralTeamManager:
    """Manages downline (team) queries."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
    ) -> None:
        """Initialize team manager."""
        self.session = session
        self.user_repo = user_repo or UserRepository(session)

    async def get_team_by_level(self, user_id: int) -> TeamLevels:
        """
        Get user's team grouped by level.

        Breadth-first descent over direct-referral lookups. Fan-out per
        level is not capped and there is no pagination: cost is one
        lookup per member of levels 0..2, so callers pay in proportion
        to the size of the team.

        Args:
            user_id: User ID

        Returns:
            TeamLevels (empty if user does not exist)
        """
        team = TeamLevels()

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return team

        levels = team.by_level()
        frontier = [user]
        for level in range(1, REFERRAL_DEPTH + 1):
            next_frontier: list[User] = []
            for member in frontier:
                next_frontier.extend(
                    await self.user_repo.get_direct_referrals(member.referral_code)
                )
            levels[level].extend(next_frontier)
            frontier = next_frontier
            if not frontier:
                break

        logger.debug(
            "Team expanded",
            extra={
                "user_id": user_id,
                "level1": len(team.level1),
                "level2": len(team.level2),
                "level3": len(team.level3),
            },
        )

        return team
