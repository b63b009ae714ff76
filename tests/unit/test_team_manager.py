"""Unit tests for downline expansion."""

import pytest

from app.services.referral.team_manager import ReferralTeamManager, TeamLevels


@pytest.fixture
def team_repo(mock_user_repo, make_user):
    """
    Repository over a small tree.

        1 -> 2, 3
        2 -> 4
        4 -> 5
        5 -> 6   (level 4 from user 1)
    """
    users = [
        make_user(1, "100000"),
        make_user(2, "200000", "100000"),
        make_user(3, "300000", "100000"),
        make_user(4, "400000", "200000"),
        make_user(5, "500000", "400000"),
        make_user(6, "600000", "500000"),
    ]
    by_id = {u.id: u for u in users}

    async def _get_by_id(user_id):
        return by_id.get(user_id)

    async def _get_direct_referrals(code):
        return [u for u in users if u.referred_by_code == code]

    mock_user_repo.get_by_id.side_effect = _get_by_id
    mock_user_repo.get_direct_referrals.side_effect = _get_direct_referrals
    return mock_user_repo


class TestReferralTeamManager:
    """Tests for get_team_by_level."""

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_session, mock_user_repo):
        """Unknown user has an empty team."""
        manager = ReferralTeamManager(mock_session, user_repo=mock_user_repo)

        team = await manager.get_team_by_level(42)

        assert team.total == 0

    @pytest.mark.asyncio
    async def test_levels(self, mock_session, team_repo):
        """Members are grouped by distance, level 4 excluded."""
        manager = ReferralTeamManager(mock_session, user_repo=team_repo)

        team = await manager.get_team_by_level(1)

        assert [u.id for u in team.level1] == [2, 3]
        assert [u.id for u in team.level2] == [4]
        assert [u.id for u in team.level3] == [5]
        assert team.total == 4

    @pytest.mark.asyncio
    async def test_leaf_user(self, mock_session, team_repo):
        """User without referrals stops after one lookup."""
        manager = ReferralTeamManager(mock_session, user_repo=team_repo)

        team = await manager.get_team_by_level(3)

        assert team.total == 0
        assert team_repo.get_direct_referrals.await_count == 1

    @pytest.mark.asyncio
    async def test_mid_tree_user(self, mock_session, team_repo):
        """Team of a mid-tree user is relative to that user."""
        manager = ReferralTeamManager(mock_session, user_repo=team_repo)

        team = await manager.get_team_by_level(2)

        assert [u.id for u in team.level1] == [4]
        assert [u.id for u in team.level2] == [5]
        assert [u.id for u in team.level3] == [6]


def test_team_levels_by_level(make_user):
    """by_level exposes the same lists keyed by number."""
    team = TeamLevels(level1=[make_user(1, "100000")])

    levels = team.by_level()

    assert set(levels) == {1, 2, 3}
    assert levels[1] is team.level1
    assert team.total == 1
