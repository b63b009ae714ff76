"""
Integration tests for services.

Run against a real SQLite database to exercise the SQL behind
registration, accrual, claims and statistics.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.models.enums import EarningStatus
from app.repositories.deposit_repository import DepositRepository
from app.repositories.referral_earning_repository import (
    ReferralEarningRepository,
)
from app.repositories.user_repository import UserRepository
from app.services.deposit_service import DepositService
from app.services.referral.earnings_manager import ReferralEarningsManager
from app.services.referral.statistics import ReferralStatisticsManager
from app.services.referral.team_manager import ReferralTeamManager
from app.services.user_service import UserService
from app.utils.exceptions import (
    NothingToClaimError,
    NotFoundError,
    ReferralCodeExhaustedError,
)


@pytest.fixture
def chain(register):
    """
    Build alice <- bob <- carol <- dave.

    Returns:
        Callable returning (alice, bob, carol, dave)
    """
    async def _chain():
        alice = await register("alice@example.com")
        bob = await register("bob@example.com", referrer=alice)
        carol = await register("carol@example.com", referrer=bob)
        dave = await register("dave@example.com", referrer=carol)
        return alice, bob, carol, dave

    return _chain


class TestUserService:
    """Integration tests for UserService."""

    @pytest.mark.asyncio
    async def test_register_new_user(self, register):
        """New user gets normalized email and derived code."""
        alice = await register("  Alice@Example.com ")

        assert alice.id is not None
        assert alice.email == "alice@example.com"
        assert alice.referral_code == "857836"
        assert alice.referred_by_code is None
        assert alice.balance == Decimal("0")

    @pytest.mark.asyncio
    async def test_register_existing_user(self, session, register):
        """Registering twice returns the original user unchanged."""
        alice = await register("alice@example.com")
        bob = await register("bob@example.com")

        user, is_new = await UserService(session).register(
            "ALICE@example.com", bob.referral_code
        )

        assert is_new is False
        assert user.id == alice.id
        assert user.referred_by_code is None

    @pytest.mark.asyncio
    async def test_register_under_referrer(self, register):
        """Referrer's code is stored on the new user."""
        alice = await register("alice@example.com")
        bob = await register("bob@example.com", referrer=alice)

        assert bob.referred_by_code == alice.referral_code

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["999999", "abc", "12345"])
    async def test_register_bad_code_ignored(self, session, code):
        """Unknown or malformed referral codes are dropped."""
        user, is_new = await UserService(session).register("bob@example.com", code)

        assert is_new is True
        assert user.referred_by_code is None

    @pytest.mark.asyncio
    async def test_get_or_create(self, session):
        """get_or_create is idempotent."""
        service = UserService(session)

        first = await service.get_or_create("alice@example.com")
        second = await service.get_or_create("alice@example.com")

        assert first.id == second.id
        assert await UserRepository(session).count() == 1

    @pytest.mark.asyncio
    async def test_get_by_email_or_raise(self, session):
        """Unknown email raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await UserService(session).get_by_email_or_raise("ghost@example.com")

    @pytest.mark.asyncio
    async def test_referral_code_collision(self, session):
        """Taken code falls through to the next deterministic candidate."""
        await UserRepository(session).create(
            email="squatter@example.com", referral_code="211564"
        )

        user = await UserService(session).create_user("johndoe@example.com")

        assert user.referral_code == "787564"

    @pytest.mark.asyncio
    async def test_referral_code_exhausted(self, mock_session):
        """All candidates taken raises ReferralCodeExhaustedError."""
        repo = AsyncMock()
        repo.exists = AsyncMock(return_value=True)
        service = UserService(mock_session, user_repo=repo)

        with pytest.raises(ReferralCodeExhaustedError):
            await service.create_user("johndoe@example.com")

        repo.create.assert_not_called()


class TestDepositService:
    """Integration tests for deposit recording and accrual."""

    @pytest.mark.asyncio
    async def test_accrues_two_levels(self, session, chain):
        """Carol's deposit pays bob 16% and alice 3%."""
        alice, bob, carol, _ = await chain()

        deposit, result = await DepositService(session).record_deposit(
            "carol@example.com", Decimal("100")
        )

        assert deposit.user_id == carol.id
        assert result.rewards_count == 2
        assert result.total_rewards == Decimal("19")

        earnings = await ReferralEarningRepository(session).get_by_deposit(deposit.id)
        assert [(e.referrer_id, e.level) for e in earnings] == [
            (bob.id, 1), (alice.id, 2)
        ]
        assert [e.amount for e in earnings] == [Decimal("16"), Decimal("3")]
        assert all(e.status == EarningStatus.PENDING.value for e in earnings)
        assert all(e.referred_user_id == carol.id for e in earnings)

    @pytest.mark.asyncio
    async def test_accrues_three_levels(self, session, chain):
        """Dave's deposit reaches alice at level 3."""
        alice, bob, carol, _ = await chain()

        deposit, result = await DepositService(session).record_deposit(
            "dave@example.com", Decimal("100")
        )

        earnings = await ReferralEarningRepository(session).get_by_deposit(deposit.id)
        assert result.rewards_count == 3
        assert [(e.referrer_id, e.amount) for e in earnings] == [
            (carol.id, Decimal("16")),
            (bob.id, Decimal("3")),
            (alice.id, Decimal("2")),
        ]

    @pytest.mark.asyncio
    async def test_root_user_deposit(self, session, chain):
        """Deposit without referrers is recorded with no earnings."""
        alice, *_ = await chain()

        deposit, result = await DepositService(session).record_deposit(
            "alice@example.com", Decimal("50")
        )

        assert deposit.amount == Decimal("50")
        assert result.rewards_count == 0
        assert await DepositRepository(session).get_by_user(alice.id) == [deposit]

    @pytest.mark.asyncio
    async def test_unknown_user(self, session):
        """Unknown email records nothing."""
        with pytest.raises(NotFoundError):
            await DepositService(session).record_deposit(
                "ghost@example.com", Decimal("100")
            )

        assert await DepositRepository(session).count() == 0

    @pytest.mark.asyncio
    async def test_failed_accrual_discards_deposit(
        self, session, session_maker, chain
    ):
        """Deposit and its earnings are stored together or not at all."""
        await chain()
        service = DepositService(session)
        service.reward_processor.earning_repo.create = AsyncMock(
            side_effect=RuntimeError("ledger write failed")
        )

        with pytest.raises(RuntimeError):
            await service.record_deposit("carol@example.com", Decimal("100"))

        async with session_maker() as fresh:
            assert await DepositRepository(fresh).count() == 0
            assert await ReferralEarningRepository(fresh).count() == 0


class TestClaim:
    """Integration tests for claim settlement."""

    @pytest.mark.asyncio
    async def test_claim_settles_pending(self, session, session_maker, chain):
        """Pending earnings move to balance exactly once."""
        _, bob, _, _ = await chain()
        deposits = DepositService(session)
        await deposits.record_deposit("carol@example.com", Decimal("100"))
        await deposits.record_deposit("dave@example.com", Decimal("100"))

        result = await ReferralEarningsManager(session).claim("bob@example.com")

        assert result.claimed_amount == Decimal("19")
        assert result.new_balance == Decimal("19")
        assert result.claimed_count == 2

        async with session_maker() as fresh:
            repo = ReferralEarningRepository(fresh)
            assert await repo.sum_by_status(bob.id, EarningStatus.PENDING) == 0
            assert await repo.sum_by_status(bob.id, EarningStatus.CLAIMED) == 19
            claimed = await repo.get_by_referrer(bob.id, EarningStatus.CLAIMED)
            assert len(claimed) == 2
            assert all(e.claimed_at is not None for e in claimed)

    @pytest.mark.asyncio
    async def test_second_claim_has_nothing(self, session, session_maker, chain):
        """Repeated claim fails and leaves balance untouched."""
        await chain()
        await DepositService(session).record_deposit(
            "carol@example.com", Decimal("100")
        )
        manager = ReferralEarningsManager(session)
        await manager.claim("bob@example.com")

        with pytest.raises(NothingToClaimError):
            await manager.claim("bob@example.com")

        async with session_maker() as fresh:
            bob = await UserRepository(fresh).get_by_email("bob@example.com")
            assert bob.balance == Decimal("16")

    @pytest.mark.asyncio
    async def test_claim_accumulates(self, session, session_maker, chain):
        """Balance grows across claims."""
        await chain()
        deposits = DepositService(session)
        manager = ReferralEarningsManager(session)

        await deposits.record_deposit("carol@example.com", Decimal("100"))
        await manager.claim("bob@example.com")
        await deposits.record_deposit("carol@example.com", Decimal("50"))
        result = await manager.claim("bob@example.com")

        assert result.claimed_amount == Decimal("8")
        assert result.new_balance == Decimal("24")

    @pytest.mark.asyncio
    async def test_claim_without_earnings(self, session, register):
        """User with no earnings cannot claim."""
        await register("alice@example.com")

        with pytest.raises(NothingToClaimError):
            await ReferralEarningsManager(session).claim("alice@example.com")

    @pytest.mark.asyncio
    async def test_claim_unknown_user(self, session):
        """Unknown email raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await ReferralEarningsManager(session).claim("ghost@example.com")

    @pytest.mark.asyncio
    async def test_failed_credit_keeps_earnings_pending(
        self, session, session_maker, chain
    ):
        """Balance credit failure rolls the status flip back too."""
        _, bob, _, _ = await chain()
        await DepositService(session).record_deposit(
            "carol@example.com", Decimal("100")
        )
        manager = ReferralEarningsManager(session)
        manager.user_repo.increment_balance = AsyncMock(
            side_effect=RuntimeError("balance update failed")
        )

        with pytest.raises(RuntimeError):
            await manager.claim("bob@example.com")

        async with session_maker() as fresh:
            repo = ReferralEarningRepository(fresh)
            assert await repo.sum_by_status(bob.id, EarningStatus.PENDING) == 16
            assert await repo.sum_by_status(bob.id, EarningStatus.CLAIMED) == 0
            pending = await repo.get_by_referrer(bob.id, EarningStatus.PENDING)
            assert len(pending) == 1
            assert all(e.claimed_at is None for e in pending)
            reloaded = await UserRepository(fresh).get_by_email("bob@example.com")
            assert reloaded.balance == 0


class TestStatistics:
    """Integration tests for balance and history queries."""

    @pytest.mark.asyncio
    async def test_balance_breakdown(self, session, session_maker, chain):
        """Breakdown sums all statuses per level."""
        await chain()
        deposits = DepositService(session)
        await deposits.record_deposit("carol@example.com", Decimal("100"))
        await deposits.record_deposit("dave@example.com", Decimal("50"))
        await ReferralEarningsManager(session).claim("bob@example.com")
        await deposits.record_deposit("carol@example.com", Decimal("100"))

        async with session_maker() as fresh:
            bob = await UserRepository(fresh).get_by_email("bob@example.com")
            summary = await ReferralStatisticsManager(fresh).get_balance(bob)

        assert summary.pending == Decimal("16")
        assert summary.claimed == Decimal("17.5")
        assert summary.balance == Decimal("17.5")
        assert summary.by_level == {
            1: Decimal("32"), 2: Decimal("1.5"), 3: Decimal("0")
        }

    @pytest.mark.asyncio
    async def test_balance_empty(self, session, register):
        """User without earnings has zero everywhere."""
        alice = await register("alice@example.com")

        summary = await ReferralStatisticsManager(session).get_balance(alice)

        assert summary.pending == summary.claimed == summary.balance == 0
        assert summary.by_level == {1: 0, 2: 0, 3: 0}

    @pytest.mark.asyncio
    async def test_history_newest_first(self, session, chain):
        """History is newest first with masked counterparty."""
        _, bob, _, _ = await chain()
        deposits = DepositService(session)
        await deposits.record_deposit("carol@example.com", Decimal("100"))
        await deposits.record_deposit("dave@example.com", Decimal("200"))

        history = await ReferralStatisticsManager(session).get_earnings_history(bob)

        assert [(h.level, h.amount) for h in history] == [
            (2, Decimal("6")),
            (1, Decimal("16")),
        ]
        assert [h.referred_email for h in history] == [
            "da***@example.com",
            "ca***@example.com",
        ]
        assert history[0].percentage == Decimal("3")
        assert all(h.status == "pending" for h in history)
        assert all(h.claimed_at is None for h in history)

    @pytest.mark.asyncio
    async def test_history_limit(self, session, chain):
        """History is truncated to the limit."""
        _, bob, _, _ = await chain()
        deposits = DepositService(session)
        for _ in range(3):
            await deposits.record_deposit("carol@example.com", Decimal("10"))

        history = await ReferralStatisticsManager(session).get_earnings_history(
            bob, limit=2
        )

        assert len(history) == 2


class TestTeam:
    """Integration tests for team expansion."""

    @pytest.mark.asyncio
    async def test_team_levels(self, session, register):
        """Downline grouped by distance, beyond level 3 excluded."""
        alice = await register("alice@example.com")
        bob = await register("bob@example.com", referrer=alice)
        carol = await register("carol@example.com", referrer=alice)
        dave = await register("dave@example.com", referrer=bob)
        erin = await register("erin@example.com", referrer=carol)
        frank = await register("frank@example.com", referrer=dave)
        await register("grace@example.com", referrer=frank)

        team = await ReferralTeamManager(session).get_team_by_level(alice.id)

        assert [u.id for u in team.level1] == [bob.id, carol.id]
        assert [u.id for u in team.level2] == [dave.id, erin.id]
        assert [u.id for u in team.level3] == [frank.id]
        assert team.total == 5
