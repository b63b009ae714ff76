"""
Referral services package.

Contains modular services for referral processing:
- config: Configuration constants (REFERRAL_DEPTH, REFERRAL_RATES)
- code_generator: Deterministic referral code derivation
- chain_manager: Upward referral chain walk
- team_manager: Downward team expansion
- referral_reward_processor: Commission accrual on deposits
- earnings_manager: Claim settlement
- statistics: Balance and earnings history
"""

from app.services.referral.chain_manager import ChainLink, ReferralChainManager
from app.services.referral.code_generator import generate_referral_code
from app.services.referral.config import REFERRAL_DEPTH, REFERRAL_RATES
from app.services.referral.earnings_manager import (
    ClaimResult,
    ReferralEarningsManager,
)
from app.services.referral.referral_reward_processor import (
    ProcessResult,
    ReferralRewardProcessor,
    calculate_level_reward,
)
from app.services.referral.statistics import (
    BalanceSummary,
    EarningHistoryEntry,
    ReferralStatisticsManager,
)
from app.services.referral.team_manager import ReferralTeamManager, TeamLevels


__all__ = [
    # Configuration
    "REFERRAL_DEPTH",
    "REFERRAL_RATES",
    "generate_referral_code",
    # Managers
    "ReferralChainManager",
    "ReferralTeamManager",
    "ReferralEarningsManager",
    "ReferralStatisticsManager",
    # Reward processing
    "ReferralRewardProcessor",
    "ProcessResult",
    "calculate_level_reward",
    # Results
    "BalanceSummary",
    "ChainLink",
    "ClaimResult",
    "EarningHistoryEntry",
    "TeamLevels",
]
