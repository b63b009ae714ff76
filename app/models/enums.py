"""
Model enumerations.

String enums stored as plain VARCHAR values.
"""

from enum import StrEnum


class EarningStatus(StrEnum):
    """Referral earning lifecycle: pending -> claimed."""

    PENDING = "pending"
    CLAIMED = "claimed"


class DepositStatus(StrEnum):
    """Deposit status. Deposits are recorded already completed."""

    COMPLETED = "completed"
