"""
Exception handling utilities.

Defines the domain exception taxonomy and the categories the HTTP
layer uses to decide how each failure is reported.
"""

from sqlalchemy.exc import SQLAlchemyError


class ReferralServiceError(Exception):
    """Base class for errors reported back to the caller."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ReferralServiceError):
    """Missing or malformed input. Raised before storage is touched."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(ReferralServiceError):
    """Unknown email or referral code."""

    status_code = 404
    default_message = "Not found"


class BusinessRuleError(ReferralServiceError):
    """Request is well-formed but violates a ledger rule."""

    status_code = 400
    default_message = "Operation not allowed"


class NothingToClaimError(BusinessRuleError):
    """Claim attempted with no pending earnings."""

    default_message = "No pending rewards to claim"


class ReferralCodeExhaustedError(ReferralServiceError):
    """No free referral code could be derived for an email."""

    default_message = "Could not allocate referral code"


# Exception categories based on handling strategy

# Reported to caller as-is - expected domain failures
REPORT_TO_CALLER = (
    ValidationError,
    NotFoundError,
    BusinessRuleError,
)

# Must log with traceback - storage and unexpected failures
MUST_LOG = (
    SQLAlchemyError,
    ReferralCodeExhaustedError,
)


def is_caller_error(exc: Exception) -> bool:
    """
    Check if exception is an expected domain failure.

    Args:
        exc: Exception to check

    Returns:
        True if the message can be shown to the caller
    """
    return isinstance(exc, REPORT_TO_CALLER)


def must_log(exc: Exception) -> bool:
    """
    Check if exception must be logged.

    Args:
        exc: Exception to check

    Returns:
        True if exception must be logged
    """
    return isinstance(exc, MUST_LOG) or not is_caller_error(exc)
