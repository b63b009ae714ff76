"""
Balance handlers.

Balance summary, claim settlement and earnings history.
"""

from aiohttp import web

from api.keys import SESSION_REQUEST_KEY
from api.utils.request import read_json_body, require_email
from api.utils.responses import success_response
from app.services.referral.earnings_manager import ReferralEarningsManager
from app.services.referral.statistics import ReferralStatisticsManager
from app.services.user_service import UserService
from app.utils.datetime_utils import to_iso
from app.utils.formatters import format_money, money_to_number


async def get_balance(request: web.Request) -> web.Response:
    """GET /api/balance - pending, claimed and settled amounts."""
    email = require_email(request.query.get("email"))
    session = request[SESSION_REQUEST_KEY]

    user = await UserService(session).get_by_email_or_raise(email)
    summary = await ReferralStatisticsManager(session).get_balance(user)

    return success_response(
        {
            "pendingBalance": money_to_number(summary.pending),
            "claimedBalance": money_to_number(summary.claimed),
            "totalBalance": money_to_number(summary.balance),
            "breakdown": {
                f"level{level}": money_to_number(total)
                for level, total in sorted(summary.by_level.items())
            },
        }
    )


async def claim(request: web.Request) -> web.Response:
    """POST /api/claim - settle all pending earnings into balance."""
    body = await read_json_body(request)
    email = require_email(body.get("email"))

    result = await ReferralEarningsManager(request[SESSION_REQUEST_KEY]).claim(email)

    return success_response(
        {
            "claimedAmount": money_to_number(result.claimed_amount),
            "newBalance": money_to_number(result.new_balance),
            "message": f"Successfully claimed {format_money(result.claimed_amount)} USDT",
        }
    )


async def get_earnings_history(request: web.Request) -> web.Response:
    """GET /api/earnings-history - latest earnings, newest first."""
    email = require_email(request.query.get("email"))
    session = request[SESSION_REQUEST_KEY]

    user = await UserService(session).get_by_email_or_raise(email)
    history = await ReferralStatisticsManager(session).get_earnings_history(user)

    return success_response(
        [
            {
                "level": entry.level,
                "percentage": money_to_number(entry.percentage),
                "amount": money_to_number(entry.amount),
                "status": entry.status,
                "referredEmail": entry.referred_email,
                "createdAt": to_iso(entry.created_at),
                "claimedAt": to_iso(entry.claimed_at),
            }
            for entry in history
        ]
    )
