"""
Referral identity handlers.

Get-or-create identity, registration, inviter lookup and team breakdown.
"""

from aiohttp import web

from api.keys import SESSION_REQUEST_KEY, SETTINGS_KEY
from api.utils.request import read_json_body, require_email
from api.utils.responses import success_response
from app.models.user import User
from app.services.referral.config import REFERRAL_RATES
from app.services.referral.team_manager import ReferralTeamManager
from app.services.user_service import UserService
from app.utils.datetime_utils import to_iso
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.formatters import mask_email, money_to_number
from app.validators.common import validate_referral_code


def _format_member(member: User) -> dict:
    return {
        "email": mask_email(member.email),
        "joinedAt": to_iso(member.created_at),
    }


async def get_referral(request: web.Request) -> web.Response:
    """GET /api/referral - referral code and link, creating the user if needed."""
    email = require_email(request.query.get("email"))

    user = await UserService(request[SESSION_REQUEST_KEY]).get_or_create(email)
    settings = request.app[SETTINGS_KEY]

    return success_response(
        {
            "referralCode": user.referral_code,
            "referralLink": settings.build_referral_link(user.referral_code),
            "email": user.email,
        }
    )


async def register(request: web.Request) -> web.Response:
    """POST /api/register - register under an optional referral code."""
    body = await read_json_body(request)
    email = require_email(body.get("email"))
    referral_code = body.get("referralCode")
    if referral_code is not None:
        referral_code = str(referral_code)

    user, is_new = await UserService(request[SESSION_REQUEST_KEY]).register(
        email, referral_code
    )
    settings = request.app[SETTINGS_KEY]

    return success_response(
        {
            "id": user.id,
            "email": user.email,
            "referralCode": user.referral_code,
            "referralLink": settings.build_referral_link(user.referral_code),
            "isNew": is_new,
        }
    )


async def get_inviter(request: web.Request) -> web.Response:
    """GET /api/inviter - masked identity behind a referral code."""
    raw_code = request.query.get("referralCode")
    if raw_code is None or not raw_code.strip():
        raise ValidationError("Referral code is required")

    is_valid, code, _ = validate_referral_code(raw_code)
    inviter = None
    if is_valid:
        inviter = await UserService(
            request[SESSION_REQUEST_KEY]
        ).find_by_referral_code(code)

    if inviter is None:
        raise NotFoundError("Inviter not found")

    return success_response(
        {
            "maskedEmail": mask_email(inviter.email),
            "referralCode": inviter.referral_code,
            "joinedAt": to_iso(inviter.created_at),
        }
    )


async def get_team(request: web.Request) -> web.Response:
    """GET /api/team - downline counts and masked members per level."""
    email = require_email(request.query.get("email"))
    session = request[SESSION_REQUEST_KEY]

    user = await UserService(session).get_by_email_or_raise(email)
    team = await ReferralTeamManager(session).get_team_by_level(user.id)

    data: dict = {}
    for level, members in team.by_level().items():
        data[f"level{level}"] = {
            "count": len(members),
            "percentage": money_to_number(REFERRAL_RATES[level]),
            "members": [_format_member(member) for member in members],
        }
    data["totalTeam"] = team.total

    return success_response(data)
