"""
Deposit handler.
"""

from aiohttp import web

from api.keys import SESSION_REQUEST_KEY
from api.utils.request import read_json_body, require_amount, require_email
from api.utils.responses import success_response
from app.services.deposit_service import DepositService
from app.utils.exceptions import ValidationError
from app.utils.formatters import money_to_number


async def create_deposit(request: web.Request) -> web.Response:
    """POST /api/deposit - record deposit and accrue commissions."""
    body = await read_json_body(request)
    if not body.get("email") or body.get("amount") in (None, ""):
        raise ValidationError("Email and amount are required")

    email = require_email(body.get("email"))
    amount = require_amount(body.get("amount"))

    deposit, _ = await DepositService(request[SESSION_REQUEST_KEY]).record_deposit(
        email, amount
    )

    return success_response(
        {
            "depositId": deposit.id,
            "amount": money_to_number(amount),
            "message": "Deposit recorded and referral earnings calculated",
        }
    )
