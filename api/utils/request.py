"""
Request parsing helpers.

Turn raw query/body values into validated values or raise
ValidationError before any storage access.
"""

import json
from decimal import Decimal
from typing import Any

from aiohttp import web

from app.utils.exceptions import ValidationError
from app.validators.common import validate_amount, validate_email


async def read_json_body(request: web.Request) -> dict[str, Any]:
    """
    Read JSON object body.

    An empty body is treated as an empty object.

    Args:
        request: Incoming request

    Returns:
        Parsed body

    Raises:
        ValidationError: Malformed JSON, non-UTF-8 or non-object body
    """
    if not request.can_read_body:
        return {}

    raw = await request.read()
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError("Invalid JSON body") from e

    if not isinstance(body, dict):
        raise ValidationError("JSON body must be an object")

    return body


def require_email(value: Any) -> str:
    """
    Validate required email.

    Args:
        value: Raw email

    Returns:
        Normalized email

    Raises:
        ValidationError: Missing or malformed email
    """
    is_valid, email, error = validate_email(value)
    if not is_valid:
        raise ValidationError(error)
    return email


def require_amount(value: Any) -> Decimal:
    """
    Validate required positive amount.

    Args:
        value: Raw amount

    Returns:
        Amount as Decimal

    Raises:
        ValidationError: Missing, malformed or non-positive amount
    """
    is_valid, amount, error = validate_amount(value)
    if not is_valid:
        raise ValidationError(error)
    return amount
