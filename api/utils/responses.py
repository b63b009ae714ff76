"""
Response envelope helpers.

Every API payload is shaped {success, data?, error?}.
"""

from typing import Any

from aiohttp import web


def success_response(data: Any, status: int = 200) -> web.Response:
    """Wrap data in a success envelope."""
    return web.json_response({"success": True, "data": data}, status=status)


def error_response(message: str, status: int) -> web.Response:
    """Wrap error message in a failure envelope."""
    return web.json_response({"success": False, "error": message}, status=status)
