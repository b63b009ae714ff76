"""
Health check handlers.

Liveness without touching storage, readiness with a database ping.
"""

from aiohttp import web
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from api.keys import SESSION_REQUEST_KEY
from app.utils.datetime_utils import to_iso, utc_now


async def health_handler(request: web.Request) -> web.Response:
    """
    Health check endpoint.

    Returns:
        JSON response with status and current timestamp
    """
    return web.json_response(
        {
            "status": "ok",
            "timestamp": to_iso(utc_now()),
        }
    )


async def readiness_handler(request: web.Request) -> web.Response:
    """
    Readiness check endpoint.

    Returns:
        JSON response indicating if the database is reachable
    """
    try:
        await request[SESSION_REQUEST_KEY].execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return web.json_response(
            {
                "status": "not_ready",
                "ready": False,
            },
            status=503,
        )

    return web.json_response(
        {
            "status": "ready",
            "ready": True,
        }
    )
