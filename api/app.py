"""
Application factory.

Builds the aiohttp application around an injected session maker.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.handlers import register_routes
from api.keys import SESSION_MAKER_KEY, SETTINGS_KEY
from api.middlewares import (
    create_cors_middleware,
    database_middleware,
    error_middleware,
)
from app.config.settings import Settings


def create_app(
    session_maker: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> web.Application:
    """
    Create the API application.

    Args:
        session_maker: Factory for per-request sessions
        settings: Application settings

    Returns:
        Configured aiohttp application
    """
    app = web.Application(
        middlewares=[
            create_cors_middleware(settings.get_cors_origins()),
            error_middleware,
            database_middleware,
        ]
    )
    app[SESSION_MAKER_KEY] = session_maker
    app[SETTINGS_KEY] = settings

    register_routes(app)

    return app
