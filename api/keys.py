"""
Application keys.

Typed keys for objects stored on the aiohttp application.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config.settings import Settings

SESSION_MAKER_KEY = web.AppKey("session_maker", async_sessionmaker[AsyncSession])
SETTINGS_KEY = web.AppKey("settings", Settings)

# Request-scoped session set by the database middleware
SESSION_REQUEST_KEY = "session"
