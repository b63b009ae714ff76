"""
Database middleware.

Opens one session per request, commits after a successful handler and
rolls back on any exception.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web
from loguru import logger

from api.keys import SESSION_MAKER_KEY, SESSION_REQUEST_KEY


@web.middleware
async def database_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """
    Provide a database session to the handler.

    Services that own a unit of work commit it themselves; the commit
    here covers handlers that only flush (e.g. get-or-create).

    Args:
        request: Incoming request
        handler: Next handler

    Returns:
        Handler response
    """
    session_maker = request.app[SESSION_MAKER_KEY]

    async with session_maker() as session:
        request[SESSION_REQUEST_KEY] = session
        try:
            response = await handler(request)
            await session.commit()
            return response
        except Exception as e:
            await session.rollback()
            logger.debug(
                f"Request session rolled back: {type(e).__name__}",
                extra={"path": request.path},
            )
            raise
