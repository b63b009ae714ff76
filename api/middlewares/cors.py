"""
CORS middleware.

Answers preflight requests and adds Access-Control headers for the
configured origins. Requests from other origins get no CORS headers.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


def create_cors_middleware(allowed_origins: list[str]):
    """
    Build CORS middleware for a fixed origin list.

    Args:
        allowed_origins: Exact origins allowed to call the API

    Returns:
        aiohttp middleware
    """
    origins = frozenset(allowed_origins)

    @web.middleware
    async def cors_middleware(
        request: web.Request,
        handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
    ) -> web.StreamResponse:
        origin = request.headers.get("Origin")
        is_preflight = (
            request.method == "OPTIONS"
            and "Access-Control-Request-Method" in request.headers
        )

        if is_preflight:
            response: web.StreamResponse = web.Response(status=204)
        else:
            response = await handler(request)

        if origin and origin in origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            if is_preflight:
                response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
                response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS

        return response

    return cors_middleware
