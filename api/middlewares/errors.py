"""
Error middleware.

Maps exceptions to {success: false, error} envelopes.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web
from loguru import logger

from api.utils.responses import error_response
from app.utils.exceptions import ReferralServiceError, is_caller_error, must_log

GENERIC_ERROR_MESSAGE = "Server error"


@web.middleware
async def error_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """
    Convert exceptions into JSON error responses.

    Domain errors keep their message and status. Storage and unexpected
    errors are logged with traceback and reported generically.

    Args:
        request: Incoming request
        handler: Next handler

    Returns:
        Handler response or error envelope
    """
    try:
        return await handler(request)
    except web.HTTPException as e:
        # Routing errors (unknown path, wrong method)
        if e.status < 400:
            raise
        return error_response(e.reason, e.status)
    except ReferralServiceError as e:
        if is_caller_error(e):
            logger.info(
                f"Request rejected: {e.message}",
                extra={
                    "path": request.path,
                    "error_type": type(e).__name__,
                    "status": e.status_code,
                },
            )
            return error_response(e.message, e.status_code)
        if must_log(e):
            logger.exception(
                f"Error handling {request.method} {request.path}: {e}",
                extra={"error_type": type(e).__name__},
            )
        return error_response(GENERIC_ERROR_MESSAGE, e.status_code)
    except Exception as e:
        logger.exception(
            f"Unexpected error handling {request.method} {request.path}: {e}",
            extra={"error_type": type(e).__name__},
        )
        return error_response(GENERIC_ERROR_MESSAGE, 500)
