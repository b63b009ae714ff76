"""
Database decorators for automatic transaction handling.

Provides a decorator for service methods that own a unit of work
on ``self.session``.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from loguru import logger


T = TypeVar("T")


def transactional(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator that commits ``self.session`` on success and rolls back on error.

    Usage:
        class ClaimService:
            @transactional
            async def claim(self, user_id: int) -> ...:
                # Several writes, committed together
                ...

    The decorator will:
    1. Execute the wrapped method
    2. If successful, call self.session.commit()
    3. If an exception occurs, call self.session.rollback()
    4. Re-raise the exception for proper error handling

    Args:
        func: Async method of an object with a ``session`` attribute

    Returns:
        Wrapped method with automatic commit/rollback
    """
    @wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        session = self.session
        try:
            result = await func(self, *args, **kwargs)
            await session.commit()
            logger.debug(f"Auto-commit performed in {func.__qualname__}")
            return result
        except Exception as e:
            try:
                await session.rollback()
                logger.info(
                    f"Rollback performed in {func.__qualname__} due to error: {type(e).__name__}"
                )
            except Exception as rollback_error:
                logger.error(
                    f"Failed to rollback in {func.__qualname__}: {rollback_error}",
                    exc_info=True
                )
            raise

    return wrapper
