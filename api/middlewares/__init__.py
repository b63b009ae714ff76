"""
API middlewares.

Order matters: CORS is outermost so error responses also carry CORS
headers, then error mapping, then the per-request database session.
"""

from api.middlewares.cors import create_cors_middleware
from api.middlewares.database import database_middleware
from api.middlewares.errors import error_middleware

__all__ = [
    "create_cors_middleware",
    "database_middleware",
    "error_middleware",
]
