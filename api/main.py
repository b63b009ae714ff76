"""
API main entry point.

Initializes logging and the database engine, then serves the API.
"""

from aiohttp import web
from loguru import logger

from api.app import create_app
from api.initialization.logging import setup_logging
from app.config.database import create_engine, create_session_maker
from app.config.settings import settings


def build_app() -> web.Application:
    """Create the application with engine lifecycle hooks attached."""
    engine = create_engine()
    app = create_app(create_session_maker(engine), settings)

    async def dispose_engine(_: web.Application) -> None:
        logger.info("Disposing database engine...")
        await engine.dispose()

    app.on_cleanup.append(dispose_engine)
    return app


def run() -> None:
    """Run the API server."""
    setup_logging(settings)

    app = build_app()

    logger.info(f"Server running on {settings.host}:{settings.port}")
    web.run_app(
        app,
        host=settings.host,
        port=settings.port,
        print=None,
    )


if __name__ == "__main__":
    run()
