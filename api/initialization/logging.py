"""
API Initialization - Logging Module.

Configures loguru logger for the HTTP service.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from app.config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stderr sink and rotated file sink."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        settings.log_file,
        rotation="1 day",
        retention="7 days",
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info(
        f"Starting referral ledger API ({settings.environment})..."
    )
