"""Centralized loguru configuration."""

import sys

from loguru import logger

from roombook.app.core.config import settings


LOG_FORMAT = " | ".join(
    (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>",
        "<level>{level:<8}</level>",
        "<cyan>{name}:{function}:{line}</cyan>",
        "{message}",
    )
)


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default handler with a single stderr sink."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=(level or settings.LOG_LEVEL).upper())
