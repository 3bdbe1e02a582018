"""Logging configuration for the application."""

import logging
import sys

from sso.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for route modules and libraries.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("sso").setLevel(level)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
