"""Logging configuration for the service."""

import logging
import sys

from bookflow.core.config import get_settings


def setup_logging() -> None:
    """Configure process-wide logging.

    DEBUG when settings.debug is set, INFO otherwise; output to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
