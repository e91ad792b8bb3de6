"""Logging configuration helper."""
import logging
from logging import Logger
from snek.config.settings import Settings

def configure_logging(settings: Settings) -> None:
    """Configure root logging for scripts using the library."""
    level = getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

def get_logger(name: str) -> Logger:
    """Get a named logger."""
    return logging.getLogger(name)
