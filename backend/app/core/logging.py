"""
Logging setup shared by the API process.
"""
import logging

from app.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings.log_level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
