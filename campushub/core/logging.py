"""
Loguru configuration for CampusHub.

Every record carries a ``request_id`` and a ``user_id`` extra. The request
middleware sets the first with ``logger.contextualize`` and services bind the
second through ``for_user``; both read ``-`` when unset.
"""
import sys
from loguru import logger
from campushub.core.config import settings

CONTEXT_DEFAULTS = {"request_id": "-", "user_id": "-"}

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>req={extra[request_id]}</magenta> <yellow>user={extra[user_id]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | req={extra[request_id]} user={extra[user_id]} | "
    "{name}:{function}:{line} - {message}"
)


def configure_logging(environment: str) -> None:
    """Replace loguru's handlers with CampusHub's sinks for ``environment``."""
    handlers = [
        {
            "sink": sys.stdout,
            "format": CONSOLE_FORMAT,
            "level": "DEBUG" if environment == "development" else "INFO",
            "colorize": True,
        }
    ]
    if environment == "production":
        handlers.append(
            {
                "sink": "logs/campushub.log",
                "rotation": "500 MB",
                "retention": "10 days",
                "compression": "zip",
                "format": FILE_FORMAT,
                "level": "INFO",
            }
        )
    logger.configure(handlers=handlers, extra=CONTEXT_DEFAULTS)


def for_user(user_id):
    """Logger whose records name ``user_id``."""
    return logger.bind(user_id=user_id)


configure_logging(settings.ENVIRONMENT)

__all__ = ["logger", "for_user", "configure_logging"]
