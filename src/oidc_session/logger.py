"""
Logging setup for oidc_session, built on loguru.

Modules grab a bound logger with ``get_logger(__name__)``; the host (or
``OidcSession.install`` when ``PluginSettings.log_level`` is set) calls
``setup_logging`` once to pick the level and sink.
"""

import sys
from typing import Any

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", sink: Any = None, fmt: str = DEFAULT_FORMAT):
    """
    Replace loguru's handlers with a single sink at the given level.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        sink: Any loguru sink (stream, path, callable). Defaults to stderr.
        fmt: Format string for the sink.
    """
    logger.remove()
    logger.configure(extra={"name": "oidc_session"})
    logger.add(sink or sys.stderr, level=level.upper(), format=fmt)


def get_logger(name: str):
    """Return the shared loguru logger bound to a module name."""
    return logger.bind(name=name)
