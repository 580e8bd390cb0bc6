"""
Logging setup for echoes.

Modules take a namespaced logger from get_logger() at import time. Output is
only switched on by configure_logging(), which the CLI and the web app call
on startup; importing echoes as a library never touches the root logger.
"""

import logging
import os

PACKAGE_LOGGER = "echoes"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for an echoes module."""
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a stream handler to the echoes package logger.

    Safe to call more than once: the handler is added once and later calls
    only update the level.

    Args:
        level: Level name; defaults to ECHOES_LOG_LEVEL, then INFO

    Returns:
        The package logger
    """
    level_name = (level or os.getenv("ECHOES_LOG_LEVEL", "INFO")).upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_echoes_handler", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._echoes_handler = True
        package_logger.addHandler(handler)

    return package_logger
