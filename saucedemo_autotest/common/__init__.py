"""
================================================================================
Common Utilities
================================================================================

Shared configuration and console logging setup for the UI harness.

Exports:
    - ConfigLoader: YAML + environment configuration
    - HarnessSettings / get_settings: typed startup settings
    - init_logger: configure the loguru console sink once per process

Usage:
    from saucedemo_autotest.common import get_settings, init_logger

    settings = get_settings()
    init_logger(level=settings.log_level)

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

from .config_loader import (
    ENVIRONMENTS,
    PAGE_FILES,
    ConfigLoader,
    ConfigurationError,
    HarnessSettings,
    build_urls,
    get_environment_url,
    get_settings,
    reset_settings,
)


# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru console sink that mirrors structured log entries.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="test-results/logs/run.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = ConfigLoader()

    logger.remove()

    level = (level or str(config.get("logging.level", "INFO"))).upper()
    if level == "WARN":
        level = "WARNING"
    format_string = format_string or config.get("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or config.get("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            colorize=False,
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


__all__ = [
    "ENVIRONMENTS",
    "PAGE_FILES",
    "ConfigLoader",
    "ConfigurationError",
    "HarnessSettings",
    "get_environment_url",
    "build_urls",
    "get_settings",
    "reset_settings",
    "init_logger",
]
