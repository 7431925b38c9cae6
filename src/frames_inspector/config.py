"""
Configuration and Logging Setup

Provides centralized configuration and logging for the frames inspector.
Reads LOG_LEVEL and session options from environment variables.

Usage:
    from frames_inspector.config import configure_logging, get_logger

    # Configure at application startup
    configure_logging()

    # Get logger in any module
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_MESSAGES = 5000
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_TRUTHY = ("true", "1", "yes")


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)

    Supported values:
        DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        # Warn about invalid level and use default
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        print(
            f"Warning: Invalid {name} '{value}'. Using {default}.",
            file=sys.stderr,
        )
        return default


@dataclass
class InspectorConfig:
    """
    Session options loaded from environment variables.

    Attributes:
        show_registration_messages: Include registration messages in listings
        max_messages: Cap on retained messages (0 disables the cap)
        preserve_log: Keep messages when the top frame navigates
    """

    show_registration_messages: bool = False
    max_messages: int = DEFAULT_MAX_MESSAGES
    preserve_log: bool = False

    @classmethod
    def from_env(cls) -> "InspectorConfig":
        """Load configuration from environment variables."""
        return cls(
            show_registration_messages=_env_flag("SHOW_REGISTRATION_MESSAGES"),
            max_messages=max(0, _env_int("MAX_MESSAGES", DEFAULT_MAX_MESSAGES)),
            preserve_log=_env_flag("PRESERVE_LOG"),
        )


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """
    Configure logging for the frames inspector.

    Should be called once at application startup, before other modules
    import their loggers.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)

    Environment Variables:
        LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL
    """
    if level is None:
        level = get_log_level()

    log_format = LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE

    # Configure root logger
    logging.basicConfig(
        level=level,
        format=log_format,
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    inspector_logger = logging.getLogger("frames_inspector")
    inspector_logger.setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("markdown_it").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
