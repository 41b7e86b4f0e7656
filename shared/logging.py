"""Centralized logging configuration for the visual novel application."""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Provider SDKs log every request at INFO
NOISY_LOGGERS = (
    "litellm",
    "LiteLLM",
    "openai",
    "httpx",
    "httpcore",
    "urllib3",
    "asyncio",
)

_HANDLER_NAME = "visual-novel-console"


def setup_logger(
    level: int = logging.WARNING, stream: Optional[TextIO] = None
) -> None:
    """
    Configure the root logger for the application and
    suppress noisy third-party loggers.

    Logs go to stderr by default. Calling this again replaces the handler
    installed by the previous call.

    Args:
        level: The logging level to set for the root logger.
        stream: Where log records are written; defaults to stderr.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Third-party chatter only shows up when debugging
    noisy_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)
