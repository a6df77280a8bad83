"""Logging setup for the package."""

import logging
import sys
from pathlib import Path
from typing import Optional

from asg_deployer.config.schemas import LoggingConfig

ROOT_LOGGER_NAME = "asg_deployer"


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the package root logger.

    Handlers installed by an earlier call are replaced, so calling this
    again with a different configuration is safe.

    Args:
        config: Logging configuration, defaults when omitted

    Returns:
        The configured package root logger
    """
    config = config or LoggingConfig()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if config.file_path:
        log_file = Path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
