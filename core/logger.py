#!/usr/bin/env python3
"""
Service logger setup

Configures the stdlib logging tree for a microservice process: a console
handler (LOG_CONSOLE) plus an optional file handler, both using the format and level from
LoggingConfig.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("order_service")
"""

import logging
import os
from typing import Optional

from .config.logging_config import LoggingConfig

_HANDLER_MARKER = "_order_service_handler"


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure root logging for a service and return its named logger.

    Safe to call more than once; handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        service_name: Logger name for the service
        config: Logging configuration (defaults to LoggingConfig.from_env())

    Returns:
        The service logger
    """
    config = config or LoggingConfig.from_env()
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    if config.enable_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        setattr(console, _HANDLER_MARKER, True)
        root.addHandler(console)

    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARKER, True)
        root.addHandler(file_handler)

    root.setLevel(level)

    nats_level = getattr(logging, config.nats_log_level.upper(), logging.INFO)
    logging.getLogger("nats").setLevel(max(level, nats_level))

    return logging.getLogger(service_name)
