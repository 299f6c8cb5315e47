#!/usr/bin/env python3
"""Logging configuration for the order service process

LOG_LEVEL defaults to DEBUG in development and INFO elsewhere. nats-py
output is kept at NATS_LOG_LEVEL or above so reconnect chatter does not
drown order events.
"""
import os
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingConfig:
    """Handler, level and format settings for setup_service_logger()"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: str = ""  # empty: console only
    enable_console: bool = True
    nats_log_level: str = "INFO"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        default_level = "DEBUG" if env in ("development", "dev") else "INFO"
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
            nats_log_level=os.getenv("NATS_LOG_LEVEL", "INFO"),
            environment=env,
        )
