#!/usr/bin/env python3
"""Configuration package for the order service

- service_config: HTTP bind, order store backend, NATS and publish retry policy
- logging_config: log level, format and handlers

Values come from the process environment first, then from the env file for
the current ENV (deployment/environments/<env>.env); the file never
overrides a variable that is already set.
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .service_config import OrderServiceConfig

ENV_FILES = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "production": "deployment/environments/production.env",
}


def load_environment() -> str:
    """Load the env file for ENV and return the file path used"""
    env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
    env_file = ENV_FILES.get(env, ENV_FILES["development"])
    load_dotenv(env_file, override=False)
    return env_file


load_environment()
settings = OrderServiceConfig.from_env()


def get_settings() -> OrderServiceConfig:
    """Process-wide order service settings"""
    return settings


def reload_settings() -> OrderServiceConfig:
    """Re-read settings after the environment changed"""
    global settings
    settings = OrderServiceConfig.from_env()
    return settings


__all__ = [
    'OrderServiceConfig',
    'LoggingConfig',
    'load_environment',
    'get_settings',
    'reload_settings',
    'settings',
]
