#!/usr/bin/env python3
"""
Core Module for the Order Microservice

Shared infrastructure used by the service package.

COMPONENTS:
    - config/: Service and logging configuration loaded from the environment
    - logger.py: Service logger setup
    - nats_client.py: NATS event bus carrying order lifecycle messages

USAGE:
    from core.config import get_settings
    from core.nats_client import get_event_bus

    config = get_settings()
    event_bus = await get_event_bus(config.service_name, nats_url=config.nats_url)
"""

from .logger import setup_service_logger
from .nats_client import EventBusError, NATSEventBus, get_event_bus

__all__ = [
    "setup_service_logger",
    "EventBusError",
    "NATSEventBus",
    "get_event_bus",
]
