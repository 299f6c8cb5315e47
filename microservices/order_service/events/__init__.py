"""
Order Service Events Module

Exports all event-related functionality for order service
"""

from .models import (
    ORDERS_TOPIC,
    ORDER_PLACED,
    ORDER_STATUS_UPDATE,
    OrderMessage,
    format_order_placed,
    format_status_update
)

from .publishers import (
    EventPublisher,
    publish_order_placed,
    publish_order_status_updated
)

from .handlers import handle_order_message, register_event_handlers

__all__ = [
    # Messages
    "ORDERS_TOPIC",
    "ORDER_PLACED",
    "ORDER_STATUS_UPDATE",
    "OrderMessage",
    "format_order_placed",
    "format_status_update",
    # Publishers
    "EventPublisher",
    "publish_order_placed",
    "publish_order_status_updated",
    # Handlers
    "handle_order_message",
    "register_event_handlers"
]
