"""
Order Service Event Handlers

Warehouse-side consumer of the orders topic. It only logs receipt of each
lifecycle message; no state is changed.
"""

import logging

from .models import ORDERS_TOPIC, OrderMessage

logger = logging.getLogger(__name__)


async def handle_order_message(message: str) -> OrderMessage:
    """
    Handle a message from the orders topic
    Logs receipt and returns the parsed view of the message
    """
    parsed = OrderMessage.parse(message)
    logger.info("WAREHOUSE: Received order message")
    logger.info(f"  Kind: {parsed.kind or '<unknown>'}  Order id: {parsed.order_id}")
    logger.info(f"  Message: {message}")
    logger.info("  Action: Preparing item for shipment...")
    return parsed


async def register_event_handlers(event_bus, topic: str = ORDERS_TOPIC) -> None:
    """Subscribe the warehouse consumer to the orders topic"""
    await event_bus.subscribe(topic, handle_order_message)
    logger.info(f"✅ Subscribed warehouse consumer to {topic}")
