"""
NATS Client for Python Microservices
Provides event-driven communication over a NATS server

Messages on the order bus are opaque UTF-8 text, so this wrapper publishes
and delivers plain strings rather than structured envelopes.

Usage:
    from core.nats_client import get_event_bus

    event_bus = await get_event_bus("order_service", nats_url="nats://localhost:4222")
    await event_bus.publish("orders-topic", "ORDER_PLACED id=1 item='Gear X' qty=3")
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

import nats
from nats.aio.client import Client as NATS
from nats.aio.msg import Msg
from nats.errors import Error as NATSError

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str], Awaitable[None]]


class EventBusError(Exception):
    """Raised when a message cannot be handed to the NATS server"""
    pass


class NATSEventBus:
    """
    NATS event bus.

    publish() raises EventBusError on any delivery failure so callers can
    decide how to retry; it never reports failure through a return value.
    """

    def __init__(
        self,
        service_name: str,
        nats_url: str = "nats://localhost:4222",
        flush_timeout: float = 2.0,
    ):
        """
        Initialize NATS Event Bus.

        Args:
            service_name: Name of the service (used as the NATS client name)
            nats_url: NATS server URL
            flush_timeout: Seconds to wait for the server to acknowledge a flush
        """
        self.service_name = service_name
        self.nats_url = nats_url
        self.flush_timeout = flush_timeout

        self._client: Optional[NATS] = None
        self._subscriptions: Dict[str, object] = {}  # topic -> Subscription

        logger.info(f"NATS EventBus initialized: {self.nats_url}")

    async def connect(self):
        """Connect to the NATS server"""
        try:
            self._client = await nats.connect(
                servers=[self.nats_url],
                name=self.service_name,
                connect_timeout=2,
                max_reconnect_attempts=-1,
            )
            logger.info(f"Connected to NATS as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS at {self.nats_url}: {e}")
            raise

    async def publish(self, topic: str, message: str) -> None:
        """
        Publish a text message to a subject and flush it to the server.

        Raises:
            EventBusError: not connected, or the server did not accept the message
        """
        if not self.is_connected:
            raise EventBusError("Not connected to NATS")

        try:
            await self._client.publish(topic, message.encode("utf-8"))
            await self._client.flush(timeout=self.flush_timeout)
        except (NATSError, asyncio.TimeoutError, OSError) as e:
            raise EventBusError(f"Failed to publish to {topic}: {e}") from e

        logger.debug(f"Published to {topic}: {message}")

    async def subscribe(self, topic: str, handler: MessageHandler) -> None:
        """
        Subscribe a handler to a subject.

        The handler receives the decoded message text. Handler errors are
        logged and do not stop the subscription.
        """
        if not self.is_connected:
            raise EventBusError("Not connected to NATS")

        async def _on_message(msg: Msg):
            try:
                await handler(msg.data.decode("utf-8"))
            except Exception as e:
                logger.error(f"Handler for {topic} failed: {e}", exc_info=True)

        self._subscriptions[topic] = await self._client.subscribe(topic, cb=_on_message)
        logger.info(f"Subscribed to {topic}")

    async def unsubscribe(self, topic: str) -> bool:
        """Unsubscribe from a subject"""
        subscription = self._subscriptions.pop(topic, None)
        if subscription is None:
            return False
        await subscription.unsubscribe()
        return True

    async def close(self):
        """Drain subscriptions and close the NATS connection"""
        self._subscriptions.clear()
        if self._client and not self._client.is_closed:
            try:
                await self._client.drain()
            except NATSError as e:
                logger.warning(f"Error draining NATS connection: {e}")
        self._client = None
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._client is not None and self._client.is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(
    service_name: str,
    nats_url: str = "nats://localhost:4222",
) -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        nats_url: NATS server URL

    Returns:
        Connected NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None or not _event_bus.is_connected:
        if _event_bus is not None:
            # Stale (closed or reconnecting) client; release it before replacing
            await _event_bus.close()
            _event_bus = None
        bus = NATSEventBus(service_name=service_name, nats_url=nats_url)
        await bus.connect()
        _event_bus = bus

    return _event_bus
