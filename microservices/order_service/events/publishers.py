"""
Order Service Event Publishers

Best-effort delivery of lifecycle messages to the event bus. A publish is
retried a bounded number of times with a fixed delay; when every attempt
fails the fallback records the loss and the caller carries on.
"""

import logging
from typing import Optional

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..models import Order
from ..protocols import EventBusProtocol, PublishError
from .models import ORDERS_TOPIC, format_order_placed, format_status_update

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_WAIT_SECONDS = 0.5


class EventPublisher:
    """
    Publishes text messages with retry and a non-throwing fallback.

    publish() never raises; it returns True when the bus accepted the
    message and False otherwise.
    """

    def __init__(
        self,
        event_bus: Optional[EventBusProtocol] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        wait_seconds: float = DEFAULT_WAIT_SECONDS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if wait_seconds < 0:
            raise ValueError("wait_seconds must not be negative")

        self.event_bus = event_bus
        self.max_attempts = max_attempts
        self.wait_seconds = wait_seconds

    async def publish(self, topic: str, message: str, order: Optional[Order] = None) -> bool:
        """Deliver message to topic, retrying up to max_attempts times"""
        if not self.event_bus:
            logger.warning(f"Event bus not available, skipping publish to {topic}: {message}")
            return False

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_fixed(self.wait_seconds),
                retry=retry_if_exception_type(Exception),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    logger.info(
                        f"Publishing to [{topic}] (attempt {attempt.retry_state.attempt_number}"
                        f"/{self.max_attempts}): {message}"
                    )
                    await self.event_bus.publish(topic, message)
        except Exception as e:
            error = PublishError(
                f"Publish to {topic} failed after {self.max_attempts} attempts: {e}"
            )
            error.__cause__ = e
            self.fallback(order, error, topic=topic, message=message)
            return False

        logger.info(f"✅ Published to [{topic}]: {message}")
        return True

    def fallback(
        self,
        order: Optional[Order],
        error: Exception,
        topic: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """
        Record a publish that exhausted its retries.

        Only logs; recovery (dead-letter replay) happens out of band.
        Never raises.
        """
        try:
            order_id = order.id if order is not None else None
            logger.error(
                f"❌ Event publish FAILED after all retries - order id={order_id}, "
                f"topic={topic}, message={message!r}, error: {error}"
            )
        except Exception:
            logger.exception("Failed to record publish fallback")


async def publish_order_placed(publisher: EventPublisher, order: Order, topic: str = ORDERS_TOPIC) -> bool:
    """Publish ORDER_PLACED for a newly created order"""
    return await publisher.publish(topic, format_order_placed(order), order=order)


async def publish_order_status_updated(publisher: EventPublisher, order: Order, topic: str = ORDERS_TOPIC) -> bool:
    """Publish ORDER_STATUS_UPDATE for an order whose status changed"""
    return await publisher.publish(topic, format_status_update(order), order=order)
