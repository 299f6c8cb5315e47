"""
Order Service Business Logic

Business logic layer for the order lifecycle: creation, status changes and
lifecycle event publication.

Operations return OrderResponse results. Failures are reported through
error_code instead of exceptions so the HTTP layer can map them directly:

    VALIDATION_ERROR, INVALID_STATUS -> 400
    ORDER_NOT_FOUND                  -> 404
    INTERNAL_ERROR                   -> 500
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

from .models import Order, OrderResponse
from .protocols import (
    InvalidOrderStatusError,
    OrderNotFoundError,
    OrderRepositoryProtocol,
    OrderValidationError,
)
from .state_machine import normalize_status
from .events.models import ORDERS_TOPIC
from .events.publishers import (
    EventPublisher,
    publish_order_placed,
    publish_order_status_updated,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_STATUS = "INVALID_STATUS"
ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"


class OrderService:
    """
    Order lifecycle business logic service

    Store writes always complete before the matching event is published, and
    a failed publish never changes the returned result.
    """

    def __init__(
        self,
        repository: OrderRepositoryProtocol,
        publisher: Optional[EventPublisher] = None,
        event_bus=None,
        orders_topic: str = ORDERS_TOPIC,
    ):
        """
        Initialize Order Service

        Args:
            repository: Order store (dependency injection)
            publisher: Event publisher; built from event_bus when omitted
            event_bus: Event bus used when no publisher is given (optional)
            orders_topic: Topic lifecycle messages are published to
        """
        self.repository = repository
        self.publisher = publisher or EventPublisher(event_bus=event_bus)
        self.orders_topic = orders_topic

        # Per-order locks serialize store write -> publish for one id.
        # An entry lives only while some task holds or waits on it.
        self._order_locks: Dict[int, asyncio.Lock] = {}
        self._lock_users: Dict[int, int] = {}

        logger.info("✅ OrderService initialized")

    # Order Lifecycle Operations

    async def place_order(self, item_name: str, quantity: int) -> OrderResponse:
        """
        Create a new PENDING order and publish ORDER_PLACED

        Args:
            item_name: Ordered item, must not be blank
            quantity: Units ordered, at least 1

        Returns:
            Order response with the created order, whatever the publish outcome
        """
        try:
            self._validate_new_order(item_name, quantity)

            logger.info(f"Placing new order: item='{item_name}', quantity={quantity}")
            order = await self.repository.create_order(item_name=item_name, quantity=quantity)
            logger.debug(f"Order persisted: id={order.id}")

            async with self._order_lock(order.id):
                await publish_order_placed(self.publisher, order, topic=self.orders_topic)

            return OrderResponse(
                success=True,
                order=order,
                message="Order created successfully"
            )

        except OrderValidationError as e:
            logger.warning(f"Order validation failed: {e}")
            return OrderResponse(
                success=False,
                message=str(e),
                error_code=VALIDATION_ERROR
            )
        except Exception:
            logger.exception("Failed to place order")
            return self._internal_error()

    async def update_status(self, order_id: int, new_status: str) -> OrderResponse:
        """
        Change an order's status and publish ORDER_STATUS_UPDATE

        Args:
            order_id: Order to update
            new_status: Requested status, case-insensitive

        Returns:
            Order response with the updated order
        """
        try:
            status = normalize_status(new_status)
        except InvalidOrderStatusError as e:
            logger.warning(f"Rejected status update for order {order_id}: {e}")
            return OrderResponse(
                success=False,
                message=str(e),
                error_code=INVALID_STATUS
            )

        try:
            async with self._order_lock(order_id):
                existing = await self.repository.get_order(order_id)
                updated = await self.repository.update_order_status(order_id, status)
                logger.info(
                    f"Order id={order_id} status changed: "
                    f"{existing.status.value} -> {updated.status.value}"
                )

                await publish_order_status_updated(self.publisher, updated, topic=self.orders_topic)

            return OrderResponse(
                success=True,
                order=updated,
                message="Order status updated successfully"
            )

        except OrderNotFoundError as e:
            logger.warning(str(e))
            return OrderResponse(
                success=False,
                message=str(e),
                error_code=ORDER_NOT_FOUND
            )
        except Exception:
            logger.exception(f"Failed to update status of order {order_id}")
            return self._internal_error()

    # Order Query Operations

    async def get_order(self, order_id: int) -> OrderResponse:
        """Get order by ID"""
        try:
            logger.debug(f"Fetching order id={order_id}")
            order = await self.repository.get_order(order_id)
            return OrderResponse(success=True, order=order, message="Order found")
        except OrderNotFoundError as e:
            logger.warning(str(e))
            return OrderResponse(
                success=False,
                message=str(e),
                error_code=ORDER_NOT_FOUND
            )
        except Exception:
            logger.exception(f"Failed to get order {order_id}")
            return self._internal_error()

    async def list_orders(self, status_filter: Optional[str] = None) -> List[Order]:
        """List all orders, or those whose status matches the filter"""
        if status_filter is not None:
            logger.debug(f"Fetching orders with status='{status_filter}'")
            return await self.repository.list_orders_by_status(status_filter.upper())
        logger.debug("Fetching all orders")
        return await self.repository.list_orders()

    # Service Operations

    async def health_check(self) -> Dict[str, Any]:
        """Health check for the service"""
        database_connected = await self.repository.check_connection()
        event_bus = self.publisher.event_bus
        event_bus_connected = bool(event_bus is not None and getattr(event_bus, "is_connected", True))
        return {
            "status": "healthy" if database_connected else "unhealthy",
            "database": "connected" if database_connected else "disconnected",
            "event_bus": "connected" if event_bus_connected else "disconnected",
            "timestamp": datetime.now(timezone.utc)
        }

    # Private Helper Methods

    @asynccontextmanager
    async def _order_lock(self, order_id: int) -> AsyncIterator[None]:
        lock = self._order_locks.get(order_id)
        if lock is None:
            lock = self._order_locks[order_id] = asyncio.Lock()
        self._lock_users[order_id] = self._lock_users.get(order_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[order_id] -= 1
            if not self._lock_users[order_id]:
                del self._lock_users[order_id]
                del self._order_locks[order_id]

    def _validate_new_order(self, item_name: str, quantity: int) -> None:
        """Validate order creation input"""
        if not isinstance(item_name, str) or not item_name.strip():
            raise OrderValidationError("itemName: must not be blank")

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise OrderValidationError("quantity: must be at least 1")

    def _internal_error(self) -> OrderResponse:
        return OrderResponse(
            success=False,
            message="An unexpected error occurred",
            error_code=INTERNAL_ERROR
        )
