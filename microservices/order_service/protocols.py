"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import List, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Order, OrderStatus


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class OrderValidationError(OrderServiceError):
    """Order validation error"""
    pass


class InvalidOrderStatusError(OrderValidationError):
    """Status string is not one of the allowed order statuses"""

    def __init__(self, candidate, allowed):
        self.candidate = candidate
        super().__init__(f"Invalid status '{candidate}'. Allowed: [{', '.join(allowed)}]")


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order not found with id: {order_id}")


class PublishError(OrderServiceError):
    """All attempts to deliver a lifecycle event failed"""
    pass


# ============================================================================
# Repository Protocol
# ============================================================================

@runtime_checkable
class OrderRepositoryProtocol(Protocol):
    """
    Interface for Order Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def create_order(self, item_name: str, quantity: int) -> Order:
        """Create a new PENDING order"""
        ...

    async def get_order(self, order_id: int) -> Order:
        """Get order by ID, raising OrderNotFoundError"""
        ...

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        """Set order status, raising OrderNotFoundError"""
        ...

    async def list_orders(self) -> List[Order]:
        """List all orders"""
        ...

    async def list_orders_by_status(self, status: str) -> List[Order]:
        """List orders whose status matches exactly"""
        ...

    async def check_connection(self) -> bool:
        """Check backend connectivity"""
        ...


# ============================================================================
# Event Bus Protocol
# ============================================================================

@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish(self, topic: str, message: str) -> None:
        """Publish a text message, raising on failure"""
        ...
