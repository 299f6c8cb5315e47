"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_order_service
    service = create_order_service(config, event_bus)
"""
from typing import Optional

from core.config import OrderServiceConfig

from .order_service import OrderService
from .protocols import OrderRepositoryProtocol
from .events.publishers import EventPublisher


def create_repository(config: OrderServiceConfig) -> OrderRepositoryProtocol:
    """
    Create the order store selected by config.store_backend.

    The PostgreSQL repository still needs `await repository.connect()`.
    """
    if config.store_backend == "postgres":
        # Import real repository here (not at module level)
        from .order_repository import OrderRepository
        return OrderRepository(database_url=config.database_url)

    from .order_repository import InMemoryOrderRepository
    return InMemoryOrderRepository()


def create_order_service(
    config: Optional[OrderServiceConfig] = None,
    event_bus=None,
    repository: Optional[OrderRepositoryProtocol] = None,
) -> OrderService:
    """
    Create OrderService with real dependencies.

    Args:
        config: Order service configuration (defaults to environment)
        event_bus: Event bus for publishing lifecycle messages
        repository: Order store override; built from config when omitted

    Returns:
        Configured OrderService instance
    """
    config = config or OrderServiceConfig.from_env()

    publisher = EventPublisher(
        event_bus=event_bus,
        max_attempts=config.publish_max_attempts,
        wait_seconds=config.publish_wait_seconds,
    )

    return OrderService(
        repository=repository or create_repository(config),
        publisher=publisher,
        orders_topic=config.orders_topic,
    )
