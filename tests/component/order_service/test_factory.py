"""
Component Tests for the order service factory
"""

import pytest

from core.config import OrderServiceConfig
from microservices.order_service.factory import create_order_service, create_repository
from microservices.order_service.order_repository import InMemoryOrderRepository, OrderRepository

from .mocks import MockEventBus

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


class TestFactory:

    async def test_memory_backend(self):
        assert isinstance(create_repository(OrderServiceConfig()), InMemoryOrderRepository)

    async def test_postgres_backend_is_not_connected(self):
        config = OrderServiceConfig(store_backend="postgres", database_url="postgresql://db/orders")

        repository = create_repository(config)

        assert isinstance(repository, OrderRepository)
        assert repository.database_url == "postgresql://db/orders"
        with pytest.raises(RuntimeError):
            repository.pool

    async def test_service_uses_config_retry_policy(self):
        config = OrderServiceConfig(publish_max_attempts=5, publish_wait_ms=250, orders_topic="supply")
        bus = MockEventBus()

        service = create_order_service(config=config, event_bus=bus)

        assert service.publisher.event_bus is bus
        assert service.publisher.max_attempts == 5
        assert service.publisher.wait_seconds == 0.25
        assert service.orders_topic == "supply"

    async def test_publishes_to_configured_topic(self):
        bus = MockEventBus()
        service = create_order_service(
            config=OrderServiceConfig(orders_topic="supply", publish_wait_ms=0),
            event_bus=bus,
        )

        result = await service.place_order("Gear X", 3)

        assert bus.published == [("supply", f"ORDER_PLACED id={result.order.id} item='Gear X' qty=3")]
