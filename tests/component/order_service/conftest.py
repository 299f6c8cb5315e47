"""
Order service component fixtures
"""
import pytest

from microservices.order_service.events.publishers import EventPublisher
from microservices.order_service.order_repository import InMemoryOrderRepository
from microservices.order_service.order_service import OrderService

from .mocks import DownEventBus, MockEventBus


@pytest.fixture
def repository():
    """Fresh in-memory order store"""
    return InMemoryOrderRepository()


@pytest.fixture
def mock_event_bus():
    """Event bus that accepts everything"""
    return MockEventBus()


@pytest.fixture
def down_event_bus():
    """Event bus that rejects everything"""
    return DownEventBus()


def make_service(repository, event_bus, max_attempts: int = 3) -> OrderService:
    publisher = EventPublisher(event_bus=event_bus, max_attempts=max_attempts, wait_seconds=0)
    return OrderService(repository=repository, publisher=publisher)


@pytest.fixture
def order_service(repository, mock_event_bus):
    """OrderService over the in-memory store and a healthy bus"""
    return make_service(repository, mock_event_bus)
