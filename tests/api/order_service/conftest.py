"""
Order API fixtures

The FastAPI app runs in-process. Its lifespan is not entered; the service
dependency is overridden with an in-memory store and a mock event bus.
"""
import pytest
from fastapi.testclient import TestClient

from microservices.order_service.events.publishers import EventPublisher
from microservices.order_service.main import app, get_order_service
from microservices.order_service.order_repository import InMemoryOrderRepository
from microservices.order_service.order_service import OrderService
from tests.component.order_service.mocks import MockEventBus


@pytest.fixture
def event_bus():
    return MockEventBus()


@pytest.fixture
def order_service(event_bus):
    publisher = EventPublisher(event_bus=event_bus, max_attempts=3, wait_seconds=0)
    return OrderService(repository=InMemoryOrderRepository(), publisher=publisher)


@pytest.fixture
def client(order_service):
    """HTTP client bound to a fresh order service"""
    app.dependency_overrides[get_order_service] = lambda: order_service
    yield TestClient(app)
    app.dependency_overrides.clear()
