"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - api/        : HTTP contract tests against the FastAPI app
    - component/  : Component tests (real in-memory store, mocked event bus)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Keep the app from reaching for NATS / PostgreSQL during tests
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("NATS_ENABLED", "false")
os.environ.setdefault("ORDER_STORE_BACKEND", "memory")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    make_timestamp,
    make_item_name,
    make_order,
    make_order_create_payload,
)


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: pure logic tests, no I/O")
    config.addinivalue_line("markers", "component: service tests with mocked dependencies")
    config.addinivalue_line("markers", "api: HTTP contract tests")


@pytest.fixture
def item_name() -> str:
    """Unique item name"""
    return make_item_name()
