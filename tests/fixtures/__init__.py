"""
Shared Test Fixtures

Centralized factories and generators used across all test layers.

Structure:
    - common.py: Base timestamps
    - order_fixtures.py: Order service factories
"""

# Common utilities
from .common import make_timestamp

# Order service fixtures
from .order_fixtures import (
    make_item_name,
    make_order,
    make_order_create_payload,
)

__all__ = [
    "make_timestamp",
    "make_item_name",
    "make_order",
    "make_order_create_payload",
]
