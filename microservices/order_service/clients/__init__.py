"""
Order Service Clients Module

HTTP client for synchronous communication with the order service
"""

from .order_client import OrderServiceClient

__all__ = [
    "OrderServiceClient"
]
