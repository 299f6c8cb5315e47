"""
Order Service Client

Client library for other microservices to interact with order service
"""

import httpx
import logging
import os
from typing import Optional, List, Dict, Any

logger = logging.getLogger(__name__)


class OrderServiceClient:
    """Order Service HTTP client"""

    def __init__(
        self,
        base_url: str = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Order Service client

        Args:
            base_url: Order service base URL, defaults to ORDER_SERVICE_URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (optional)
        """
        base_url = base_url or os.getenv("ORDER_SERVICE_URL", "http://localhost:8210")
        self.base_url = base_url.rstrip('/')
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Order Management
    # =============================================================================

    async def create_order(
        self,
        item_name: str,
        quantity: int
    ) -> Optional[Dict[str, Any]]:
        """
        Create new order

        Args:
            item_name: Name of the ordered item
            quantity: Number of units (at least 1)

        Returns:
            Created order data

        Example:
            >>> client = OrderServiceClient()
            >>> order = await client.create_order(item_name="Gear X", quantity=3)
            >>> order["status"]
            'PENDING'
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/api/orders",
                json={"itemName": item_name, "quantity": quantity}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to create order: {e.response.status_code} {self._error_text(e.response)}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error creating order: {e}")
            return None

    async def get_order(
        self,
        order_id: int
    ) -> Optional[Dict[str, Any]]:
        """
        Get order by ID

        Returns:
            Order data, or None if the order does not exist or the call failed
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/api/orders/{order_id}"
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to get order: {e.response.status_code} {self._error_text(e.response)}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error getting order: {e}")
            return None

    async def list_orders(
        self,
        status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        List orders

        Args:
            status: Status filter, case-insensitive (optional)

        Returns:
            List of orders (empty on failure)
        """
        try:
            params = {"status": status} if status else None
            response = await self.client.get(
                f"{self.base_url}/api/orders",
                params=params
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to list orders: {e.response.status_code}")
            return []
        except httpx.HTTPError as e:
            logger.error(f"Error listing orders: {e}")
            return []

    async def update_status(
        self,
        order_id: int,
        status: str
    ) -> Optional[Dict[str, Any]]:
        """
        Update order status

        Example:
            >>> order = await client.update_status(order_id=1, status="shipped")
            >>> order["status"]
            'SHIPPED'
        """
        try:
            response = await self.client.patch(
                f"{self.base_url}/api/orders/{order_id}/status",
                json={"status": status}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to update order status: {e.response.status_code} {self._error_text(e.response)}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error updating order status: {e}")
            return None

    # =============================================================================
    # Health Check
    # =============================================================================

    async def health_check(self) -> bool:
        """Check if order service is healthy"""
        try:
            response = await self.client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    @staticmethod
    def _error_text(response: httpx.Response) -> str:
        try:
            return response.json().get("error", response.text)
        except (ValueError, AttributeError):
            return response.text


__all__ = ["OrderServiceClient"]
