"""
Order Service Fixtures

Factories for orders and request payloads.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from microservices.order_service.models import Order, OrderStatus


def make_item_name(prefix: str = "Gear") -> str:
    """Generate a unique item name"""
    return f"{prefix} {uuid.uuid4().hex[:6].upper()}"


def make_order(
    order_id: int = 1,
    item_name: Optional[str] = None,
    quantity: int = 3,
    status: OrderStatus = OrderStatus.PENDING,
    created_at: Optional[datetime] = None,
) -> Order:
    """Build an Order model without going through a store"""
    created_at = created_at or datetime.now(timezone.utc)
    return Order(
        id=order_id,
        item_name=item_name or make_item_name(),
        quantity=quantity,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def make_order_create_payload(item_name: Optional[str] = None, quantity: int = 3) -> Dict[str, Any]:
    """JSON body for POST /api/orders"""
    return {"itemName": item_name or make_item_name(), "quantity": quantity}
