"""
Order Service Event Messages

Text formats of the lifecycle messages published on the orders topic.
Payloads are opaque strings; no schema version or correlation id is carried.
"""

import re
from typing import Optional

from pydantic import BaseModel

from ..models import Order

ORDERS_TOPIC = "orders-topic"

ORDER_PLACED = "ORDER_PLACED"
ORDER_STATUS_UPDATE = "ORDER_STATUS_UPDATE"

_ID_PATTERN = re.compile(r"\bid=(\d+)")


def format_order_placed(order: Order) -> str:
    """ORDER_PLACED id=<id> item='<item>' qty=<qty>"""
    return f"{ORDER_PLACED} id={order.id} item='{order.item_name}' qty={order.quantity}"


def format_status_update(order: Order) -> str:
    """ORDER_STATUS_UPDATE id=<id> status=<status>"""
    return f"{ORDER_STATUS_UPDATE} id={order.id} status={order.status.value}"


class OrderMessage(BaseModel):
    """Best-effort view of a received lifecycle message, for logging"""
    kind: str
    order_id: Optional[int] = None
    raw: str

    @classmethod
    def parse(cls, message: str) -> "OrderMessage":
        kind = message.split(" ", 1)[0] if message else ""
        match = _ID_PATTERN.search(message)
        return cls(
            kind=kind,
            order_id=int(match.group(1)) if match else None,
            raw=message,
        )
