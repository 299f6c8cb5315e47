"""
Order status validation

Membership check only: any allowed status may follow any other allowed
status. There is no PENDING -> PROCESSING -> SHIPPED progression rule.
"""

from typing import Optional

from .models import OrderStatus
from .protocols import InvalidOrderStatusError

ALLOWED_STATUSES = tuple(status.value for status in OrderStatus)


def normalize_status(candidate: Optional[str]) -> OrderStatus:
    """
    Uppercase a status string and check it against the allowed set.

    Raises:
        InvalidOrderStatusError: candidate is None or not an allowed status.
            The message echoes the caller's original string verbatim.
    """
    if candidate is None:
        raise InvalidOrderStatusError(candidate, ALLOWED_STATUSES)

    normalized = candidate.upper()
    if normalized not in ALLOWED_STATUSES:
        raise InvalidOrderStatusError(candidate, ALLOWED_STATUSES)
    return OrderStatus(normalized)
