"""
Unit Tests for Order Status Validation

Tests normalize_status(): case handling, membership and error messages.
"""

import pytest

from microservices.order_service.models import OrderStatus
from microservices.order_service.protocols import (
    InvalidOrderStatusError,
    OrderValidationError,
)
from microservices.order_service.state_machine import ALLOWED_STATUSES, normalize_status

pytestmark = pytest.mark.unit


class TestNormalizeStatus:
    """Tests for normalize_status()"""

    @pytest.mark.parametrize("candidate", ["PENDING", "PROCESSING", "SHIPPED", "CANCELLED"])
    def test_accepts_every_allowed_status(self, candidate):
        assert normalize_status(candidate) == OrderStatus(candidate)

    @pytest.mark.parametrize("candidate,expected", [
        ("shipped", OrderStatus.SHIPPED),
        ("Processing", OrderStatus.PROCESSING),
        ("cAnCeLlEd", OrderStatus.CANCELLED),
    ])
    def test_is_case_insensitive(self, candidate, expected):
        assert normalize_status(candidate) == expected

    def test_rejects_unknown_status_echoing_input(self):
        with pytest.raises(InvalidOrderStatusError) as exc_info:
            normalize_status("FLYING")

        assert "FLYING" in str(exc_info.value)
        assert exc_info.value.candidate == "FLYING"

    def test_error_echoes_original_casing(self):
        # Given: a lowercase invalid status
        with pytest.raises(InvalidOrderStatusError) as exc_info:
            normalize_status("flying")

        # Then: message has the caller's string, not the uppercased one
        assert "'flying'" in str(exc_info.value)
        assert "FLYING" not in str(exc_info.value)

    def test_error_lists_allowed_statuses(self):
        with pytest.raises(InvalidOrderStatusError) as exc_info:
            normalize_status("DELIVERED")

        message = str(exc_info.value)
        for status in ALLOWED_STATUSES:
            assert status in message

    @pytest.mark.parametrize("candidate", ["", " ", " SHIPPED", "SHIPPED ", None])
    def test_rejects_empty_padded_and_missing(self, candidate):
        with pytest.raises(InvalidOrderStatusError):
            normalize_status(candidate)

    def test_invalid_status_is_a_validation_error(self):
        with pytest.raises(OrderValidationError):
            normalize_status("FLYING")

    def test_any_status_may_follow_any_other(self):
        # No progression rules: going "backwards" is accepted
        assert normalize_status("SHIPPED") == OrderStatus.SHIPPED
        assert normalize_status("PENDING") == OrderStatus.PENDING
        assert normalize_status("CANCELLED") == OrderStatus.CANCELLED
        assert normalize_status("PROCESSING") == OrderStatus.PROCESSING

    def test_allowed_statuses_match_enum(self):
        assert set(ALLOWED_STATUSES) == {"PENDING", "PROCESSING", "SHIPPED", "CANCELLED"}
