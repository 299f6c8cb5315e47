"""
Component Tests for the PostgreSQL OrderRepository

The asyncpg pool is replaced with a mock; these tests check row mapping and
not-found handling, not SQL.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from microservices.order_service.models import OrderStatus
from microservices.order_service.order_repository import OrderRepository
from microservices.order_service.protocols import OrderNotFoundError

pytestmark = [pytest.mark.component, pytest.mark.asyncio]

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _row(status="PENDING", updated_at=CREATED):
    return {
        "id": 7,
        "item_name": "Gear X",
        "quantity": 3,
        "status": status,
        "created_at": CREATED,
        "updated_at": updated_at,
    }


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.fixture
def repository(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    repo = OrderRepository(database_url="postgresql://db/orders")
    repo._pool = pool
    return repo


class TestOrderRepository:

    async def test_create_maps_row(self, repository, conn):
        conn.fetchrow.return_value = _row()

        order = await repository.create_order("Gear X", 3)

        assert order.id == 7
        assert order.status == OrderStatus.PENDING
        args = conn.fetchrow.call_args.args
        assert args[1:4] == ("Gear X", 3, "PENDING")

    async def test_get_missing(self, repository, conn):
        conn.fetchrow.return_value = None

        with pytest.raises(OrderNotFoundError):
            await repository.get_order(7)

    async def test_update_passes_status_value(self, repository, conn):
        later = datetime(2026, 1, 2, tzinfo=timezone.utc)
        conn.fetchrow.return_value = _row(status="SHIPPED", updated_at=later)

        order = await repository.update_order_status(7, OrderStatus.SHIPPED)

        assert order.status == OrderStatus.SHIPPED
        assert order.updated_at == later
        args = conn.fetchrow.call_args.args
        assert args[1] == "SHIPPED"
        assert args[3] == 7

    async def test_update_missing(self, repository, conn):
        conn.fetchrow.return_value = None

        with pytest.raises(OrderNotFoundError):
            await repository.update_order_status(7, OrderStatus.SHIPPED)

    async def test_list_by_status(self, repository, conn):
        conn.fetch.return_value = [_row(status="CANCELLED")]

        orders = await repository.list_orders_by_status("CANCELLED")

        assert [o.status for o in orders] == [OrderStatus.CANCELLED]
        assert conn.fetch.call_args.args[1] == "CANCELLED"

    async def test_check_connection_failure(self, repository, conn):
        conn.fetchval.side_effect = OSError("connection refused")

        assert await repository.check_connection() is False

    @pytest.mark.parametrize("order_id", [0, -1, 2 ** 63, 2 ** 70])
    async def test_out_of_range_id_is_not_found(self, repository, conn, order_id):
        with pytest.raises(OrderNotFoundError) as exc_info:
            await repository.get_order(order_id)
        assert str(order_id) in str(exc_info.value)

        with pytest.raises(OrderNotFoundError):
            await repository.update_order_status(order_id, OrderStatus.SHIPPED)

        conn.fetchrow.assert_not_called()
