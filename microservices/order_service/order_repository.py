"""
Order Repository

Data access layer for supply orders.

Two implementations of OrderRepositoryProtocol:
- OrderRepository: PostgreSQL through an asyncpg connection pool
- InMemoryOrderRepository: process-local dict, used for local runs and tests

The PostgreSQL table is expected to exist already:

    CREATE TABLE supply_orders (
        id          BIGSERIAL PRIMARY KEY,
        item_name   TEXT        NOT NULL,
        quantity    INTEGER     NOT NULL CHECK (quantity >= 1),
        status      TEXT        NOT NULL,
        created_at  TIMESTAMPTZ NOT NULL,
        updated_at  TIMESTAMPTZ NOT NULL
    );
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import asyncpg

from .models import Order, OrderStatus
from .protocols import OrderNotFoundError

logger = logging.getLogger(__name__)


# supply_orders.id is BIGSERIAL
MAX_ORDER_ID = 2 ** 63 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderRepository:
    """
    Repository for order data operations

    Handles all database operations for orders using an asyncpg pool.
    """

    def __init__(self, database_url: str, min_size: int = 1, max_size: int = 10):
        """Initialize Order Repository (call connect() before use)"""
        self.database_url = database_url
        self.min_size = min_size
        self.max_size = max_size
        self.orders_table = "supply_orders"
        self._pool: Optional[asyncpg.Pool] = None

        logger.info("OrderRepository initialized with asyncpg")

    async def connect(self) -> None:
        """Create the connection pool"""
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                dsn=self.database_url,
                min_size=self.min_size,
                max_size=self.max_size,
            )
            logger.info("PostgreSQL pool created for order_service")

    async def close(self) -> None:
        """Close the connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("OrderRepository is not connected")
        return self._pool

    async def create_order(self, item_name: str, quantity: int) -> Order:
        """Create a new order"""
        try:
            now = _utcnow()
            query = f'''
                INSERT INTO {self.orders_table} (item_name, quantity, status, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $4)
                RETURNING id, item_name, quantity, status, created_at, updated_at
            '''
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(query, item_name, quantity, OrderStatus.PENDING.value, now)

            return self._row_to_order(row)

        except Exception as e:
            logger.error(f"Failed to create order: {e}")
            raise

    async def get_order(self, order_id: int) -> Order:
        """Get order by ID"""
        self._check_id(order_id)
        query = f'''
            SELECT id, item_name, quantity, status, created_at, updated_at
            FROM {self.orders_table}
            WHERE id = $1
        '''
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, order_id)

        if row is None:
            raise OrderNotFoundError(order_id)
        return self._row_to_order(row)

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        """Set status and bump updated_at in one statement"""
        self._check_id(order_id)
        query = f'''
            UPDATE {self.orders_table}
            SET status = $1, updated_at = GREATEST($2, created_at)
            WHERE id = $3
            RETURNING id, item_name, quantity, status, created_at, updated_at
        '''
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, status.value, _utcnow(), order_id)

        if row is None:
            raise OrderNotFoundError(order_id)
        return self._row_to_order(row)

    async def list_orders(self) -> List[Order]:
        """List all orders"""
        query = f'''
            SELECT id, item_name, quantity, status, created_at, updated_at
            FROM {self.orders_table}
            ORDER BY id
        '''
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query)
        return [self._row_to_order(row) for row in rows]

    async def list_orders_by_status(self, status: str) -> List[Order]:
        """List orders with an exact status match"""
        query = f'''
            SELECT id, item_name, quantity, status, created_at, updated_at
            FROM {self.orders_table}
            WHERE status = $1
            ORDER BY id
        '''
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, status)
        return [self._row_to_order(row) for row in rows]

    async def check_connection(self) -> bool:
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def _check_id(self, order_id: int) -> None:
        """Ids outside the BIGSERIAL range cannot exist; asyncpg would reject them"""
        if not 1 <= order_id <= MAX_ORDER_ID:
            raise OrderNotFoundError(order_id)

    def _row_to_order(self, row: Mapping[str, Any]) -> Order:
        """Convert a database row to Order model"""
        return Order(
            id=row["id"],
            item_name=row["item_name"],
            quantity=row["quantity"],
            status=OrderStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class InMemoryOrderRepository:
    """
    Process-local order store.

    Ids are sequential from 1 and never reused. Every read returns a copy so
    callers cannot mutate stored records.
    """

    def __init__(self):
        self._data: Dict[int, Order] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create_order(self, item_name: str, quantity: int) -> Order:
        async with self._lock:
            order_id = self._next_id
            self._next_id += 1
            now = _utcnow()
            order = Order(
                id=order_id,
                item_name=item_name,
                quantity=quantity,
                status=OrderStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self._data[order_id] = order
            return order.model_copy()

    async def get_order(self, order_id: int) -> Order:
        async with self._lock:
            order = self._data.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            return order.model_copy()

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        async with self._lock:
            order = self._data.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            updated = order.model_copy(update={
                "status": status,
                "updated_at": max(_utcnow(), order.created_at),
            })
            self._data[order_id] = updated
            return updated.model_copy()

    async def list_orders(self) -> List[Order]:
        async with self._lock:
            return [self._data[key].model_copy() for key in sorted(self._data)]

    async def list_orders_by_status(self, status: str) -> List[Order]:
        async with self._lock:
            return [
                self._data[key].model_copy()
                for key in sorted(self._data)
                if self._data[key].status.value == status
            ]

    async def check_connection(self) -> bool:
        return True
