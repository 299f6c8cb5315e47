"""
Order Microservice

Responsibilities:
- Order creation and status lifecycle
- Order listing, optionally filtered by status
- Lifecycle event publication to the orders topic
- Warehouse consumer that logs received order messages
"""

from fastapi import FastAPI, Depends, Query, Path, Body, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from core.config import get_settings
from core.logger import setup_service_logger
from core.nats_client import get_event_bus
from .factory import create_order_service
from .order_service import (
    OrderService, VALIDATION_ERROR, INVALID_STATUS, ORDER_NOT_FOUND
)
from .events.handlers import register_event_handlers
from .models import (
    Order, OrderCreateRequest, OrderStatusUpdateRequest, OrderResponse,
    ErrorResponse, OrderServiceStatus
)

# Initialize configuration
config = get_settings()

# Setup loggers (use actual service name)
logger = setup_service_logger(config.service_name)

ERROR_STATUS_CODES = {
    VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class OrderMicroservice:
    """Order microservice core class"""

    def __init__(self):
        self.order_service: Optional[OrderService] = None
        self.event_bus = None

    async def initialize(self, event_bus=None):
        """Initialize the microservice"""
        try:
            self.event_bus = event_bus
            self.order_service = create_order_service(config=config, event_bus=event_bus)
            connect = getattr(self.order_service.repository, "connect", None)
            if connect is not None:
                await connect()
            logger.info(f"Order microservice initialized ({config.store_backend} store)")
        except Exception as e:
            logger.error(f"Failed to initialize order microservice: {e}")
            raise

    async def shutdown(self):
        """Shutdown the microservice"""
        try:
            if self.order_service:
                close = getattr(self.order_service.repository, "close", None)
                if close is not None:
                    await close()
            if self.event_bus:
                await self.event_bus.close()
                logger.info("Event bus closed")
            logger.info("Order microservice shutdown completed")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")


# Global microservice instance
order_microservice = OrderMicroservice()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Initialize event bus
    event_bus = None
    if config.nats_enabled:
        try:
            event_bus = await get_event_bus(config.service_name, nats_url=config.nats_url)
            logger.info("✅ Event bus initialized successfully")
        except Exception as e:
            logger.warning(f"⚠️  Failed to initialize event bus: {e}. Continuing without event publishing.")
            event_bus = None

    # Initialize microservice with event bus
    await order_microservice.initialize(event_bus=event_bus)

    # Subscribe warehouse consumer
    if event_bus and config.consumer_enabled:
        try:
            await register_event_handlers(event_bus, topic=config.orders_topic)
        except Exception as e:
            logger.warning(f"⚠️  Failed to subscribe to events: {e}")

    yield

    await order_microservice.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Order Service",
    description="Supply order lifecycle microservice",
    version="1.0.0",
    lifespan=lifespan
)


# Dependency injection
def get_order_service() -> OrderService:
    """Get order service instance"""
    if not order_microservice.order_service:
        raise StarletteHTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Order service not initialized"
        )
    return order_microservice.order_service


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        status=status_code,
        error=message
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _result_to_error(result: OrderResponse) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _error_response(status_code, result.message)


# Health check endpoints
@app.get("/health")
async def health_check():
    """Service health check"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "version": "1.0.0",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/health/detailed", response_model=OrderServiceStatus)
async def detailed_health_check(
    order_service: OrderService = Depends(get_order_service)
):
    """Detailed health check with store and event bus connectivity"""
    health_data = await order_service.health_check()
    return OrderServiceStatus(
        service=config.service_name,
        status="operational" if health_data["status"] == "healthy" else "degraded",
        database_connected=health_data["database"] == "connected",
        event_bus_connected=health_data["event_bus"] == "connected",
        timestamp=health_data["timestamp"]
    )


# Core order management endpoints

@app.post("/api/orders", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreateRequest,
    order_service: OrderService = Depends(get_order_service)
):
    """Create a new order"""
    logger.info(f"POST /api/orders - creating order for '{request.item_name}'")
    result = await order_service.place_order(request.item_name, request.quantity)
    if not result.success:
        return _result_to_error(result)
    return result.order


@app.get("/api/orders", response_model=List[Order])
async def list_orders(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    order_service: OrderService = Depends(get_order_service)
):
    """List orders, optionally filtered by status"""
    logger.info(f"GET /api/orders - status filter: {status_filter}")
    return await order_service.list_orders(status_filter)


@app.get("/api/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: int = Path(..., description="Order ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """Get order details"""
    logger.info(f"GET /api/orders/{order_id} - fetching single order")
    result = await order_service.get_order(order_id)
    if not result.success:
        return _result_to_error(result)
    return result.order


@app.patch("/api/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int = Path(..., description="Order ID"),
    request: OrderStatusUpdateRequest = Body(...),
    order_service: OrderService = Depends(get_order_service)
):
    """Update order status"""
    logger.info(f"PATCH /api/orders/{order_id}/status - new status: '{request.status}'")
    result = await order_service.update_status(order_id, request.status)
    if not result.success:
        return _result_to_error(result)
    return result.order


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) if loc else "request"
        parts.append(f"{field}: {error.get('msg')}")
    message = " | ".join(parts) or "Invalid request"
    logger.warning(f"Validation failed: {message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")


if __name__ == "__main__":
    uvicorn.run(
        "microservices.order_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=logging.getLevelName(logger.getEffectiveLevel()).lower()
    )
