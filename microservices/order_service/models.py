"""
Order Service Data Models

Pydantic models for supply orders, request bodies and service results.
JSON field names are camelCase on the wire (itemName, createdAt, ...).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"


# Core Order Model

class Order(BaseModel):
    """Core order model"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    item_name: str = Field(..., alias="itemName")
    quantity: int
    status: OrderStatus
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


# Request Models

class OrderCreateRequest(BaseModel):
    """Create order request"""
    model_config = ConfigDict(populate_by_name=True)

    item_name: str = Field(..., alias="itemName", min_length=1, description="Name of the ordered item")
    quantity: int = Field(..., ge=1, description="Number of units, at least 1")

    @field_validator('item_name')
    @classmethod
    def validate_item_name(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v


class OrderStatusUpdateRequest(BaseModel):
    """Update order status request"""
    status: str = Field(..., description="New status, case-insensitive")


# Response Models

class OrderResponse(BaseModel):
    """Order operation result"""
    success: bool
    order: Optional[Order] = None
    message: str
    error_code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned by the HTTP layer"""
    timestamp: str
    status: int
    error: str


class OrderServiceStatus(BaseModel):
    """Order service status response"""
    service: str = "order_service"
    status: str = "operational"
    version: str = "1.0.0"
    database_connected: bool
    event_bus_connected: bool
    timestamp: Optional[datetime] = None
