from pydantic import Field, validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from cellarbook.schemas.common import CamelModel


class OrderStatus(str, Enum):
    PENDING = "pending"
    COLLECTED = "collected"
    CANCELLED = "cancelled"


class OrderSortField(str, Enum):
    ORDER_DATE = "orderDate"
    ORDER_NUMBER = "orderNumber"
    TOTAL_PRICE = "totalPrice"
    STATUS = "status"
    CREATED_AT = "createdAt"


class OrderItemCreate(CamelModel):
    product_id: int
    quantity: int = Field(1, ge=1)


def _strip(v):
    return v.strip() if v is not None else v


class OrderCreate(CamelModel):
    order_number: str = Field(..., min_length=1, max_length=100)
    order_date: Optional[datetime] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)
    notes: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING

    @validator("order_number")
    def validate_order_number(cls, v):
        if not v.strip():
            raise ValueError("Order number cannot be empty")
        return v.strip()

    @validator("notes")
    def validate_notes(cls, v):
        return _strip(v)


class OrderUpdate(CamelModel):
    """Les items, s'ils sont fournis, remplacent entièrement ceux de la commande"""

    order_number: Optional[str] = Field(None, min_length=1, max_length=100)
    order_date: Optional[datetime] = None
    items: Optional[List[OrderItemCreate]] = Field(None, min_length=1)
    notes: Optional[str] = None
    status: Optional[OrderStatus] = None

    @validator("order_number")
    def validate_order_number(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Order number cannot be empty")
        return _strip(v)

    @validator("notes")
    def validate_notes(cls, v):
        return _strip(v)


class OrderProductSummary(CamelModel):
    id: int
    name: str
    type: Optional[str] = None
    price: Optional[float] = None
    picture: Optional[str] = None
    country: Optional[str] = None
    wine_type: Optional[str] = None


class OrderItemResponse(CamelModel):
    id: int
    product_id: Optional[int] = None
    product: Optional[OrderProductSummary] = None
    quantity: int
    price_at_order: float


class OrderResponse(CamelModel):
    id: int
    order_number: str
    order_date: datetime
    status: OrderStatus
    notes: Optional[str] = None
    items: List[OrderItemResponse] = []
    total_price: float
    created_at: datetime
    updated_at: datetime


class OrderStats(CamelModel):
    total_orders: int = 0
    pending_orders: int = 0
    collected_orders: int = 0
    total_spent: float = 0.0


class OrderListResponse(CamelModel):
    orders: List[OrderResponse] = []
    stats: OrderStats
