# shoestore/schemas/order.py
from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(IntEnum):
    PROCESSING = 1
    SHIPPED = 2
    DELIVERED = 3
    CANCELLED = 4


# Line captured at checkout; never follows later catalog changes
class OrderLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    price: float
    quantity: int = Field(..., ge=1)
    size: Optional[float] = None
    color: Optional[str] = None


class OrderOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    customer_name: str
    customer_email: str
    order_date: datetime
    status: OrderStatus = OrderStatus.PROCESSING
    items: List[OrderLine] = Field(default_factory=list)

    subtotal: float
    shipping_cost: float
    tax: float
    total_amount: float
    currency: str

    shipping_address: str
    payment_method: str
    tracking_number: Optional[str] = None
    delivery_date: Optional[datetime] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# (Input) checkout payload; items always come from the caller's cart
class CheckoutBody(BaseModel):
    customer_name: Optional[str] = Field(None, description="Defaults to the profile or token display name")
    customer_email: Optional[str] = Field(None, description="Defaults to the token's e-mail")
    shipping_address: Optional[str] = Field(None, min_length=1, description="Defaults to the profile's shipping address")
    payment_method: str = Field(..., min_length=1, description="Recorded as a label only")


# Status is validated in the service so an unknown value is a 400 with a message
class StatusUpdate(BaseModel):
    status: int = Field(..., description="1 Processing, 2 Shipped, 3 Delivered, 4 Cancelled")
    tracking_number: Optional[str] = None
    delivery_date: Optional[datetime] = None


class StatusCount(BaseModel):
    status: OrderStatus
    count: int


class OrderStatistics(BaseModel):
    total_orders: int
    total_revenue: float
    currency: str
    orders_by_status: List[StatusCount] = Field(default_factory=list)
