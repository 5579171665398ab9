from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

OrderStatus = Literal["pending", "preparing", "delivering", "delivered"]
PaymentStatus = Literal["pending", "paid"]


class OrderItemIn(CamelModel):
    product_id: int
    quantity: int = Field(..., ge=1)


class OrderIn(CamelModel):
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    street_name: str = Field(..., min_length=1)
    house_number: str = Field(..., min_length=1)
    neighborhood: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)
    notes: str = ""
    items: list[OrderItemIn] = Field(..., min_length=1)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class PaymentStatusUpdate(CamelModel):
    payment_status: PaymentStatus


class OrderItemOut(CamelModel):
    id: int
    product_id: int | None = None
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderOut(CamelModel):
    id: int
    order_number: str
    customer_name: str
    customer_phone: str
    street_name: str
    house_number: str
    neighborhood: str
    payment_method: str
    order_status: OrderStatus
    payment_status: PaymentStatus
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    notes: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[OrderItemOut] = Field(default_factory=list)


class OrderSummary(CamelModel):
    orders_today: int
    preparing: int
    revenue_today: Decimal
