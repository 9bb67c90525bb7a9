from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class OrderLineResponse(BaseModel):
    name: str
    category: str | None
    qty: int
    amount: Decimal
    weight: Decimal | None
    price_per_kg: Decimal | None
    total: Decimal


class OrderResponse(BaseModel):
    order_id: str
    channel: str
    sequence: int
    payment_method: str
    status: str | None
    total: Decimal
    item_count: int
    total_quantity: int
    total_weight: Decimal
    customer_name: str | None
    phone: str | None
    notes: str | None
    with_receipt: bool
    created_at: datetime
    updated_at: datetime | None
    lines: list[OrderLineResponse]


class OrderListMeta(BaseModel):
    timezone: str
    from_datetime: datetime
    to_datetime: datetime
    trace_id: str | None
    filters: dict


class OrderListResponse(BaseModel):
    meta: OrderListMeta
    total: int
    rows: list[OrderResponse]


class OrderStatusUpdateRequest(BaseModel):
    status: Literal["pending", "completed"]


class CheckoutItem(BaseModel):
    name: str
    category: str | None = None
    qty: int = 1
    price: Decimal | None = None
    weight: Decimal | None = None
    price_per_kg: Decimal | None = None


class CheckoutRequest(BaseModel):
    customer_name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=32)
    notes: str | None = None
    payment_method: Literal["Cash", "Online"] = "Cash"
    items: list[CheckoutItem]
