from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


PaymentMethod = Literal["Cash", "Online"]


class BillOpenRequest(BaseModel):
    payment_method: PaymentMethod | None = None


class BillLineCreate(BaseModel):
    name: str
    category: str | None = None
    qty: int = 1
    amount: Decimal | None = None
    weight: Decimal | None = None
    price_per_kg: Decimal | None = None


class BillLineResponse(BaseModel):
    index: int
    name: str
    category: str | None
    qty: int
    amount: Decimal
    weight: Decimal | None
    price_per_kg: Decimal | None
    total: Decimal


class BillTotalsResponse(BaseModel):
    item_count: int
    total_quantity: int
    subtotal: Decimal
    total_weight: Decimal


class BillResponse(BaseModel):
    bill_id: str
    payment_method: str
    opened_at: datetime
    lines: list[BillLineResponse]
    totals: BillTotalsResponse


class PaymentMethodRequest(BaseModel):
    payment_method: PaymentMethod


class BillSubmitRequest(BaseModel):
    payment_method: PaymentMethod | None = None
    with_receipt: bool = False
    customer_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=32)
    notes: str | None = None
