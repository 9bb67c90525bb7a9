from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=200)
    whole_quantity: float = Field(default=0, ge=0)


class CategoryResponse(BaseModel):
    key: str
    name: str
    whole_quantity: float
    quantity_left: float | None
    created_at: datetime
    updated_at: datetime | None


class CategoryListResponse(BaseModel):
    rows: list[CategoryResponse]


class StockAdjustRequest(BaseModel):
    action: Literal["add", "remove"]
    quantity: float = Field(gt=0)
    reason: str | None = None
