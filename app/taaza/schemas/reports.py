from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ReportMeta(BaseModel):
    timezone: str
    from_datetime: datetime
    to_datetime: datetime
    trace_id: str | None
    query_ms: float
    filters: dict


class SalesSummaryRow(BaseModel):
    name: str
    category: str
    total_quantity: int
    total_weight: Decimal
    avg_price_per_unit: Decimal | None
    revenue_cash: Decimal
    revenue_online: Decimal
    revenue_all: Decimal
    order_count: int


class SalesSummaryTotals(BaseModel):
    total_quantity: int
    total_weight: Decimal
    revenue_cash: Decimal
    revenue_online: Decimal
    revenue_all: Decimal
    order_count: int


class SalesSummaryResponse(BaseModel):
    meta: ReportMeta
    rows: list[SalesSummaryRow]
    overall: SalesSummaryTotals


class ReportOverviewTotals(BaseModel):
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    completed_orders: int
    average_ticket: Decimal


class ReportOverviewResponse(BaseModel):
    meta: ReportMeta
    totals: ReportOverviewTotals
