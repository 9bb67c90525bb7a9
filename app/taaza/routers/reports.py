from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Query, Request, Response

from app.taaza.core.config import settings
from app.taaza.db.session import get_db
from app.taaza.schemas.reports import (
    ReportMeta,
    ReportOverviewResponse,
    ReportOverviewTotals,
    SalesSummaryResponse,
    SalesSummaryRow,
    SalesSummaryTotals,
)
from app.taaza.services.exports import CONTENT_TYPES, render, summary_dataset
from app.taaza.services.reports import (
    load_orders,
    orders_overview,
    resolve_report_range,
    resolve_timezone,
    validate_date_range,
)
from app.taaza.services.sales_summary import summarize

router = APIRouter()

RANGE_PATTERN = "^(today|week|month|custom)$"


def _build_meta(request: Request, timezone_name: str, date_range, filters: dict, query_ms: float) -> ReportMeta:
    trace_id = getattr(request.state, "trace_id", None)
    return ReportMeta(
        timezone=timezone_name,
        from_datetime=date_range.start_local,
        to_datetime=date_range.end_local,
        trace_id=trace_id,
        query_ms=query_ms,
        filters=filters,
    )


def _load(db, range_name, from_value, to_value, timezone, status, channel):
    tz = resolve_timezone(timezone)
    date_range = resolve_report_range(range_name, from_value, to_value, tz)
    validate_date_range(date_range, max_days=settings.REPORTS_MAX_DATE_RANGE_DAYS)
    filters = {
        "range": range_name,
        "from": from_value,
        "to": to_value,
        "timezone": str(tz),
        "status": status,
        "channel": channel,
    }
    records = load_orders(db, date_range, status=status, channel=channel)
    return tz, date_range, filters, records


@router.get("/taaza/reports/sales-summary", response_model=SalesSummaryResponse)
def sales_summary(
    request: Request,
    range_name: str = Query("today", alias="range", pattern=RANGE_PATTERN),
    from_value: str | None = Query(None, alias="from"),
    to_value: str | None = Query(None, alias="to"),
    timezone: str | None = Query(None),
    status: str | None = Query(None),
    channel: str | None = Query(None),
    db=Depends(get_db),
):
    start_time = time.perf_counter()
    tz, date_range, filters, records = _load(db, range_name, from_value, to_value, timezone, status, channel)
    report = summarize(records)
    query_ms = (time.perf_counter() - start_time) * 1000
    overall = report.overall
    return SalesSummaryResponse(
        meta=_build_meta(request, str(tz), date_range, filters, query_ms),
        rows=[
            SalesSummaryRow(
                name=row.name,
                category=row.category,
                total_quantity=row.quantity,
                total_weight=row.weight,
                avg_price_per_unit=row.avg_price_per_unit,
                revenue_cash=row.cash,
                revenue_online=row.online,
                revenue_all=row.revenue,
                order_count=row.order_count,
            )
            for row in report.rows
        ],
        overall=SalesSummaryTotals(
            total_quantity=overall.quantity,
            total_weight=overall.weight,
            revenue_cash=overall.cash,
            revenue_online=overall.online,
            revenue_all=overall.revenue,
            order_count=overall.order_count,
        ),
    )


@router.get("/taaza/reports/sales-summary/export")
def export_sales_summary(
    export_format: str = Query("csv", alias="format", pattern="^(csv|xlsx)$"),
    range_name: str = Query("today", alias="range", pattern=RANGE_PATTERN),
    from_value: str | None = Query(None, alias="from"),
    to_value: str | None = Query(None, alias="to"),
    timezone: str | None = Query(None),
    status: str | None = Query(None),
    channel: str | None = Query(None),
    db=Depends(get_db),
):
    _tz, date_range, _filters, records = _load(db, range_name, from_value, to_value, timezone, status, channel)
    content = render(summary_dataset(summarize(records)), export_format)
    file_name = f"sales-summary-{date_range.start_date:%Y%m%d}-{date_range.end_date:%Y%m%d}.{export_format}"
    return Response(
        content=content,
        media_type=CONTENT_TYPES[export_format],
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.get("/taaza/reports/overview", response_model=ReportOverviewResponse)
def report_overview(
    request: Request,
    range_name: str = Query("today", alias="range", pattern=RANGE_PATTERN),
    from_value: str | None = Query(None, alias="from"),
    to_value: str | None = Query(None, alias="to"),
    timezone: str | None = Query(None),
    channel: str | None = Query(None),
    db=Depends(get_db),
):
    start_time = time.perf_counter()
    tz, date_range, filters, records = _load(db, range_name, from_value, to_value, timezone, None, channel)
    overview = orders_overview(records)
    query_ms = (time.perf_counter() - start_time) * 1000
    return ReportOverviewResponse(
        meta=_build_meta(request, str(tz), date_range, filters, query_ms),
        totals=ReportOverviewTotals(
            total_orders=overview.total_orders,
            total_revenue=overview.total_revenue,
            pending_orders=overview.pending_orders,
            completed_orders=overview.completed_orders,
            average_ticket=overview.average_ticket,
        ),
    )
