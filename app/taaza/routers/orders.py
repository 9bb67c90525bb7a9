from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from app.taaza.core.config import settings
from app.taaza.core.error_catalog import AppError, ErrorCatalog
from app.taaza.core.logging import log_json
from app.taaza.db.session import get_db
from app.taaza.repos.orders import OrderRepository, order_to_record
from app.taaza.schemas.orders import (
    OrderLineResponse,
    OrderListMeta,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdateRequest,
)
from app.taaza.services.order_records import OrderRecord
from app.taaza.services.receipts import render_receipt
from app.taaza.services.reports import (
    load_orders,
    resolve_report_range,
    resolve_timezone,
    validate_date_range,
)

router = APIRouter()
logger = logging.getLogger("taaza.orders")


def order_response(record: OrderRecord) -> OrderResponse:
    customer = record.customer
    return OrderResponse(
        order_id=record.order_id,
        channel=record.channel,
        sequence=record.sequence,
        payment_method=record.payment_method,
        status=record.status,
        total=record.total,
        item_count=len(record.lines),
        total_quantity=record.total_quantity,
        total_weight=record.total_weight,
        customer_name=customer.name if customer else None,
        phone=customer.phone if customer else None,
        notes=customer.notes if customer else None,
        with_receipt=record.with_receipt,
        created_at=record.created_at,
        updated_at=record.updated_at,
        lines=[
            OrderLineResponse(
                name=line.name,
                category=line.category,
                qty=line.quantity,
                amount=line.amount,
                weight=line.weight,
                price_per_kg=line.price_per_kg,
                total=line.total,
            )
            for line in record.lines
        ],
    )


def _get_order_or_404(repo: OrderRepository, order_id: str):
    order = repo.get_by_order_id(order_id)
    if order is None:
        raise AppError(ErrorCatalog.ORDER_NOT_FOUND, details={"order_id": order_id})
    return order


@router.get("/taaza/orders", response_model=OrderListResponse)
def list_orders(
    request: Request,
    range_name: str = Query("today", alias="range", pattern="^(today|week|month|custom)$"),
    from_value: str | None = Query(None, alias="from"),
    to_value: str | None = Query(None, alias="to"),
    timezone: str | None = Query(None),
    search: str | None = Query(None),
    status: str | None = Query(None),
    channel: str | None = Query(None),
    db=Depends(get_db),
):
    tz = resolve_timezone(timezone)
    date_range = resolve_report_range(range_name, from_value, to_value, tz)
    validate_date_range(date_range, max_days=settings.REPORTS_MAX_DATE_RANGE_DAYS)
    records = load_orders(db, date_range, status=status, channel=channel, search=search)
    meta = OrderListMeta(
        timezone=str(tz),
        from_datetime=date_range.start_local,
        to_datetime=date_range.end_local,
        trace_id=getattr(request.state, "trace_id", None),
        filters={
            "range": range_name,
            "from": from_value,
            "to": to_value,
            "search": search,
            "status": status,
            "channel": channel,
        },
    )
    return OrderListResponse(meta=meta, total=len(records), rows=[order_response(record) for record in records])


@router.get("/taaza/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, db=Depends(get_db)):
    order = _get_order_or_404(OrderRepository(db), order_id)
    return order_response(order_to_record(order))


@router.patch("/taaza/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(order_id: str, payload: OrderStatusUpdateRequest, db=Depends(get_db)):
    repo = OrderRepository(db)
    order = _get_order_or_404(repo, order_id)
    previous = order.status
    order = repo.update_status(order, payload.status)
    log_json(
        logger,
        {"event": "order_status_changed", "order_id": order_id, "from": previous, "to": payload.status},
    )
    return order_response(order_to_record(order))


@router.delete("/taaza/orders/{order_id}", status_code=204)
def delete_order(order_id: str, db=Depends(get_db)):
    repo = OrderRepository(db)
    order = _get_order_or_404(repo, order_id)
    repo.delete(order)
    log_json(logger, {"event": "order_deleted", "order_id": order_id}, level=logging.WARNING)
    return Response(status_code=204)


@router.get("/taaza/orders/{order_id}/receipt", response_class=PlainTextResponse)
def order_receipt(order_id: str, timezone: str | None = Query(None), db=Depends(get_db)):
    order = _get_order_or_404(OrderRepository(db), order_id)
    tz = resolve_timezone(timezone) if timezone else None
    return PlainTextResponse(render_receipt(order_to_record(order), tz=tz))
