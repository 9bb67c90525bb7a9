from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response

from app.taaza.core.deps import get_order_submitter
from app.taaza.routers.orders import order_response
from app.taaza.schemas.orders import OrderResponse
from app.taaza.schemas.pos import (
    BillLineCreate,
    BillLineResponse,
    BillOpenRequest,
    BillResponse,
    BillSubmitRequest,
    BillTotalsResponse,
    PaymentMethodRequest,
)
from app.taaza.services.bill_sessions import BillSession, bill_sessions
from app.taaza.services.billing import build_line
from app.taaza.services.order_ids import ADMIN_CHANNEL
from app.taaza.services.order_records import CustomerContact

router = APIRouter()


def _bill_response(session: BillSession) -> BillResponse:
    bill = session.bill
    totals = bill.totals()
    return BillResponse(
        bill_id=session.bill_id,
        payment_method=bill.payment_method,
        opened_at=session.opened_at,
        lines=[
            BillLineResponse(
                index=index,
                name=line.name,
                category=line.category,
                qty=line.quantity,
                amount=line.amount,
                weight=line.weight,
                price_per_kg=line.price_per_kg,
                total=line.total,
            )
            for index, line in enumerate(bill.lines)
        ],
        totals=BillTotalsResponse(
            item_count=totals.item_count,
            total_quantity=totals.total_quantity,
            subtotal=totals.subtotal,
            total_weight=totals.total_weight,
        ),
    )


@router.post("/taaza/pos/bills", response_model=BillResponse, status_code=201)
def open_bill(payload: BillOpenRequest | None = Body(None)):
    session = bill_sessions.open(payload.payment_method if payload else None)
    return _bill_response(session)


@router.get("/taaza/pos/bills/{bill_id}", response_model=BillResponse)
def get_bill(bill_id: str):
    return _bill_response(bill_sessions.get(bill_id))


@router.post("/taaza/pos/bills/{bill_id}/lines", response_model=BillResponse, status_code=201)
def add_bill_line(bill_id: str, payload: BillLineCreate):
    session = bill_sessions.get(bill_id)
    item = build_line(
        payload.name,
        quantity=payload.qty,
        amount=payload.amount,
        weight=payload.weight,
        price_per_kg=payload.price_per_kg,
        category=payload.category,
    )
    with session.lock:
        session.bill.add_line(item)
        return _bill_response(session)


@router.delete("/taaza/pos/bills/{bill_id}/lines/{index}", response_model=BillResponse)
def remove_bill_line(bill_id: str, index: int):
    session = bill_sessions.get(bill_id)
    with session.lock:
        session.bill.remove_line(index)
        return _bill_response(session)


@router.put("/taaza/pos/bills/{bill_id}/payment-method", response_model=BillResponse)
def select_payment_method(bill_id: str, payload: PaymentMethodRequest):
    session = bill_sessions.get(bill_id)
    with session.lock:
        session.bill.select_payment(payload.payment_method)
        return _bill_response(session)


@router.post("/taaza/pos/bills/{bill_id}/submit", response_model=OrderResponse, status_code=201)
def submit_bill(
    bill_id: str,
    payload: BillSubmitRequest | None = Body(None),
    submitter=Depends(get_order_submitter),
):
    payload = payload or BillSubmitRequest()
    session = bill_sessions.get(bill_id)
    customer = None
    if payload.customer_name or payload.phone or payload.notes:
        customer = CustomerContact(name=payload.customer_name, phone=payload.phone, notes=payload.notes)
    with session.lock:
        record = submitter.submit(
            session.bill,
            ADMIN_CHANNEL,
            payload.payment_method,
            customer=customer,
            with_receipt=payload.with_receipt,
        )
    bill_sessions.discard(bill_id)
    return order_response(record)


@router.delete("/taaza/pos/bills/{bill_id}", status_code=204)
def discard_bill(bill_id: str):
    bill_sessions.discard(bill_id)
    return Response(status_code=204)
