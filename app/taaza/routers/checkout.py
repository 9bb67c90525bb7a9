from __future__ import annotations

from fastapi import APIRouter, Depends

from app.taaza.core.deps import get_order_submitter
from app.taaza.db.session import get_db
from app.taaza.routers.orders import order_response
from app.taaza.schemas.orders import CheckoutRequest, OrderResponse
from app.taaza.services.billing import BillAccumulator, build_line
from app.taaza.services.order_ids import CUSTOMER_CHANNEL
from app.taaza.services.order_records import CustomerContact
from app.taaza.services.stock import StockService

router = APIRouter()


@router.post("/taaza/checkout", response_model=OrderResponse, status_code=201)
def checkout(payload: CheckoutRequest, db=Depends(get_db), submitter=Depends(get_order_submitter)):
    bill = BillAccumulator(payload.payment_method)
    for item in payload.items:
        bill.add_line(
            build_line(
                item.name,
                quantity=item.qty,
                amount=item.price,
                weight=item.weight,
                price_per_kg=item.price_per_kg,
                category=item.category,
            )
        )
    record = submitter.submit(
        bill,
        CUSTOMER_CHANNEL,
        customer=CustomerContact(name=payload.customer_name, phone=payload.phone, notes=payload.notes),
    )
    StockService(db).deduct_for_order(record)
    return order_response(record)
