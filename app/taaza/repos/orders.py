from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from app.taaza.db.models import Order, OrderLine, utcnow
from app.taaza.services.order_records import CustomerContact, OrderLineRecord, OrderRecord


@dataclass(frozen=True)
class OrderQueryFilters:
    start_utc: datetime | None = None
    end_utc: datetime | None = None
    status: str | None = None
    channel: str | None = None
    search: str | None = None


def _decimal(value) -> Decimal:
    return Decimal(str(value or 0))


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def order_to_record(order: Order) -> OrderRecord:
    customer = None
    if order.customer_name or order.phone or order.notes:
        customer = CustomerContact(name=order.customer_name, phone=order.phone, notes=order.notes)
    return OrderRecord(
        order_id=order.order_id,
        channel=order.channel,
        sequence=order.sequence,
        payment_method=order.payment_method,
        lines=tuple(
            OrderLineRecord(
                name=line.name,
                quantity=line.qty,
                amount=_decimal(line.amount),
                total=_decimal(line.total),
                weight=_optional_decimal(line.weight),
                price_per_kg=_optional_decimal(line.price_per_kg),
                category=line.category,
            )
            for line in order.lines
        ),
        total=_decimal(order.total),
        created_at=order.created_at,
        status=order.status,
        customer=customer,
        with_receipt=order.with_receipt,
        updated_at=order.updated_at,
    )


class OrderRepository:
    def __init__(self, db):
        self.db = db

    def create(self, record: OrderRecord) -> Order:
        customer = record.customer or CustomerContact()
        order = Order(
            order_id=record.order_id,
            channel=record.channel,
            sequence=record.sequence,
            payment_method=record.payment_method,
            total=float(record.total),
            item_count=len(record.lines),
            total_quantity=record.total_quantity,
            total_weight=float(record.total_weight),
            status=record.status,
            customer_name=customer.name,
            phone=customer.phone,
            notes=customer.notes,
            with_receipt=record.with_receipt,
            created_at=record.created_at,
        )
        order.lines = [
            OrderLine(
                position=position,
                name=line.name,
                category=line.category,
                qty=line.quantity,
                amount=float(line.amount),
                weight=float(line.weight) if line.weight is not None else None,
                price_per_kg=float(line.price_per_kg) if line.price_per_kg is not None else None,
                total=float(line.total),
            )
            for position, line in enumerate(record.lines)
        ]
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_by_order_id(self, order_id: str) -> Order | None:
        return (
            self.db.execute(select(Order).options(selectinload(Order.lines)).where(Order.order_id == order_id))
            .scalars()
            .first()
        )

    def list_orders(self, filters: OrderQueryFilters) -> list[Order]:
        query = select(Order).options(selectinload(Order.lines))
        if filters.start_utc is not None:
            query = query.where(Order.created_at >= filters.start_utc)
        if filters.end_utc is not None:
            query = query.where(Order.created_at <= filters.end_utc)
        if filters.status:
            query = query.where(Order.status == filters.status)
        if filters.channel:
            query = query.where(Order.channel == filters.channel)
        if filters.search:
            pattern = f"%{filters.search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Order.order_id).like(pattern),
                    func.lower(func.coalesce(Order.customer_name, "")).like(pattern),
                )
            )
        return self.db.execute(query.order_by(Order.created_at.desc(), Order.sequence.desc())).scalars().all()

    def update_status(self, order: Order, status: str) -> Order:
        order.status = status
        order.updated_at = utcnow()
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.commit()
