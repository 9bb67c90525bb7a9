from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from app.taaza.core.error_catalog import EmptyBillError, OrderPersistFailed
from app.taaza.core.logging import log_json
from app.taaza.core.metrics import metrics
from app.taaza.repos.orders import OrderRepository, order_to_record
from app.taaza.services.billing import BillAccumulator
from app.taaza.services.counters import CounterStore
from app.taaza.services.order_ids import ADMIN_CHANNEL, OrderIdGenerator, channel_prefix
from app.taaza.services.order_records import CustomerContact, OrderLineRecord, OrderRecord, naive_utc

logger = logging.getLogger("taaza.orders")

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"


class OrderStore(Protocol):
    def save(self, record: OrderRecord) -> OrderRecord: ...


class SqlOrderStore:
    def __init__(self, db):
        self.db = db
        self.repo = OrderRepository(db)

    def save(self, record: OrderRecord) -> OrderRecord:
        try:
            return order_to_record(self.repo.create(record))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise OrderPersistFailed(
                {"order_id": record.order_id, "reason": exc.__class__.__name__}
            ) from exc


def initial_status(channel: str) -> str:
    # In-store bills are paid at the counter; storefront orders await fulfilment.
    return STATUS_COMPLETED if channel == ADMIN_CHANNEL else STATUS_PENDING


class OrderSubmitter:
    def __init__(
        self,
        counter_store: CounterStore,
        order_store: OrderStore,
        id_generator: OrderIdGenerator | None = None,
    ) -> None:
        self.counter_store = counter_store
        self.order_store = order_store
        self.id_generator = id_generator or OrderIdGenerator()

    def submit(
        self,
        bill: BillAccumulator,
        channel: str,
        payment_method: str | None = None,
        now: datetime | None = None,
        *,
        customer: CustomerContact | None = None,
        with_receipt: bool = False,
    ) -> OrderRecord:
        if bill.is_empty():
            raise EmptyBillError({"channel": channel})
        # Unknown channels are rejected before a number is burnt.
        channel_prefix(channel)
        now = now or datetime.now(timezone.utc)
        payment_method = payment_method or bill.payment_method

        sequence = self.counter_store.increment_and_get(channel)
        order_id = self.id_generator.generate(channel, sequence, now)
        totals = bill.totals()
        record = OrderRecord(
            order_id=order_id,
            channel=channel,
            sequence=sequence,
            payment_method=payment_method,
            lines=tuple(OrderLineRecord.from_line_item(line) for line in bill.lines),
            total=totals.subtotal,
            created_at=naive_utc(now),
            status=initial_status(channel),
            customer=customer,
            with_receipt=with_receipt,
        )

        try:
            saved = self.order_store.save(record)
        except OrderPersistFailed:
            metrics.increment_sequence_gap(channel)
            log_json(
                logger,
                {
                    "event": "sequence_gap",
                    "channel": channel,
                    "sequence": sequence,
                    "order_id": order_id,
                    "line_count": totals.item_count,
                },
                level=logging.WARNING,
            )
            raise

        bill.clear()
        metrics.increment_orders_submitted(channel)
        log_json(
            logger,
            {
                "event": "order_submitted",
                "channel": channel,
                "order_id": saved.order_id,
                "total": saved.total,
                "payment_method": saved.payment_method,
                "line_count": len(saved.lines),
            },
        )
        return saved
