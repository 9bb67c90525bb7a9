from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from app.taaza.services.billing import ZERO, LineItem, to_decimal, to_int


def naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


EPOCH = datetime(1970, 1, 1)


def parse_created_at(value) -> datetime:
    """Accept datetimes or ISO-8601 strings (trailing Z allowed); anything else is the epoch."""
    if isinstance(value, datetime):
        return naive_utc(value)
    if isinstance(value, str) and value.strip():
        try:
            return naive_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return EPOCH
    return EPOCH


def _first(data: dict, *keys):
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(frozen=True)
class CustomerContact:
    name: str | None = None
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class OrderLineRecord:
    name: str
    quantity: int
    amount: Decimal
    total: Decimal
    weight: Decimal | None = None
    price_per_kg: Decimal | None = None
    category: str | None = None

    @classmethod
    def from_line_item(cls, item: LineItem) -> "OrderLineRecord":
        return cls(
            name=item.name,
            quantity=item.quantity,
            amount=item.amount,
            total=item.total,
            weight=item.weight,
            price_per_kg=item.price_per_kg,
            category=item.category,
        )

    @classmethod
    def from_mapping(cls, data: dict) -> "OrderLineRecord":
        """Normalize a loosely shaped line (imported or legacy document)."""
        quantity = to_int(_first(data, "qty", "quantity"))
        amount = to_decimal(_first(data, "amount", "price", "rate", "sp"))
        raw_total = _first(data, "total")
        weight = _first(data, "weight")
        price_per_kg = _first(data, "price_per_kg", "pricePerKg")
        return cls(
            name=str(_first(data, "name") or "Unknown"),
            quantity=quantity,
            amount=amount,
            total=to_decimal(raw_total) if raw_total is not None else amount * quantity,
            weight=to_decimal(weight) if weight is not None else None,
            price_per_kg=to_decimal(price_per_kg) if price_per_kg is not None else None,
            category=_first(data, "category"),
        )


@dataclass(frozen=True)
class OrderRecord:
    order_id: str
    channel: str
    sequence: int
    payment_method: str
    lines: tuple[OrderLineRecord, ...]
    total: Decimal
    created_at: datetime
    status: str | None = None
    customer: CustomerContact | None = None
    with_receipt: bool = False
    updated_at: datetime | None = None

    @property
    def total_quantity(self) -> int:
        return sum((line.quantity for line in self.lines), 0)

    @property
    def total_weight(self) -> Decimal:
        return sum((line.weight or ZERO for line in self.lines), ZERO)

    @classmethod
    def from_mapping(cls, data: dict) -> "OrderRecord":
        items = _first(data, "lines", "products", "items") or []
        customer = None
        if any(data.get(key) for key in ("customer", "phone", "notes")):
            customer = CustomerContact(name=data.get("customer"), phone=data.get("phone"), notes=data.get("notes"))
        created_at = data.get("created_at") or data.get("createdAt")
        return cls(
            order_id=str(_first(data, "order_id", "orderId", "id") or ""),
            channel=str(data.get("channel") or ""),
            sequence=to_int(data.get("sequence")),
            payment_method=str(_first(data, "payment_method", "paymentMethod") or ""),
            lines=tuple(OrderLineRecord.from_mapping(item) for item in items),
            total=to_decimal(data.get("total")),
            created_at=parse_created_at(created_at),
            status=data.get("status"),
            customer=customer,
        )
