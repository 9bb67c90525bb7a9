from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from app.taaza.services.billing import ZERO, to_decimal, to_int
from app.taaza.services.order_records import OrderRecord

UNKNOWN_ITEM = "Unknown"
CASH = "cash"
ONLINE = "online"


@dataclass
class _Group:
    name: str
    category: str
    quantity: int = 0
    weight: Decimal = ZERO
    revenue: Decimal = ZERO
    cash: Decimal = ZERO
    online: Decimal = ZERO
    price_sum: Decimal = ZERO
    price_count: int = 0
    order_ids: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class SummaryRow:
    name: str
    category: str
    quantity: int
    weight: Decimal
    revenue: Decimal
    cash: Decimal
    online: Decimal
    order_count: int
    avg_price_per_unit: Decimal | None


@dataclass(frozen=True)
class SummaryTotals:
    quantity: int
    weight: Decimal
    revenue: Decimal
    cash: Decimal
    online: Decimal
    order_count: int


@dataclass(frozen=True)
class SummaryReport:
    rows: tuple[SummaryRow, ...]
    overall: SummaryTotals

    def row(self, name: str) -> SummaryRow | None:
        return next((row for row in self.rows if row.name == name), None)


def _observed_unit_price(line) -> Decimal | None:
    price = to_decimal(line.price_per_kg)
    if price > 0:
        return price
    amount = to_decimal(line.amount)
    return amount if amount > 0 else None


def summarize(orders: Iterable[OrderRecord]) -> SummaryReport:
    groups: dict[str, _Group] = {}
    overall_orders: set[str] = set()
    overall_quantity = 0
    overall_weight = ZERO
    overall_revenue = ZERO
    overall_cash = ZERO
    overall_online = ZERO

    for order in orders:
        method = (order.payment_method or "").strip().lower()
        for line in order.lines:
            key = line.name or UNKNOWN_ITEM
            group = groups.get(key)
            if group is None:
                group = groups[key] = _Group(name=key, category=line.category or "")

            quantity = to_int(line.quantity)
            weight = to_decimal(line.weight)
            total = to_decimal(line.total)

            group.quantity += quantity
            group.weight += weight
            group.revenue += total
            group.order_ids.add(order.order_id)
            price = _observed_unit_price(line)
            if price is not None:
                group.price_sum += price
                group.price_count += 1
            if method == CASH:
                group.cash += total
                overall_cash += total
            elif method == ONLINE:
                group.online += total
                overall_online += total

            overall_quantity += quantity
            overall_weight += weight
            overall_revenue += total
            overall_orders.add(order.order_id)

    rows = tuple(
        SummaryRow(
            name=group.name,
            category=group.category,
            quantity=group.quantity,
            weight=group.weight,
            revenue=group.revenue,
            cash=group.cash,
            online=group.online,
            order_count=len(group.order_ids),
            avg_price_per_unit=(
                (group.price_sum / group.price_count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
                if group.price_count
                else None
            ),
        )
        for group in groups.values()
    )
    return SummaryReport(
        rows=rows,
        overall=SummaryTotals(
            quantity=overall_quantity,
            weight=overall_weight,
            revenue=overall_revenue,
            cash=overall_cash,
            online=overall_online,
            order_count=len(overall_orders),
        ),
    )
