"""In-memory POS bill.

Line totals are fixed when the line is built; bill aggregates are always
recomputed from the current lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from app.taaza.core.config import settings
from app.taaza.core.error_catalog import IndexOutOfRange, InvalidLineItem

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_decimal(value, default: Decimal = ZERO) -> Decimal:
    """Lenient numeric coercion for historical or hand-typed values."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    return parsed if parsed.is_finite() else default


def to_int(value, default: int = 0) -> int:
    parsed = to_decimal(value, Decimal(default))
    return int(parsed.to_integral_value(rounding=ROUND_HALF_UP))


def _whole_or_decimal(value) -> int | Decimal:
    # Fractional quantities stay Decimal so add_line can reject them.
    parsed = to_decimal(value)
    return int(parsed) if parsed == parsed.to_integral_value() else parsed


@dataclass(frozen=True)
class LineItem:
    name: str
    quantity: int = 1
    amount: Decimal = ZERO
    weight: Decimal | None = None
    price_per_kg: Decimal | None = None
    category: str | None = None
    total: Decimal = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name or "").strip())
        object.__setattr__(self, "quantity", 1 if self.quantity is None else _whole_or_decimal(self.quantity))
        object.__setattr__(self, "amount", to_decimal(self.amount))
        if self.weight is not None:
            object.__setattr__(self, "weight", to_decimal(self.weight))
        if self.price_per_kg is not None:
            object.__setattr__(self, "price_per_kg", to_decimal(self.price_per_kg))
        object.__setattr__(self, "total", self.amount * self.quantity)

    @classmethod
    def from_weight(cls, name: str, price_per_kg, weight, *, quantity: int = 1, category: str | None = None) -> "LineItem":
        rate = to_decimal(price_per_kg)
        kilos = to_decimal(weight)
        return cls(
            name=name,
            quantity=quantity,
            amount=(rate * kilos).quantize(CENTS, rounding=ROUND_HALF_UP),
            weight=kilos,
            price_per_kg=rate,
            category=category,
        )

    @classmethod
    def from_amount(cls, name: str, price_per_kg, amount, *, quantity: int = 1, category: str | None = None) -> "LineItem":
        rate = to_decimal(price_per_kg)
        money = to_decimal(amount)
        weight = (money / rate).quantize(CENTS, rounding=ROUND_HALF_UP) if rate else None
        return cls(
            name=name,
            quantity=quantity,
            amount=money,
            weight=weight,
            price_per_kg=rate or None,
            category=category,
        )


def build_line(
    name: str,
    *,
    quantity=1,
    amount=None,
    weight=None,
    price_per_kg=None,
    category: str | None = None,
) -> LineItem:
    """Pick the keypad path from whichever of amount/weight was entered."""
    if price_per_kg is not None and weight is not None and amount is None:
        return LineItem.from_weight(name, price_per_kg, weight, quantity=quantity, category=category)
    if price_per_kg is not None and amount is not None and weight is None:
        return LineItem.from_amount(name, price_per_kg, amount, quantity=quantity, category=category)
    return LineItem(
        name=name,
        quantity=quantity,
        amount=amount,
        weight=weight,
        price_per_kg=price_per_kg,
        category=category,
    )


@dataclass(frozen=True)
class BillTotals:
    item_count: int
    total_quantity: int
    subtotal: Decimal
    total_weight: Decimal


class BillAccumulator:
    def __init__(self, payment_method: str | None = None, lines: Iterable[LineItem] = ()) -> None:
        self.payment_method = payment_method or settings.DEFAULT_PAYMENT_METHOD
        self._lines: list[LineItem] = []
        for line in lines:
            self.add_line(line)

    @property
    def lines(self) -> tuple[LineItem, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def add_line(self, item: LineItem) -> LineItem:
        if not item.name:
            raise InvalidLineItem("name must not be empty")
        if not isinstance(item.quantity, int):
            raise InvalidLineItem("quantity must be a whole number", quantity=str(item.quantity))
        if item.quantity < 1:
            raise InvalidLineItem("quantity must be at least 1", quantity=item.quantity)
        if item.amount < 0:
            raise InvalidLineItem("amount must be >= 0", amount=str(item.amount))
        self._lines.append(item)
        return item

    def remove_line(self, index: int) -> LineItem:
        if index < 0 or index >= len(self._lines):
            raise IndexOutOfRange(index, len(self._lines))
        return self._lines.pop(index)

    def select_payment(self, method: str) -> None:
        self.payment_method = method

    def totals(self) -> BillTotals:
        return BillTotals(
            item_count=len(self._lines),
            total_quantity=sum((line.quantity for line in self._lines), 0),
            subtotal=sum((line.total for line in self._lines), ZERO),
            total_weight=sum((line.weight or ZERO for line in self._lines), ZERO),
        )

    def clear(self) -> None:
        self._lines.clear()
