from __future__ import annotations

from datetime import timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from app.taaza.core.config import settings
from app.taaza.services.order_ids import parse_order_id
from app.taaza.services.order_records import OrderRecord


def bill_label(order_id: str) -> str:
    """ADM-20240305-00007 prints as A/20240305-00007."""
    parsed = parse_order_id(order_id)
    if parsed is None:
        return order_id
    return f"{parsed.prefix[0]}/{order_id[len(parsed.prefix) + 1:]}"


def _money(value) -> str:
    return f"{Decimal(str(value or 0)):.2f}"


def _qty(value) -> str:
    value = Decimal(str(value or 0))
    return f"{value.normalize():f}" if value == value.to_integral_value() else f"{value:.2f}"


def render_receipt(
    order: OrderRecord,
    *,
    shop_name: str | None = None,
    shop_phone: str | None = None,
    width: int | None = None,
    tz: ZoneInfo | None = None,
) -> str:
    width = width or settings.RECEIPT_WIDTH
    rule = "-" * width
    issued = order.created_at.replace(tzinfo=timezone.utc)
    if tz is not None:
        issued = issued.astimezone(tz)

    lines = [
        shop_name or settings.SHOP_NAME,
        f"PH.NO: {shop_phone or settings.SHOP_PHONE}",
        rule,
        f"TIME: {issued:%H:%M}   DATE: {issued:%d/%m/%Y}",
        f"BILL: {bill_label(order.order_id)}   TYPE: RETAIL",
        rule,
        "BILL OF SUPPLY".center(width).rstrip(),
        rule,
        "ITEM           QTY   RATE   TOTAL",
        rule,
    ]
    for line in order.lines:
        rate = line.price_per_kg or line.amount
        lines.append(
            f"{line.name[:14]:<14}"
            f"{_qty(line.quantity):>4}"
            f"{_money(rate):>7}"
            f"{_money(line.total):>8}"
        )
    total = _money(order.total)
    units = sum((line.weight or Decimal(line.quantity) for line in order.lines), Decimal("0"))
    lines.extend(
        [
            rule,
            f"TOTAL: {total}",
            f"ITEMS/QTY: {len(order.lines)}/{_qty(units)}",
            rule,
            f"TENDERED: {total}",
            f"{order.payment_method.upper()}: {total}",
            "REDEEM POINTS(OPTS): 0.00",
            rule,
            "THANK YOU.....VISIT AGAIN".center(width).rstrip(),
        ]
    )
    return "\n".join(lines) + "\n"
