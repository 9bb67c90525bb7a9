from datetime import datetime
from decimal import Decimal

from app.taaza.services.order_records import OrderLineRecord, OrderRecord
from app.taaza.services.sales_summary import summarize


def _order(order_id, method, lines):
    return OrderRecord(
        order_id=order_id,
        channel="admin",
        sequence=1,
        payment_method=method,
        lines=tuple(lines),
        total=sum((line.total for line in lines), Decimal("0")),
        created_at=datetime(2024, 3, 5),
    )


def test_egg_tray_cash_and_online():
    order_a = OrderRecord.from_mapping(
        {"orderId": "A", "paymentMethod": "cash", "items": [{"name": "Egg Tray", "qty": 2, "total": 360}]}
    )
    order_b = OrderRecord.from_mapping(
        {"orderId": "B", "paymentMethod": "online", "items": [{"name": "Egg Tray", "qty": 1, "total": 180}]}
    )

    report = summarize([order_a, order_b])

    assert len(report.rows) == 1
    row = report.row("Egg Tray")
    assert row.quantity == 3
    assert row.revenue == Decimal("540")
    assert row.cash == Decimal("360")
    assert row.online == Decimal("180")
    assert row.order_count == 2

    overall = report.overall
    assert overall.quantity == 3
    assert overall.revenue == Decimal("540")
    assert overall.cash == Decimal("360")
    assert overall.online == Decimal("180")
    assert overall.order_count == 2


def test_payment_method_is_normalized_and_unknown_counts_toward_total_only():
    line = OrderLineRecord(name="Chicken", quantity=1, amount=Decimal("200"), total=Decimal("200"))
    report = summarize(
        [
            _order("A", "  CASH ", [line]),
            _order("B", "Online", [line]),
            _order("C", "upi", [line]),
        ]
    )
    row = report.row("Chicken")
    assert row.revenue == Decimal("600")
    assert row.cash == Decimal("200")
    assert row.online == Decimal("200")
    assert row.order_count == 3
    assert report.overall.cash + report.overall.online == Decimal("400")


def test_missing_fields_coerce_to_zero_and_unknown_name():
    order = OrderRecord.from_mapping(
        {"orderId": "A", "paymentMethod": "cash", "products": [{"price": "abc"}, {"name": "Liver", "qty": "x"}]}
    )
    report = summarize([order])
    unknown = report.row("Unknown")
    assert unknown.quantity == 0
    assert unknown.revenue == Decimal("0")
    assert report.row("Liver").quantity == 0


def test_weights_average_price_and_first_appearance_order():
    chicken_kg = OrderLineRecord(
        name="Chicken",
        quantity=1,
        amount=Decimal("120"),
        total=Decimal("120"),
        weight=Decimal("0.5"),
        price_per_kg=Decimal("240"),
        category="chicken",
    )
    chicken_kg_2 = OrderLineRecord(
        name="Chicken",
        quantity=1,
        amount=Decimal("260"),
        total=Decimal("260"),
        weight=Decimal("1"),
        price_per_kg=Decimal("260"),
        category="poultry",
    )
    eggs = OrderLineRecord(name="Eggs", quantity=6, amount=Decimal("7"), total=Decimal("42"))

    report = summarize([_order("A", "cash", [eggs, chicken_kg]), _order("B", "cash", [chicken_kg_2])])

    assert [row.name for row in report.rows] == ["Eggs", "Chicken"]
    chicken = report.row("Chicken")
    assert chicken.weight == Decimal("1.5")
    assert chicken.avg_price_per_unit == Decimal("250.00")
    assert chicken.category == "chicken"
    assert report.row("Eggs").avg_price_per_unit == Decimal("7.00")
    assert report.overall.weight == Decimal("1.5")
    assert report.overall.order_count == 2


def test_empty_input():
    report = summarize([])
    assert report.rows == ()
    assert report.overall.revenue == Decimal("0")
    assert report.overall.order_count == 0


def test_created_at_accepts_iso_strings():
    order = OrderRecord.from_mapping({"orderId": "A", "createdAt": "2024-03-05T10:00:00Z", "items": []})
    assert order.created_at == datetime(2024, 3, 5, 10, 0)

    offset = OrderRecord.from_mapping({"orderId": "B", "createdAt": "2024-03-05T15:30:00+05:30", "items": []})
    assert offset.created_at == datetime(2024, 3, 5, 10, 0)

    garbage = OrderRecord.from_mapping({"orderId": "C", "createdAt": "yesterday", "items": []})
    assert garbage.created_at == datetime(1970, 1, 1)
