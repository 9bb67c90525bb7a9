from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from app.taaza.services.order_records import OrderLineRecord, OrderRecord
from app.taaza.services.receipts import bill_label, render_receipt


def _order():
    return OrderRecord(
        order_id="ADM-20240305-00007",
        channel="admin",
        sequence=7,
        payment_method="Cash",
        lines=(
            OrderLineRecord(
                name="Chicken Curry Cut Skinless",
                quantity=1,
                amount=Decimal("120"),
                total=Decimal("120"),
                weight=Decimal("0.5"),
                price_per_kg=Decimal("240"),
            ),
            OrderLineRecord(name="Eggs", quantity=6, amount=Decimal("7"), total=Decimal("42")),
        ),
        total=Decimal("162"),
        created_at=datetime(2024, 3, 5, 4, 30),
    )


def test_bill_label():
    assert bill_label("ADM-20240305-00007") == "A/20240305-00007"
    assert bill_label("CUS-20240101-100000") == "C/20240101-100000"
    assert bill_label("legacy-123") == "legacy-123"


def test_receipt_layout():
    text = render_receipt(_order(), shop_name="TAAZA", shop_phone="123", width=40, tz=ZoneInfo("Asia/Kolkata"))
    lines = text.splitlines()

    assert lines[0] == "TAAZA"
    assert lines[1] == "PH.NO: 123"
    assert "TIME: 10:00   DATE: 05/03/2024" in lines
    assert "BILL: A/20240305-00007   TYPE: RETAIL" in lines
    assert "-" * 40 in lines
    assert "Chicken Curry    1 240.00  120.00" in lines
    assert "Eggs             6   7.00   42.00" in lines
    assert "TOTAL: 162.00" in lines
    assert "ITEMS/QTY: 2/6.50" in lines
    assert "CASH: 162.00" in lines
    assert lines[-1].strip() == "THANK YOU.....VISIT AGAIN"
    assert all(len(line) <= 40 for line in lines)
