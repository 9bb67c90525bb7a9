import csv
import io
from datetime import datetime
from decimal import Decimal

from openpyxl import load_workbook

from app.taaza.services.exports import SUMMARY_COLUMNS, render_csv, render_xlsx, summary_dataset
from app.taaza.services.order_records import OrderLineRecord, OrderRecord
from app.taaza.services.sales_summary import summarize


def _report():
    line = OrderLineRecord(
        name="Chicken",
        quantity=1,
        amount=Decimal("120"),
        total=Decimal("120"),
        weight=Decimal("0.5"),
        price_per_kg=Decimal("240"),
        category="chicken",
    )
    order = OrderRecord(
        order_id="ADM-20240305-00001",
        channel="admin",
        sequence=1,
        payment_method="Cash",
        lines=(line,),
        total=Decimal("120"),
        created_at=datetime(2024, 3, 5),
    )
    return summarize([order])


def test_summary_csv_has_rows_and_overall():
    content = render_csv(summary_dataset(_report())).decode("utf-8")
    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == SUMMARY_COLUMNS
    assert rows[1] == ["Chicken", "chicken", "1", "0.50", "240.00", "120.00", "0.00", "120.00", "1"]
    assert rows[-1][0] == "Overall"
    assert rows[-1][7] == "120.00"


def test_summary_xlsx():
    content = render_xlsx(summary_dataset(_report()))
    workbook = load_workbook(io.BytesIO(content))
    sheet = workbook.active
    values = list(sheet.iter_rows(values_only=True))
    assert list(values[0]) == SUMMARY_COLUMNS
    assert values[1][0] == "Chicken"
    assert values[-1][0] == "Overall"
