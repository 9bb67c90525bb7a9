from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from openpyxl import Workbook

from app.taaza.services.sales_summary import SummaryReport

SUMMARY_COLUMNS = [
    "Product",
    "Category",
    "Total Quantity",
    "Total Weight",
    "Avg Price/Kg",
    "Revenue (Cash)",
    "Revenue (Online)",
    "Revenue (All)",
    "Order Count",
]

CONTENT_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@dataclass
class ExportDataset:
    columns: list[str]
    rows: list[list[object]]


def summary_dataset(report: SummaryReport) -> ExportDataset:
    rows: list[list[object]] = [
        [
            row.name,
            row.category,
            row.quantity,
            row.weight or "-",
            row.avg_price_per_unit if row.avg_price_per_unit is not None else "-",
            row.cash,
            row.online,
            row.revenue,
            row.order_count,
        ]
        for row in report.rows
    ]
    overall = report.overall
    rows.append(
        [
            "Overall",
            "",
            overall.quantity,
            overall.weight or "-",
            "",
            overall.cash,
            overall.online,
            overall.revenue,
            overall.order_count,
        ]
    )
    return ExportDataset(columns=list(SUMMARY_COLUMNS), rows=rows)


def _format_cell(value: object) -> object:
    if isinstance(value, Decimal):
        return value.quantize(Decimal("0.01"))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def render_csv(dataset: ExportDataset) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(dataset.columns)
    for row in dataset.rows:
        writer.writerow([_format_cell(value) for value in row])
    return buffer.getvalue().encode("utf-8")


def render_xlsx(dataset: ExportDataset, *, title: str = "summary") -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title
    worksheet.append(dataset.columns)
    for row in dataset.rows:
        worksheet.append([_format_cell(value) for value in row])
    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def render(dataset: ExportDataset, export_format: str) -> bytes:
    if export_format == "xlsx":
        return render_xlsx(dataset)
    return render_csv(dataset)
