from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.taaza.core.error_catalog import AppError, ErrorCatalog
from app.taaza.repos.orders import OrderQueryFilters, OrderRepository, order_to_record
from app.taaza.services.order_records import OrderRecord
from app.taaza.services.orders import STATUS_COMPLETED, STATUS_PENDING


@dataclass(frozen=True)
class ReportDateRange:
    start_local: datetime
    end_local: datetime
    timezone_name: str

    @property
    def start_utc(self) -> datetime:
        return self.start_local.astimezone(timezone.utc).replace(tzinfo=None)

    @property
    def end_utc(self) -> datetime:
        return self.end_local.astimezone(timezone.utc).replace(tzinfo=None)

    @property
    def start_date(self) -> date:
        return self.start_local.date()

    @property
    def end_date(self) -> date:
        return self.end_local.date()


@dataclass(frozen=True)
class OrdersOverview:
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    completed_orders: int
    average_ticket: Decimal


def resolve_timezone(timezone_name: str | None) -> ZoneInfo | timezone:
    if not timezone_name or timezone_name in ("UTC", "Z", "Etc/UTC"):
        return timezone.utc
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "invalid timezone"}) from exc


def _parse_datetime_or_date(value: str | None, tz, *, default: datetime) -> tuple[datetime, bool]:
    if not value:
        return default, False
    normalized = value.replace("Z", "+00:00")
    if "T" in normalized or ":" in normalized:
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError as exc:
            raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "invalid datetime"}) from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=tz), False
        return parsed.astimezone(tz), False
    try:
        parsed_date = date.fromisoformat(normalized)
    except ValueError as exc:
        raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "invalid date"}) from exc
    return datetime.combine(parsed_date, time.min, tzinfo=tz), True


def _end_of_day(day: date, tz) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def preset_date_range(preset: str, tz, *, now: datetime | None = None) -> ReportDateRange:
    now_local = (now or datetime.now(timezone.utc)).astimezone(tz)
    today = now_local.date()
    if preset == "today":
        start, end = today, today
    elif preset == "week":
        # Weeks start on Monday.
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
    elif preset == "month":
        start = today.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        end = next_month - timedelta(days=1)
    else:
        raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "invalid range", "range": preset})
    return ReportDateRange(
        start_local=datetime.combine(start, time.min, tzinfo=tz),
        end_local=_end_of_day(end, tz),
        timezone_name=str(tz),
    )


def resolve_date_range(from_value: str | None, to_value: str | None, tz, *, now: datetime | None = None) -> ReportDateRange:
    now_local = (now or datetime.now(timezone.utc)).astimezone(tz)
    start_local, _ = _parse_datetime_or_date(
        from_value, tz, default=now_local.replace(hour=0, minute=0, second=0, microsecond=0)
    )
    end_local, to_is_date = _parse_datetime_or_date(to_value, tz, default=now_local)
    if to_is_date:
        end_local = end_local + timedelta(days=1) - timedelta(microseconds=1)
    if end_local < start_local:
        raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "to must be after from"})
    return ReportDateRange(start_local=start_local, end_local=end_local, timezone_name=str(tz))


def resolve_report_range(
    range_name: str | None,
    from_value: str | None,
    to_value: str | None,
    tz,
    *,
    now: datetime | None = None,
) -> ReportDateRange:
    if range_name and range_name != "custom":
        return preset_date_range(range_name, tz, now=now)
    return resolve_date_range(from_value, to_value, tz, now=now)


def validate_date_range(date_range: ReportDateRange, *, max_days: int) -> None:
    if max_days <= 0:
        return
    days = (date_range.end_date - date_range.start_date).days + 1
    if days > max_days:
        raise AppError(
            ErrorCatalog.VALIDATION_ERROR,
            details={
                "message": "date range exceeds limit",
                "reason_code": "REPORT_DATE_RANGE_LIMIT_EXCEEDED",
                "max_days": max_days,
            },
        )


def load_orders(
    db,
    date_range: ReportDateRange | None,
    *,
    status: str | None = None,
    channel: str | None = None,
    search: str | None = None,
) -> list[OrderRecord]:
    filters = OrderQueryFilters(
        start_utc=date_range.start_utc if date_range else None,
        end_utc=date_range.end_utc if date_range else None,
        status=status,
        channel=channel,
        search=search,
    )
    return [order_to_record(order) for order in OrderRepository(db).list_orders(filters)]


def orders_overview(orders: Iterable[OrderRecord]) -> OrdersOverview:
    orders = list(orders)
    total_revenue = sum((order.total for order in orders), Decimal("0.00"))
    average = total_revenue / Decimal(len(orders)) if orders else Decimal("0.00")
    return OrdersOverview(
        total_orders=len(orders),
        total_revenue=total_revenue,
        pending_orders=sum(1 for order in orders if order.status == STATUS_PENDING),
        completed_orders=sum(1 for order in orders if order.status == STATUS_COMPLETED),
        average_ticket=average.quantize(Decimal("0.01")),
    )
