import json
import logging
from datetime import datetime
from decimal import Decimal

from app.taaza.db.models import Category
from app.taaza.repos.categories import CategoryRepository
from app.taaza.services.order_records import OrderLineRecord, OrderRecord
from app.taaza.services.stock import StockService


def _order(*lines):
    return OrderRecord(
        order_id="CUS-20240305-00001",
        channel="customer",
        sequence=1,
        payment_method="Cash",
        lines=tuple(lines),
        total=Decimal("0"),
        created_at=datetime(2024, 3, 5),
    )


def _line(category, quantity):
    return OrderLineRecord(
        name="Item", quantity=quantity, amount=Decimal("1"), total=Decimal(quantity), category=category
    )


def test_deduct_floors_at_zero_and_falls_back_to_whole_quantity(db_session):
    repo = CategoryRepository(db_session)
    repo.create(Category(key="chicken", name="Chicken", whole_quantity=3, quantity_left=None))

    StockService(db_session).deduct_for_order(_order(_line("chicken", 2), _line(None, 5), _line("chicken", 4)))

    category = repo.get_by_key("chicken")
    assert category.quantity_left == 0
    assert category.whole_quantity == 0
    db_session.rollback()


def test_missing_category_is_logged(db_session, caplog):
    with caplog.at_level(logging.INFO, logger="taaza.stock"):
        StockService(db_session).deduct_for_order(_order(_line("seafood", 1)))
    db_session.rollback()
    events = [json.loads(record.getMessage()) for record in caplog.records if record.name == "taaza.stock"]
    assert events == [{"event": "stock_category_missing", "category_key": "seafood"}]


def test_failures_are_swallowed(db_session, monkeypatch, caplog):
    def broken(self, category_key, amount):
        raise RuntimeError("disk full")

    monkeypatch.setattr(CategoryRepository, "decrement_stock", broken)
    with caplog.at_level(logging.WARNING, logger="taaza.stock"):
        StockService(db_session).deduct_for_order(_order(_line("chicken", 1)))

    messages = [record.getMessage() for record in caplog.records if record.name == "taaza.stock"]
    assert any("stock_deduction_failed" in message for message in messages)


def test_manual_adjustment_leaves_quantity_left_alone(db_session):
    repo = CategoryRepository(db_session)
    category = repo.create(Category(key="mutton", name="Mutton", whole_quantity=5, quantity_left=2))

    category = repo.adjust_stock(category, 4)
    assert category.whole_quantity == 9
    assert category.quantity_left == 2

    category = repo.adjust_stock(category, -20)
    assert category.whole_quantity == 0
    assert category.quantity_left == 2
