import logging

from app.taaza.core.logging import log_json
from app.taaza.repos.categories import CategoryRepository
from app.taaza.services.order_records import OrderRecord

logger = logging.getLogger("taaza.stock")


class StockService:
    """Best-effort stock deduction after checkout.

    Failures are logged and swallowed; a sale is never undone because the
    category counters could not be updated.
    """

    def __init__(self, db):
        self.db = db
        self.repo = CategoryRepository(db)

    def decrement_stock(self, category_key: str, amount: float) -> None:
        try:
            category = self.repo.decrement_stock(category_key, amount)
        except Exception:
            self.db.rollback()
            logger.exception(
                "Failed to decrement category stock",
                extra={"category_key": category_key, "amount": amount},
            )
            log_json(
                logger,
                {"event": "stock_deduction_failed", "category_key": category_key, "amount": amount},
                level=logging.WARNING,
            )
            return
        if category is None:
            log_json(logger, {"event": "stock_category_missing", "category_key": category_key})

    def deduct_for_order(self, order: OrderRecord) -> None:
        for line in order.lines:
            if not line.category:
                continue
            self.decrement_stock(line.category, line.quantity)
