from sqlalchemy import select

from app.taaza.db.models import Category, utcnow


class CategoryRepository:
    def __init__(self, db):
        self.db = db

    def list_categories(self) -> list[Category]:
        return self.db.execute(select(Category).order_by(Category.name)).scalars().all()

    def get_by_key(self, key: str) -> Category | None:
        return self.db.execute(select(Category).where(Category.key == key)).scalars().first()

    def create(self, category: Category) -> Category:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def adjust_stock(self, category: Category, delta: float) -> Category:
        # Manual adjustments touch only the stocked total.
        category.whole_quantity = max(0.0, float(category.whole_quantity or 0) + delta)
        return self._save(category)

    def decrement_stock(self, category_key: str, amount: float) -> Category | None:
        category = self.get_by_key(category_key)
        if category is None:
            return None
        left = category.quantity_left if category.quantity_left is not None else category.whole_quantity
        category.whole_quantity = max(0.0, float(category.whole_quantity or 0) - float(amount))
        category.quantity_left = max(0.0, float(left or 0) - float(amount))
        return self._save(category)

    def _save(self, category: Category) -> Category:
        category.updated_at = utcnow()
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category
