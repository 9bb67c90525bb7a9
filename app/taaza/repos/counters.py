from sqlalchemy import select, update

from app.taaza.db.models import OrderCounter, utcnow


class CounterRepository:
    def __init__(self, db):
        self.db = db

    def bump(self, channel: str) -> int | None:
        """Increment in place; returns the new value or None when the row is missing."""
        result = self.db.execute(
            update(OrderCounter)
            .where(OrderCounter.channel == channel)
            .values(current=OrderCounter.current + 1, updated_at=utcnow())
        )
        if result.rowcount == 0:
            return None
        return self.db.execute(select(OrderCounter.current).where(OrderCounter.channel == channel)).scalar_one()

    def create(self, channel: str, current: int) -> int:
        self.db.add(OrderCounter(channel=channel, current=current, updated_at=utcnow()))
        self.db.flush()
        return current

    def current(self, channel: str) -> int:
        value = self.db.execute(select(OrderCounter.current).where(OrderCounter.channel == channel)).scalar()
        return int(value or 0)
