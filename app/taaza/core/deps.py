from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.taaza.db.session import get_db
from app.taaza.services.counters import SqlCounterStore
from app.taaza.services.orders import OrderSubmitter, SqlOrderStore


def get_counter_store(db=Depends(get_db)) -> SqlCounterStore:
    # Counter transactions never share the request session.
    return SqlCounterStore(sessionmaker(bind=db.get_bind(), autoflush=False, future=True))


def get_order_submitter(db=Depends(get_db), counter_store=Depends(get_counter_store)) -> OrderSubmitter:
    return OrderSubmitter(counter_store, SqlOrderStore(db))
