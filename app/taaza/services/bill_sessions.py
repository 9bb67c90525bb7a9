from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.taaza.core.error_catalog import AppError, ErrorCatalog
from app.taaza.services.billing import BillAccumulator


@dataclass
class BillSession:
    bill_id: str
    bill: BillAccumulator
    opened_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class BillSessionRegistry:
    """Open POS bills for this process, keyed by bill id.

    Bills are deliberately volatile: nothing here survives a restart.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, BillSession] = {}
        self._lock = threading.Lock()

    def open(self, payment_method: str | None = None) -> BillSession:
        session = BillSession(bill_id=uuid.uuid4().hex, bill=BillAccumulator(payment_method))
        with self._lock:
            self._sessions[session.bill_id] = session
        return session

    def get(self, bill_id: str) -> BillSession:
        with self._lock:
            session = self._sessions.get(bill_id)
        if session is None:
            raise AppError(ErrorCatalog.BILL_NOT_FOUND, details={"bill_id": bill_id})
        return session

    def discard(self, bill_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(bill_id, None)
        if removed is None:
            raise AppError(ErrorCatalog.BILL_NOT_FOUND, details={"bill_id": bill_id})


bill_sessions = BillSessionRegistry()
