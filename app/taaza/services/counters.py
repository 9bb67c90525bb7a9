from __future__ import annotations

import logging
import time
from typing import Protocol

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from app.taaza.core.config import settings
from app.taaza.core.error_catalog import SequenceUnavailable
from app.taaza.core.logging import log_json
from app.taaza.core.metrics import metrics
from app.taaza.repos.counters import CounterRepository

logger = logging.getLogger("taaza.counters")


class CounterStore(Protocol):
    def increment_and_get(self, channel: str) -> int: ...


class SqlCounterStore:
    """Per-channel counters in the ``order_counters`` table.

    Each call runs in its own short transaction, independent of the caller's
    session: the number is consumed once this commits, whatever happens to
    the order afterwards. The increment is a single ``UPDATE ... SET current
    = current + 1`` so the row lock serializes concurrent callers; the first
    call for a channel inserts ``current = 1`` and a lost insert race is
    retried as an update.
    """

    def __init__(self, session_factory, *, max_retries: int | None = None, backoff_ms: int | None = None):
        self.session_factory = session_factory
        self.max_retries = settings.COUNTER_MAX_RETRIES if max_retries is None else max_retries
        self.backoff_ms = settings.COUNTER_RETRY_BACKOFF_MS if backoff_ms is None else backoff_ms

    def increment_and_get(self, channel: str) -> int:
        last_error: Exception | None = None
        attempts = 0
        for attempt in range(1, self.max_retries + 1):
            attempts = attempt
            try:
                return self._attempt(channel)
            except IntegrityError as exc:
                last_error = exc
            except OperationalError as exc:
                last_error = exc
                time.sleep(self.backoff_ms * attempt / 1000)
            except SQLAlchemyError as exc:
                last_error = exc
                break
        metrics.increment_sequence_unavailable(channel)
        log_json(
            logger,
            {
                "event": "sequence_unavailable",
                "channel": channel,
                "attempts": attempts,
                "error_class": last_error.__class__.__name__ if last_error else None,
                "error": str(last_error) if last_error else None,
            },
            level=logging.WARNING,
        )
        raise SequenceUnavailable({"channel": channel, "reason": last_error.__class__.__name__ if last_error else None})

    def _attempt(self, channel: str) -> int:
        with self.session_factory() as db:
            try:
                repo = CounterRepository(db)
                value = repo.bump(channel)
                if value is None:
                    value = repo.create(channel, 1)
                db.commit()
                return int(value)
            except Exception:
                db.rollback()
                raise

    def current(self, channel: str) -> int:
        with self.session_factory() as db:
            return CounterRepository(db).current(channel)
