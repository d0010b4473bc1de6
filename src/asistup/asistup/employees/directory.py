from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..core.constants import COLLECTION_EMPLOYEES
from ..database.store import Document, DocumentStore
from .model import Employee

logger = logging.getLogger(__name__)


class EmployeeDirectory:
    """Latest employee snapshot, kept current by a store subscription.

    PIN lookups are served from memory; the store is never polled.
    """

    def __init__(self, store: DocumentStore):
        self._lock = threading.Lock()
        self._employees: list[Employee] = []
        self._unsubscribe = store.subscribe(COLLECTION_EMPLOYEES, self._on_snapshot)

    def _on_snapshot(self, docs: list[Document]) -> None:
        employees = [Employee.from_document(d) for d in docs]
        with self._lock:
            self._employees = employees
        logger.debug("Employee snapshot refreshed (%d documents)", len(employees))

    def snapshot(self) -> Sequence[Employee]:
        with self._lock:
            return list(self._employees)

    def active_with_pin(self, pin: str) -> list[Employee]:
        return [e for e in self.snapshot() if e.is_active and e.pin == pin]

    def find_active_by_pin(self, pin: str) -> Optional[Employee]:
        """First active employee whose PIN matches.

        PINs are unique among active employees (enforced on write); should a
        duplicate slip in through an external writer, the lowest id wins.
        """
        matches = sorted(self.active_with_pin(pin), key=lambda e: e.employee_id)
        if len(matches) > 1:
            logger.warning("PIN shared by %d active employees; using %s", len(matches), matches[0].employee_id)
        return matches[0] if matches else None

    def close(self) -> None:
        self._unsubscribe()
