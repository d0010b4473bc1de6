from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import COLLECTION_PAYMENTS
from ..database.store import DocumentStore
from .model import Payment
from .repository import PaymentRepository


class DocumentPaymentRepository(PaymentRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def list_for_period(
        self,
        *,
        month: int,
        year: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[Payment]:
        out = []
        for doc in self._store.list(COLLECTION_PAYMENTS):
            p = Payment.from_document(doc)
            if p.month != month:
                continue
            if year is not None and p.year is not None and p.year != year:
                continue
            if employee_id is not None and p.employee_id != employee_id:
                continue
            out.append(p)
        return out

    def list_paid(
        self,
        *,
        year: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[Payment]:
        out = []
        for doc in self._store.list(COLLECTION_PAYMENTS):
            p = Payment.from_document(doc)
            if not p.is_paid:
                continue
            if year is not None and p.ledger_year != year:
                continue
            if employee_id is not None and p.employee_id != employee_id:
                continue
            out.append(p)
        out.sort(key=lambda p: (p.date or "", p.payment_id))
        return out
