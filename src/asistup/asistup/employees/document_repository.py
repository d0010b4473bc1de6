from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import COLLECTION_EMPLOYEES
from ..database.store import DocumentStore
from .model import Employee
from .repository import EmployeeRepository


class DocumentEmployeeRepository(EmployeeRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        doc = self._store.get(COLLECTION_EMPLOYEES, employee_id)
        return Employee.from_document(doc) if doc else None

    def list_all(self) -> Sequence[Employee]:
        return [Employee.from_document(d) for d in self._store.list(COLLECTION_EMPLOYEES)]

    def replace(self, employee: Employee) -> None:
        self._store.put(COLLECTION_EMPLOYEES, employee.employee_id, employee.to_document())
