from __future__ import annotations

import itertools
import random
from datetime import date, datetime
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.asistup.asistup.container import build_container
from src.asistup.asistup.core.constants import COLLECTION_EMPLOYEES
from src.asistup.asistup.core.enums import OverSalaryType, Role
from src.asistup.asistup.database.store import InMemoryDocumentStore
from src.asistup.asistup.employees.model import Employee

MASTER_PASSWORD = "master-secret"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ManualHandle:
    def __init__(self, scheduler, delay, callback):
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Collects timeouts so tests decide when they fire."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def schedule(self, delay_seconds, callback):
        handle = ManualHandle(self, delay_seconds, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_pending(self) -> None:
        for handle in self.pending:
            handle.cancelled = True
            handle.callback()


class SequenceGenerator:
    def __init__(self, pins=()):
        self._ids = itertools.count(1)
        self._pins = list(pins)
        self._fallback = itertools.count(900001)

    def new_id(self) -> str:
        return f"id-{next(self._ids):04d}"

    def new_pin(self) -> str:
        if self._pins:
            return self._pins.pop(0)
        return str(next(self._fallback))


def make_employee(**overrides) -> Employee:
    data = dict(
        employee_id="emp-1",
        name="Ana",
        surname="Pérez",
        identification="0102030405",
        pin="123456",
        pin_changed=True,
        salary=Decimal("482.00"),
        is_fixed=True,
        is_affiliated=True,
        over_salary_type=OverSalaryType.MONTHLY,
        start_date=date(2022, 1, 10),
        birth_date=date(1990, 7, 14),
    )
    data.update(overrides)
    return Employee(**data)


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def clock():
    # Monday
    return FakeClock(datetime(2025, 3, 3, 8, 20, 0))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def generator():
    return SequenceGenerator()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def seed_employees(store):
    def _seed(*employees: Employee) -> None:
        for emp in employees:
            store.put(COLLECTION_EMPLOYEES, emp.employee_id, emp.to_document())

    return _seed


@pytest.fixture
def container(store, scheduler, generator, clock):
    return build_container(
        store=store,
        scheduler=scheduler,
        generator=generator,
        rng=random.Random(7),
        clock=clock,
        admin_password_hash=generate_password_hash(MASTER_PASSWORD),
    )


@pytest.fixture
def master_password() -> str:
    return MASTER_PASSWORD


@pytest.fixture
def super_admin() -> Role:
    return Role.SUPER_ADMIN
