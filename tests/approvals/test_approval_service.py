from __future__ import annotations

from datetime import datetime

import pytest

from src.asistup.asistup.attendance.model import AttendanceRecord
from src.asistup.asistup.core.enums import AttendanceStatus, AttendanceType, Role
from src.asistup.asistup.core.exceptions import AuthorizationError, NotFound, NotPending


def _pending(record_id: str = "att-1", **overrides) -> AttendanceRecord:
    data = dict(
        record_id=record_id,
        employee_id="emp-1",
        timestamp=datetime(2025, 3, 1, 8, 40, 0),
        type=AttendanceType.IN,
        status=AttendanceStatus.PENDING_APPROVAL,
        justification="Olvidó marcar",
    )
    data.update(overrides)
    return AttendanceRecord(**data)


def test_list_pending_only_returns_pending(container):
    container.attendance_repo.add(_pending("att-2", timestamp=datetime(2025, 3, 2, 8, 0, 0)))
    container.attendance_repo.add(_pending("att-1"))
    container.attendance_repo.add(_pending("att-3", status=AttendanceStatus.CONFIRMED))

    pending = container.approval_service.list_pending(current_role=Role.PARTIAL_ADMIN)

    assert [r.record_id for r in pending] == ["att-1", "att-2"]


def test_approve_confirms_and_stamps_validation(container, clock):
    container.attendance_repo.add(_pending())

    updated = container.approval_service.approve(current_role=Role.PARTIAL_ADMIN, record_id="att-1")

    assert updated.status == AttendanceStatus.CONFIRMED
    assert updated.validated_at == clock.now
    assert container.attendance_repo.get_by_id("att-1").status == AttendanceStatus.CONFIRMED


def test_reject_is_terminal(container, clock):
    container.attendance_repo.add(_pending())
    service = container.approval_service

    assert service.reject(current_role=Role.SUPER_ADMIN, record_id="att-1").status == AttendanceStatus.REJECTED
    decided = container.attendance_repo.get_by_id("att-1")
    clock.now = datetime(2025, 3, 3, 9, 0, 0)

    with pytest.raises(NotPending):
        service.approve(current_role=Role.SUPER_ADMIN, record_id="att-1")
    with pytest.raises(NotPending):
        service.reject(current_role=Role.SUPER_ADMIN, record_id="att-1")

    after = container.attendance_repo.get_by_id("att-1")
    assert after.status == AttendanceStatus.REJECTED
    assert after.validated_at == decided.validated_at


def test_second_approve_leaves_record_untouched(container, clock):
    container.attendance_repo.add(_pending())
    service = container.approval_service
    service.approve(current_role=Role.PARTIAL_ADMIN, record_id="att-1")
    decided = container.attendance_repo.get_by_id("att-1")
    clock.now = datetime(2025, 3, 3, 9, 0, 0)

    with pytest.raises(NotPending):
        service.approve(current_role=Role.SUPER_ADMIN, record_id="att-1")

    after = container.attendance_repo.get_by_id("att-1")
    assert after.status == AttendanceStatus.CONFIRMED
    assert after.validated_at == decided.validated_at


def test_decision_on_stale_read_does_not_overwrite(container, monkeypatch):
    container.attendance_repo.add(_pending())
    stale = container.attendance_repo.get_by_id("att-1")
    container.approval_service.approve(current_role=Role.PARTIAL_ADMIN, record_id="att-1")
    confirmed = container.attendance_repo.get_by_id("att-1")

    # a second reviewer loaded the record before the approval landed
    monkeypatch.setattr(container.attendance_repo, "get_by_id", lambda record_id: stale)

    with pytest.raises(NotPending):
        container.approval_service.reject(current_role=Role.SUPER_ADMIN, record_id="att-1")

    monkeypatch.undo()
    assert container.attendance_repo.get_by_id("att-1") == confirmed


def test_approve_missing_record(container):
    with pytest.raises(NotFound):
        container.approval_service.approve(current_role=Role.SUPER_ADMIN, record_id="ghost")


def test_employee_role_cannot_review(container):
    container.attendance_repo.add(_pending())

    with pytest.raises(AuthorizationError):
        container.approval_service.approve(current_role=Role.EMPLOYEE, record_id="att-1")
    with pytest.raises(AuthorizationError):
        container.approval_service.list_pending(current_role=Role.EMPLOYEE)


def test_delete_requires_super_admin(container):
    container.attendance_repo.add(_pending(status=AttendanceStatus.CONFIRMED))

    with pytest.raises(AuthorizationError):
        container.approval_service.delete(current_role=Role.PARTIAL_ADMIN, record_id="att-1")

    container.approval_service.delete(current_role=Role.SUPER_ADMIN, record_id="att-1")
    assert container.attendance_repo.get_by_id("att-1") is None

    with pytest.raises(NotFound):
        container.approval_service.delete(current_role=Role.SUPER_ADMIN, record_id="att-1")
