from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required
from ..container import Container
from ..core.exceptions import ValidationError


def _optional_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Parámetro no válido: {name}")


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/admin/reports/attendance", methods=["GET"], endpoint="reports_attendance")
    @admin_required(container)
    def reports_attendance():
        year = _optional_int("year")
        report = reports.attendance(
            year=now_local().year if year is None else year,
            month=_optional_int("month"),
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify(
            {
                "year": report.year,
                "month": report.month,
                "employee_id": report.employee_id,
                "rows": report.rows,
                "summary": report.summary,
            }
        )

    @app.route("/api/admin/reports/payments", methods=["GET"], endpoint="reports_payments")
    @admin_required(container)
    def reports_payments():
        report = reports.payments(
            year=_optional_int("year"),
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify(
            {
                "year": report.year,
                "employee_id": report.employee_id,
                "rows": report.rows,
                "total": report.total,
            }
        )
