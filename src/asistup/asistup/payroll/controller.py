from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, optional_date
from ..common.http import admin_required, json_body
from ..container import Container
from ..core.exceptions import ValidationError
from ..employees.model import Employee

ROLL_CSV_FIELDS = [
    "employee_id",
    "full_name",
    "identification",
    "status",
    "salary",
    "reserve_fund",
    "thirteenth",
    "fourteenth",
    "total_income",
    "iess_contribution",
    "loans",
    "penalties",
    "total_expenses",
    "net_to_receive",
]


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_report_service

    def _int_or(value, default: int) -> int:
        # 0 is a value, not a missing field
        if value is None or value == "":
            return default
        return int(value)

    def _period(source) -> tuple[int, int, date]:
        today = now_local().date()
        try:
            month = _int_or(source.get("month"), today.month)
            year = _int_or(source.get("year"), today.year)
            as_of = optional_date(source.get("as_of")) or today
        except (TypeError, ValueError):
            raise ValidationError("Periodo no válido")
        return month, year, as_of

    def _write_roll_csv(*, report, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=ROLL_CSV_FIELDS)
        writer.writeheader()
        for row in report.rows:
            writer.writerow(row)
        writer.writerow({"full_name": "TOTAL", **report.totals})

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/payroll", methods=["GET"], endpoint="payroll_roll")
    @admin_required(container)
    def payroll_roll():
        month, year, as_of = _period(request.args)
        report = payroll.build_roll(month=month, year=year, as_of=as_of)
        return jsonify({"month": report.month, "year": report.year, "rows": report.rows, "totals": report.totals})

    @app.route("/api/admin/payroll.csv", methods=["GET"], endpoint="payroll_roll_csv")
    @admin_required(container)
    def payroll_roll_csv():
        month, year, as_of = _period(request.args)
        report = payroll.build_roll(month=month, year=year, as_of=as_of)
        return _write_roll_csv(report=report, filename=f"rol_pagos_{year}_{month:02d}.csv")

    @app.route("/api/admin/payroll/<employee_id>", methods=["GET"], endpoint="payroll_employee")
    @admin_required(container)
    def payroll_employee(employee_id: str):
        month, year, as_of = _period(request.args)
        breakdown = payroll.breakdown_for(employee_id, month=month, year=year, as_of=as_of)
        return jsonify(breakdown.rounded().to_dict())

    @app.route("/api/admin/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @admin_required(container)
    def payroll_preview():
        data = json_body()
        month, year, as_of = _period(data)
        doc = dict(data.get("employee") or {})
        doc.setdefault("id", "preview")
        try:
            employee = Employee.from_document(doc)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Datos de empleado no válidos: {exc}")
        breakdown = payroll.preview(employee, month=month, year=year, as_of=as_of)
        return jsonify(breakdown.rounded().to_dict())
