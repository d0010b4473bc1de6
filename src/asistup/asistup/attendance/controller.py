from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_instant
from ..common.http import admin_required, json_body
from ..container import Container
from ..core.enums import AttendanceType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _parse_timestamp(value) -> datetime:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Fecha y hora son obligatorias")
        try:
            return parse_instant(value)
        except ValueError:
            raise ValidationError("Fecha y hora no válidas")

    @app.route("/api/attendance/forgotten", methods=["POST"], endpoint="attendance_forgotten")
    def attendance_forgotten():
        data = json_body()
        try:
            mark_type = AttendanceType(data.get("type"))
        except ValueError:
            raise ValidationError("Tipo de marcación no válido")

        record = container.attendance_service.register_forgotten_mark(
            pin=str(data.get("pin") or ""),
            mark_type=mark_type,
            timestamp=_parse_timestamp(data.get("timestamp")),
            justification=str(data.get("justification") or ""),
            admin_secret=str(data.get("admin_secret") or ""),
            settings=container.settings_service.current(),
        )
        return jsonify({"success": True, "record": record.to_document()}), 201

    @app.route("/api/admin/employees/<employee_id>/attendance", methods=["GET"], endpoint="attendance_history")
    @admin_required(container)
    def attendance_history(employee_id: str):
        limit = request.args.get("limit", default=30, type=int)
        container.employee_service.get(employee_id)
        records = container.attendance_service.history(employee_id, limit=max(1, limit))
        return jsonify([r.to_document() for r in records])
