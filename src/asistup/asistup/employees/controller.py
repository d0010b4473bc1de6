from __future__ import annotations

from decimal import Decimal

from flask import Flask, g, jsonify

from ..common.datetime_utils import optional_date
from ..common.http import admin_required, json_body
from ..common.validators import require_decimal
from ..container import Container
from ..core.enums import OverSalaryType, Role, TerminationReason
from ..core.exceptions import ValidationError
from .model import Employee


def employee_json(emp: Employee, *, include_pin: bool = False) -> dict:
    doc = emp.to_document()
    if not include_pin:
        doc.pop("pin", None)
    doc["full_name"] = emp.full_name
    return doc


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    def _date(value, field_name: str):
        try:
            return optional_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} no es una fecha válida (YYYY-MM-DD)")

    def _enum(enum_cls, value, field_name: str):
        try:
            return enum_cls(value)
        except ValueError:
            raise ValidationError(f"{field_name} no es válido")

    @app.route("/api/admin/employees", methods=["GET"], endpoint="employees_list")
    @admin_required(container)
    def employees_list():
        return jsonify([employee_json(e) for e in employees.list_all()])

    @app.route("/api/admin/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    @admin_required(container)
    def employees_get(employee_id: str):
        return jsonify(employee_json(employees.get(employee_id)))

    @app.route("/api/admin/employees", methods=["POST"], endpoint="employees_create")
    @admin_required(container)
    def employees_create():
        data = json_body()
        emp = employees.create(
            current_role=g.current_role,
            name=str(data.get("name") or ""),
            surname=str(data.get("surname") or ""),
            identification=str(data.get("identification") or ""),
            salary=data.get("salary", "0"),
            role=_enum(Role, data.get("role", Role.EMPLOYEE.value), "Rol"),
            is_fixed=bool(data.get("is_fixed", True)),
            is_affiliated=bool(data.get("is_affiliated", True)),
            over_salary_type=_enum(
                OverSalaryType, data.get("over_salary_type", OverSalaryType.ACCUMULATE.value), "Fondo de reserva"
            ),
            start_date=_date(data.get("start_date"), "Fecha de ingreso"),
            birth_date=_date(data.get("birth_date"), "Fecha de nacimiento"),
        )
        # the temporary PIN is shown once so it can be handed to the employee
        return jsonify({"success": True, "employee": employee_json(emp, include_pin=True)}), 201

    @app.route("/api/admin/employees/<employee_id>", methods=["PUT"], endpoint="employees_replace")
    @admin_required(container)
    def employees_replace(employee_id: str):
        data = json_body()
        current = employees.get(employee_id)
        doc = {**current.to_document(), **data, "id": employee_id}
        require_decimal(doc.get("salary"), "Sueldo", minimum=Decimal("0"))
        try:
            candidate = Employee.from_document(doc)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Datos de empleado no válidos: {exc}")
        emp = employees.replace(current_role=g.current_role, employee=candidate)
        return jsonify({"success": True, "employee": employee_json(emp)})

    @app.route("/api/admin/employees/<employee_id>/terminate", methods=["POST"], endpoint="employees_terminate")
    @admin_required(container)
    def employees_terminate(employee_id: str):
        data = json_body()
        termination_date = _date(data.get("termination_date"), "Fecha de salida")
        if termination_date is None:
            raise ValidationError("Fecha de salida es obligatoria")
        emp = employees.terminate(
            current_role=g.current_role,
            employee_id=employee_id,
            termination_date=termination_date,
            reason=_enum(TerminationReason, data.get("reason"), "Motivo"),
            details=str(data.get("details") or ""),
        )
        return jsonify({"success": True, "employee": employee_json(emp)})

    @app.route("/api/admin/employees/<employee_id>/archive", methods=["POST"], endpoint="employees_archive")
    @admin_required(container)
    def employees_archive(employee_id: str):
        emp = employees.archive(current_role=g.current_role, employee_id=employee_id)
        return jsonify({"success": True, "employee": employee_json(emp)})

    @app.route("/api/admin/employees/<employee_id>/reset-pin", methods=["POST"], endpoint="employees_reset_pin")
    @admin_required(container)
    def employees_reset_pin(employee_id: str):
        emp = employees.require_pin_reset(current_role=g.current_role, employee_id=employee_id)
        return jsonify({"success": True, "employee": employee_json(emp)})
