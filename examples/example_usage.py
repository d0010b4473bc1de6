"""Ejemplo: usar la capa de servicios sin Flask.

Registra un empleado, rota su PIN temporal y calcula su rol de pagos del mes.
"""

from datetime import date
from decimal import Decimal

from src.asistup.asistup.container import build_container
from src.asistup.asistup.core.enums import Role


def main():
    container = build_container(store_backend="memory")
    emp = container.employee_service.create(
        current_role=Role.SUPER_ADMIN,
        name="Ana",
        surname="Pérez",
        identification="0102030405",
        salary=Decimal("482.00"),
    )
    container.employee_service.rotate_pin(emp.employee_id, "246810")

    today = date.today()
    report = container.payroll_report_service.build_roll(month=today.month, year=today.year, as_of=today)
    for row in report.rows:
        print(row["full_name"], row["net_to_receive"])
    print(container.notifications.list())


if __name__ == "__main__":
    main()
