from __future__ import annotations

import random
from datetime import date

from ..common.datetime_utils import is_anniversary
from ..core.enums import AttendanceType
from ..employees.model import Employee

MOTIVATIONAL_MESSAGES_START = (
    "¡Buen día! Hoy será un gran día para brillar.",
    "¡Bienvenido! Tu esfuerzo hace la diferencia.",
    "¡Hola! Listos para alcanzar nuevas metas.",
    "¡Empecemos con energía positiva!",
    "¡Tu talento es el motor de esta empresa!",
    "¡Ánimo! Cada minuto cuenta para tu éxito.",
)

MOTIVATIONAL_MESSAGES_END = (
    "¡Gran trabajo hoy! Descansa bien.",
    "¡Misión cumplida! Nos vemos mañana.",
    "¡Buen descanso! Te lo has ganado.",
    "¡Gracias por tu dedicación hoy!",
    "¡Excelente jornada! Disfruta tu tiempo libre.",
    "¡Mañana será otro día de grandes logros!",
)

BIRTHDAY_MESSAGE = "¡Feliz cumpleaños, {name}! Todo el equipo te desea un día extraordinario."

MARK_LABELS = {
    AttendanceType.IN: "Ingreso",
    AttendanceType.OUT: "Salida",
    AttendanceType.HALF_DAY: "Media jornada",
}


def pick_greeting(employee: Employee, mark_type: AttendanceType, *, today: date, rng: random.Random) -> str:
    if is_anniversary(employee.birth_date, today):
        return BIRTHDAY_MESSAGE.format(name=employee.name)
    pool = MOTIVATIONAL_MESSAGES_START if mark_type == AttendanceType.IN else MOTIVATIONAL_MESSAGES_END
    return rng.choice(pool)


def success_message(employee: Employee, mark_type: AttendanceType, *, today: date, rng: random.Random) -> str:
    greeting = pick_greeting(employee, mark_type, today=today, rng=rng)
    return f"{greeting}\n\nMarcado de {MARK_LABELS[mark_type]} registrado."
