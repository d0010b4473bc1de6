import random
from datetime import date

from src.asistup.asistup.attendance.messages import (
    MOTIVATIONAL_MESSAGES_END,
    MOTIVATIONAL_MESSAGES_START,
    pick_greeting,
    success_message,
)
from src.asistup.asistup.common.datetime_utils import is_anniversary
from src.asistup.asistup.core.enums import AttendanceType


def test_greeting_pool_depends_on_mark_type(employee_factory):
    emp = employee_factory(birth_date=None)
    rng = random.Random(1)

    assert pick_greeting(emp, AttendanceType.IN, today=date(2025, 3, 3), rng=rng) in MOTIVATIONAL_MESSAGES_START
    assert pick_greeting(emp, AttendanceType.OUT, today=date(2025, 3, 3), rng=rng) in MOTIVATIONAL_MESSAGES_END
    assert pick_greeting(emp, AttendanceType.HALF_DAY, today=date(2025, 3, 3), rng=rng) in MOTIVATIONAL_MESSAGES_END


def test_birthday_overrides_greeting(employee_factory):
    emp = employee_factory(birth_date=date(1990, 3, 3))

    message = success_message(emp, AttendanceType.OUT, today=date(2025, 3, 3), rng=random.Random(1))

    assert message.startswith("¡Feliz cumpleaños, Ana!")
    assert message.endswith("Marcado de Salida registrado.")


def test_birthday_is_calendar_date_without_offset():
    born = date(1990, 3, 3)

    assert is_anniversary(born, date(2025, 3, 3)) is True
    assert is_anniversary(born, date(2025, 3, 2)) is False
    assert is_anniversary(born, date(2025, 3, 4)) is False


def test_leap_day_birthday_in_common_year():
    born = date(2000, 2, 29)

    assert is_anniversary(born, date(2025, 2, 28)) is True
    assert is_anniversary(born, date(2024, 2, 28)) is False
    assert is_anniversary(born, date(2024, 2, 29)) is True
