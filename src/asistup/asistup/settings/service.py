from __future__ import annotations

import logging
from decimal import Decimal

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import GlobalSettings, TimeWindow
from .repository import SettingsRepository

audit = logging.getLogger("asistup.audit")


def _check_window(window: TimeWindow, label: str) -> None:
    if window.start >= window.end:
        raise ValidationError(f"{label}: la hora de inicio debe ser anterior a la de fin")


def validate_settings(settings: GlobalSettings) -> GlobalSettings:
    if settings.sbu < 0:
        raise ValidationError("SBU no puede ser negativo")
    for rate, label in ((settings.iess_rate, "Tasa IESS"), (settings.reserve_rate, "Tasa fondo de reserva")):
        if not (Decimal("0") <= rate < Decimal("1")):
            raise ValidationError(f"{label} debe estar entre 0 y 1")

    schedule = settings.schedule
    _check_window(schedule.weekday_morning, "Jornada matutina")
    _check_window(schedule.weekday_afternoon, "Jornada vespertina")
    _check_window(schedule.saturday, "Sábado")
    if schedule.weekday_morning.end > schedule.weekday_afternoon.start:
        raise ValidationError("La jornada matutina debe terminar antes de la vespertina")
    if not 0 <= schedule.half_day_off_weekday <= 5:
        raise ValidationError("Día de media jornada libre no válido")
    return settings


class SettingsService:
    """Use case: read and replace the single GlobalSettings value."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> GlobalSettings:
        return self._settings.get() or GlobalSettings()

    def replace(self, *, current_role: Role, settings: GlobalSettings) -> GlobalSettings:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Solo el Super Administrador puede modificar la configuración")

        validate_settings(settings)
        self._settings.replace(settings)
        audit.info(
            "settings replaced sbu=%s iess_rate=%s reserve_rate=%s",
            settings.sbu,
            settings.iess_rate,
            settings.reserve_rate,
        )
        return settings
