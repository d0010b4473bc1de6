from __future__ import annotations

import logging
import random
import threading
from datetime import datetime
from typing import Callable, Optional

from ..attendance.messages import success_message
from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_ERROR_DISPLAY_SECONDS, DEFAULT_SUCCESS_DISPLAY_SECONDS, PIN_LENGTH
from ..core.enums import AttendanceType, KioskState
from ..core.exceptions import (
    InvalidKioskTransition,
    InvalidPinRotation,
    MarkInProgress,
    PersistenceUnavailable,
)
from ..employees.directory import EmployeeDirectory
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..settings.model import GlobalSettings
from .model import KioskView, TimeoutEvent
from .scheduler import Scheduler, TimeoutHandle

logger = logging.getLogger(__name__)

MSG_PIN_REJECTED = "PIN INCORRECTO. Vuelva a intentarlo."
MSG_RETRY = "No se pudo registrar la marcación. Intente nuevamente."


class KioskSession:
    """PIN kiosk state machine for a single terminal session.

    idle -> identifying -> confirm | change_pin | error
    error -(timeout)-> idle
    change_pin -(new PIN)-> confirm
    confirm -(mark)-> success -(timeout)-> idle

    Events are processed one at a time. Timeouts arrive as :class:`TimeoutEvent`
    values through the injected scheduler and are cancelled on ``exit()``.
    """

    def __init__(
        self,
        *,
        session_id: str,
        settings: GlobalSettings,
        directory: EmployeeDirectory,
        employees: EmployeeService,
        attendance: AttendanceService,
        scheduler: Scheduler,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = now_local,
        success_seconds: float = DEFAULT_SUCCESS_DISPLAY_SECONDS,
        error_seconds: float = DEFAULT_ERROR_DISPLAY_SECONDS,
    ):
        self.session_id = session_id
        self._settings = settings
        self._directory = directory
        self._employees = employees
        self._attendance = attendance
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._clock = clock
        self._success_seconds = float(success_seconds)
        self._error_seconds = float(error_seconds)

        self._lock = threading.RLock()
        self._state = KioskState.IDLE
        self._buffer = ""
        self._employee: Optional[Employee] = None
        self._message: Optional[str] = None
        self._error: Optional[str] = None
        self._busy = False
        self._can_retry = False
        self._closed = False
        self._token = 0
        self._timeout: Optional[TimeoutHandle] = None

    # -- read side -----------------------------------------------------

    @property
    def state(self) -> KioskState:
        with self._lock:
            return self._state

    @property
    def buffer_length(self) -> int:
        with self._lock:
            return len(self._buffer)

    @property
    def employee(self) -> Optional[Employee]:
        with self._lock:
            return self._employee

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def view(self) -> KioskView:
        with self._lock:
            return KioskView(
                session_id=self.session_id,
                state=self._state,
                pin_length=len(self._buffer),
                employee_name=self._employee.full_name if self._employee else None,
                message=self._message,
                error=self._error,
                busy=self._busy,
                can_retry=self._can_retry,
                closed=self._closed,
            )

    # -- keypad --------------------------------------------------------

    def press_key(self, key: str) -> KioskView:
        if key == "C":
            return self.clear()
        if key in ("<", "←"):
            return self.backspace()
        return self.press_digit(key)

    def press_digit(self, digit: str) -> KioskView:
        if not (isinstance(digit, str) and len(digit) == 1 and digit in "0123456789"):
            raise InvalidKioskTransition("Tecla no válida")
        with self._lock:
            self._expect(KioskState.IDLE)
            if len(self._buffer) < PIN_LENGTH:
                self._buffer += digit
                self._error = None
            if len(self._buffer) == PIN_LENGTH:
                self._identify()
            return self.view()

    def backspace(self) -> KioskView:
        with self._lock:
            self._expect(KioskState.IDLE)
            self._buffer = self._buffer[:-1]
            return self.view()

    def clear(self) -> KioskView:
        with self._lock:
            self._expect(KioskState.IDLE)
            self._buffer = ""
            self._error = None
            return self.view()

    def _identify(self) -> None:
        self._state = KioskState.IDENTIFYING
        employee = self._directory.find_active_by_pin(self._buffer)
        self._buffer = "" if employee else self._buffer

        if employee is None:
            logger.info("Kiosk %s: PIN not recognized", self.session_id)
            self._state = KioskState.ERROR
            self._error = MSG_PIN_REJECTED
            self._schedule(KioskState.ERROR, self._error_seconds)
            return

        self._employee = employee
        if employee.must_rotate_pin:
            self._state = KioskState.CHANGE_PIN
            self._message = f"Hola {employee.name}, por seguridad debe definir un nuevo PIN de 6 dígitos."
        else:
            self._state = KioskState.CONFIRM
            self._message = f"Hola {employee.name}, ¿deseas marcar tu asistencia ahora?"

    # -- PIN rotation --------------------------------------------------

    def submit_new_pin(self, new_pin: str) -> KioskView:
        with self._lock:
            self._expect(KioskState.CHANGE_PIN)
            employee = self._employee
            try:
                updated = self._employees.rotate_pin(employee.employee_id, new_pin)
            except InvalidPinRotation as exc:
                self._error = str(exc)
                raise

            self._employee = updated
            self._error = None
            self._state = KioskState.CONFIRM
            self._message = f"PIN actualizado. Hola {updated.name}, ¿deseas marcar tu asistencia ahora?"
            return self.view()

    # -- marking -------------------------------------------------------

    def mark(self, mark_type: AttendanceType) -> AttendanceRecord:
        """Emit exactly one record; duplicate submissions raise MarkInProgress until this settles."""
        with self._lock:
            if self._busy:
                raise MarkInProgress("Marcación en curso, espere un momento")
            self._expect(KioskState.CONFIRM)
            employee = self._employee
            self._busy = True
            self._can_retry = False
            self._error = None

        try:
            record = self._attendance.register_mark(
                employee.employee_id,
                AttendanceType(mark_type),
                settings=self._settings,
            )
        except PersistenceUnavailable:
            logger.error("Kiosk %s: mark for employee %s not persisted", self.session_id, employee.employee_id)
            with self._lock:
                self._busy = False
                self._error = MSG_RETRY
                self._can_retry = True
            raise
        except Exception:
            with self._lock:
                self._busy = False
            raise

        with self._lock:
            self._busy = False
            if self._closed:
                return record
            self._state = KioskState.SUCCESS
            self._message = success_message(employee, record.type, today=self._clock().date(), rng=self._rng)
            self._schedule(KioskState.SUCCESS, self._success_seconds)
            return record

    # -- navigation ----------------------------------------------------

    def cancel(self) -> KioskView:
        with self._lock:
            self._ensure_open()
            if self._busy:
                raise MarkInProgress("Marcación en curso, espere un momento")
            if self._state not in (KioskState.CONFIRM, KioskState.CHANGE_PIN):
                raise InvalidKioskTransition(f"No se puede cancelar en estado {self._state.value}")
            self._reset()
            return self.view()

    def exit(self) -> KioskView:
        """Leave the kiosk from any state; pending displays are dismissed."""
        with self._lock:
            if not self._closed:
                self._reset()
                self._closed = True
            return self.view()

    teardown = exit

    # -- timeouts ------------------------------------------------------

    def handle_timeout(self, event: TimeoutEvent) -> bool:
        with self._lock:
            if self._closed or self._timeout is None:
                return False
            if event.token != self._token or event.state != self._state:
                return False
            self._timeout = None
            self._reset()
            return True

    def _schedule(self, state: KioskState, delay: float) -> None:
        self._cancel_timeout()
        self._token += 1
        event = TimeoutEvent(state=state, token=self._token)
        self._timeout = self._scheduler.schedule(delay, lambda: self.handle_timeout(event))

    def _cancel_timeout(self) -> None:
        if self._timeout is not None:
            self._timeout.cancel()
            self._timeout = None

    # -- helpers -------------------------------------------------------

    def _reset(self) -> None:
        self._cancel_timeout()
        self._state = KioskState.IDLE
        self._buffer = ""
        self._employee = None
        self._message = None
        self._error = None
        self._can_retry = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidKioskTransition("La sesión del kiosco ha finalizado")

    def _expect(self, state: KioskState) -> None:
        self._ensure_open()
        if self._state != state:
            raise InvalidKioskTransition(f"Acción no permitida en estado {self._state.value}")
