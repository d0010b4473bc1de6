from __future__ import annotations

import logging
import random
import threading
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..common.generators import SecretGenerator
from ..core.constants import (
    DEFAULT_ERROR_DISPLAY_SECONDS,
    DEFAULT_KIOSK_IDLE_SECONDS,
    DEFAULT_MAX_KIOSK_SESSIONS,
    DEFAULT_SUCCESS_DISPLAY_SECONDS,
)
from ..core.exceptions import NotFound
from ..employees.directory import EmployeeDirectory
from ..employees.service import EmployeeService
from ..settings.service import SettingsService
from .machine import KioskSession
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class KioskService:
    """Opens, looks up and tears down kiosk sessions.

    Each session receives the settings value current at opening time. Sessions
    that were closed, or untouched for ``idle_seconds``, are dropped on the next
    lookup; beyond ``max_sessions`` the least recently used one is exited.
    """

    def __init__(
        self,
        *,
        settings: SettingsService,
        directory: EmployeeDirectory,
        employees: EmployeeService,
        attendance: AttendanceService,
        scheduler: Scheduler,
        generator: SecretGenerator,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = now_local,
        success_seconds: float = DEFAULT_SUCCESS_DISPLAY_SECONDS,
        error_seconds: float = DEFAULT_ERROR_DISPLAY_SECONDS,
        idle_seconds: float = DEFAULT_KIOSK_IDLE_SECONDS,
        max_sessions: int = DEFAULT_MAX_KIOSK_SESSIONS,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1")
        self._settings = settings
        self._directory = directory
        self._employees = employees
        self._attendance = attendance
        self._scheduler = scheduler
        self._generator = generator
        self._rng = rng
        self._clock = clock
        self._success_seconds = success_seconds
        self._error_seconds = error_seconds
        self._idle = timedelta(seconds=idle_seconds)
        self._max_sessions = max_sessions
        self._lock = threading.Lock()
        # least recently used first
        self._sessions: "OrderedDict[str, KioskSession]" = OrderedDict()
        self._last_seen: dict[str, datetime] = {}

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def open_session(self) -> KioskSession:
        session = KioskSession(
            session_id=self._generator.new_id(),
            settings=self._settings.current(),
            directory=self._directory,
            employees=self._employees,
            attendance=self._attendance,
            scheduler=self._scheduler,
            rng=self._rng,
            clock=self._clock,
            success_seconds=self._success_seconds,
            error_seconds=self._error_seconds,
        )
        with self._lock:
            evicted = self._collect_stale()
            self._sessions[session.session_id] = session
            self._last_seen[session.session_id] = self._clock()
            while len(self._sessions) > self._max_sessions:
                evicted.append(self._pop(next(iter(self._sessions))))
        self._exit_all(evicted)
        return session

    def get(self, session_id: str) -> KioskSession:
        with self._lock:
            evicted = self._collect_stale()
            session = self._sessions.get(session_id)
            if session:
                self._sessions.move_to_end(session_id)
                self._last_seen[session_id] = self._clock()
        self._exit_all(evicted)
        if not session:
            raise NotFound("Sesión de kiosco no existe")
        return session

    def close(self, session_id: str) -> KioskSession:
        with self._lock:
            session = self._pop(session_id)
        if not session:
            raise NotFound("Sesión de kiosco no existe")
        session.exit()
        return session

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
            self._last_seen.clear()
        self._exit_all(sessions)

    def _pop(self, session_id: str) -> Optional[KioskSession]:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None)

    def _collect_stale(self) -> list[KioskSession]:
        # caller holds the lock
        cutoff = self._clock() - self._idle
        stale = [
            sid
            for sid, session in self._sessions.items()
            if session.closed or self._last_seen[sid] <= cutoff
        ]
        return [self._pop(sid) for sid in stale]

    @staticmethod
    def _exit_all(sessions: list[KioskSession]) -> None:
        for session in sessions:
            if session.closed:
                continue
            logger.info("kiosk session %s evicted", session.session_id)
            session.exit()
