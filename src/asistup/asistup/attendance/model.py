from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import optional_datetime, parse_instant
from ..core.enums import AttendanceStatus, AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Entidad de dominio: marcación de asistencia.

    ``is_late`` se calcula una sola vez al crear; solo el flujo de aprobación
    cambia ``status`` y fija ``validated_at``.
    """

    record_id: str
    employee_id: str
    timestamp: datetime
    type: AttendanceType
    status: AttendanceStatus
    is_late: bool = False
    justification: Optional[str] = None
    validated_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == AttendanceStatus.PENDING_APPROVAL

    def to_document(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "timestamp": self.timestamp.isoformat(),
            "type": self.type.value,
            "status": self.status.value,
            "is_late": self.is_late,
            "justification": self.justification,
            "validated_at": self.validated_at.isoformat() if self.validated_at else None,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            record_id=str(doc["id"]),
            employee_id=str(doc["employee_id"]),
            timestamp=parse_instant(doc["timestamp"]),
            type=AttendanceType(doc["type"]),
            status=AttendanceStatus(doc.get("status") or AttendanceStatus.CONFIRMED.value),
            is_late=bool(doc.get("is_late", False)),
            justification=doc.get("justification"),
            validated_at=optional_datetime(doc.get("validated_at")),
        )
