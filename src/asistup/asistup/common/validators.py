from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.constants import PIN_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} no es válido")
    return value.strip()


def is_valid_pin(value: Any) -> bool:
    return isinstance(value, str) and len(value) == PIN_LENGTH and value.isascii() and value.isdigit()


def require_pin(value: str, field_name: str = "PIN") -> str:
    if not is_valid_pin(value):
        raise ValidationError(f"{field_name} debe tener exactamente {PIN_LENGTH} dígitos")
    return value


def require_decimal(value: Any, field_name: str, *, minimum: Decimal | None = None) -> Decimal:
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} debe ser numérico")
    if not result.is_finite():
        raise ValidationError(f"{field_name} debe ser numérico")
    if minimum is not None and result < minimum:
        raise ValidationError(f"{field_name} debe ser mayor o igual a {minimum}")
    return result


def to_decimal(value: Any) -> Decimal:
    """Lenient conversion: anything missing or unparsable becomes zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")
