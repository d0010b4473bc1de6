from __future__ import annotations

import secrets
import uuid
from typing import Protocol

from ..core.constants import PIN_LENGTH


class SecretGenerator(Protocol):
    """Source of record ids and temporary PINs (injected so tests stay deterministic)."""

    def new_id(self) -> str:
        raise NotImplementedError

    def new_pin(self) -> str:
        raise NotImplementedError


class RandomSecretGenerator:
    def new_id(self) -> str:
        return uuid.uuid4().hex

    def new_pin(self) -> str:
        return "".join(secrets.choice("0123456789") for _ in range(PIN_LENGTH))
