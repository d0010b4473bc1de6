from __future__ import annotations

from typing import Optional, Protocol

from .model import GlobalSettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[GlobalSettings]:
        raise NotImplementedError

    def replace(self, settings: GlobalSettings) -> None:
        raise NotImplementedError
