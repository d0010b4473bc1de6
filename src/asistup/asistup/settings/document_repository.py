from __future__ import annotations

from typing import Optional

from ..core.constants import COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID
from ..database.store import DocumentStore
from .model import GlobalSettings
from .repository import SettingsRepository


class DocumentSettingsRepository(SettingsRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get(self) -> Optional[GlobalSettings]:
        doc = self._store.get(COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID)
        return GlobalSettings.from_document(doc) if doc else None

    def replace(self, settings: GlobalSettings) -> None:
        self._store.put(COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID, settings.to_document())
