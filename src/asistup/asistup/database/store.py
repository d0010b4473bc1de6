from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol

Document = Dict[str, Any]
Listener = Callable[[List[Document]], None]
Unsubscribe = Callable[[], None]

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Narrow read/subscribe/write interface over a document store.

    Writes are full-document replaces (last writer wins, per document).
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def list(self, collection: str) -> List[Document]:
        raise NotImplementedError

    def put(self, collection: str, doc_id: str, body: Document) -> None:
        raise NotImplementedError

    def put_if(self, collection: str, doc_id: str, body: Document, *, expected: Dict[str, Any]) -> bool:
        """Replace the document only while its current fields equal ``expected``.

        Returns False (and writes nothing) when the document is missing or differs.
        """

        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> bool:
        raise NotImplementedError

    def subscribe(self, collection: str, listener: Listener) -> Unsubscribe:
        """Call ``listener`` with the current snapshot now and after every change."""

        raise NotImplementedError


class ListenerRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: dict[str, list[Listener]] = {}

    def add(self, collection: str, listener: Listener) -> Unsubscribe:
        with self._lock:
            self._listeners.setdefault(collection, []).append(listener)

        def unsubscribe() -> None:
            with self._lock:
                items = self._listeners.get(collection, [])
                if listener in items:
                    items.remove(listener)

        return unsubscribe

    def has_listeners(self, collection: str) -> bool:
        with self._lock:
            return bool(self._listeners.get(collection))

    def publish(self, collection: str, snapshot: List[Document]) -> None:
        with self._lock:
            listeners = list(self._listeners.get(collection, []))
        for listener in listeners:
            listener(copy.deepcopy(snapshot))


class InMemoryDocumentStore(DocumentStore):
    """Process-local store used by the kiosk in development and by tests."""

    def __init__(self, seed: Optional[dict[str, list[Document]]] = None):
        self._lock = threading.RLock()
        self._data: dict[str, dict[str, Document]] = {}
        self._listeners = ListenerRegistry()
        for collection, docs in (seed or {}).items():
            for doc in docs:
                self._data.setdefault(collection, {})[str(doc["id"])] = copy.deepcopy(doc)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._data.get(collection, {}).get(str(doc_id))
            return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: str) -> List[Document]:
        with self._lock:
            return [copy.deepcopy(d) for d in self._data.get(collection, {}).values()]

    def put(self, collection: str, doc_id: str, body: Document) -> None:
        doc = copy.deepcopy(body)
        doc["id"] = str(doc_id)
        with self._lock:
            self._data.setdefault(collection, {})[str(doc_id)] = doc
        self._publish(collection)

    def put_if(self, collection: str, doc_id: str, body: Document, *, expected: Dict[str, Any]) -> bool:
        doc = copy.deepcopy(body)
        doc["id"] = str(doc_id)
        with self._lock:
            current = self._data.get(collection, {}).get(str(doc_id))
            if current is None or any(current.get(k) != v for k, v in expected.items()):
                return False
            self._data[collection][str(doc_id)] = doc
        self._publish(collection)
        return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            removed = self._data.get(collection, {}).pop(str(doc_id), None)
        if removed is None:
            return False
        self._publish(collection)
        return True

    def subscribe(self, collection: str, listener: Listener) -> Unsubscribe:
        unsubscribe = self._listeners.add(collection, listener)
        listener(self.list(collection))
        return unsubscribe

    def _publish(self, collection: str) -> None:
        if self._listeners.has_listeners(collection):
            self._listeners.publish(collection, self.list(collection))
