from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone
from .store import Document, DocumentStore, ListenerRegistry, Unsubscribe, Listener


def _decode(body) -> Document:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        return json.loads(body)
    return dict(body)


class MySQLDocumentStore(DocumentStore):
    """JSON documents in a single ``documents`` table.

    Subscribers see writes made through this process only.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._listeners = ListenerRegistry()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT body
                FROM documents
                WHERE collection=%s AND doc_id=%s
                """,
                (collection, str(doc_id)),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _decode(row["body"])

    def list(self, collection: str) -> List[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT body
                FROM documents
                WHERE collection=%s
                ORDER BY created_at, doc_id
                """,
                (collection,),
            )
            return [_decode(r["body"]) for r in fetchall(cur)]

    def put(self, collection: str, doc_id: str, body: Document) -> None:
        doc = dict(body)
        doc["id"] = str(doc_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO documents(collection, doc_id, body)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE body=VALUES(body)
                """,
                (collection, str(doc_id), json.dumps(doc, ensure_ascii=False)),
            )
        self._publish(collection)

    def put_if(self, collection: str, doc_id: str, body: Document, *, expected: Dict[str, Any]) -> bool:
        doc = dict(body)
        doc["id"] = str(doc_id)
        conditions = ""
        params: list = [json.dumps(doc, ensure_ascii=False), collection, str(doc_id)]
        for key, value in expected.items():
            # string-valued fields only (status flags)
            conditions += " AND JSON_UNQUOTE(JSON_EXTRACT(body, %s))=%s"
            params.extend([f"$.{key}", str(value)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE documents SET body=%s WHERE collection=%s AND doc_id=%s" + conditions,
                tuple(params),
            )
            updated = cur.rowcount > 0
        if updated:
            self._publish(collection)
        return updated

    def delete(self, collection: str, doc_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM documents WHERE collection=%s AND doc_id=%s",
                (collection, str(doc_id)),
            )
            deleted = cur.rowcount > 0
        if deleted:
            self._publish(collection)
        return deleted

    def subscribe(self, collection: str, listener: Listener) -> Unsubscribe:
        unsubscribe = self._listeners.add(collection, listener)
        listener(self.list(collection))
        return unsubscribe

    def _publish(self, collection: str) -> None:
        if self._listeners.has_listeners(collection):
            self._listeners.publish(collection, self.list(collection))
