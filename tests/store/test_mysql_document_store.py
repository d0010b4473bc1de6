from __future__ import annotations

import json

import mysql.connector
import pytest

from src.asistup.asistup.core.exceptions import PersistenceUnavailable
from src.asistup.asistup.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.asistup.asistup.database.mysql_document_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._rows = []
        self.rowcount = 0

    def execute(self, sql, params=()):
        if self._db.fail:
            raise mysql.connector.Error("gone away")
        sql = " ".join(sql.split())
        if sql.startswith("INSERT INTO documents"):
            collection, doc_id, body = params
            self._db.rows[(collection, doc_id)] = body
        elif sql.startswith("UPDATE documents"):
            body, collection, doc_id, *conditions = params
            current = self._db.rows.get((collection, doc_id))
            matches = current is not None and all(
                str(json.loads(current).get(path[2:])) == value
                for path, value in zip(conditions[::2], conditions[1::2])
            )
            if matches:
                self._db.rows[(collection, doc_id)] = body
            self.rowcount = 1 if matches else 0
        elif sql.startswith("DELETE FROM documents"):
            self.rowcount = 1 if self._db.rows.pop(tuple(params), None) is not None else 0
        elif "WHERE collection=%s AND doc_id=%s" in sql:
            body = self._db.rows.get(tuple(params))
            self._rows = [{"body": body}] if body is not None else []
        else:
            self._rows = [{"body": b} for (c, _), b in self._db.rows.items() if c == params[0]]

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    def __init__(self):
        self.rows: dict[tuple[str, str], str] = {}
        self.fail = False
        self.commits = 0
        self.rollbacks = 0

    def connect(self, *, with_database=True):
        return FakeConnection(self)


def test_put_get_list_delete():
    db = FakeDatabase()
    store = MySQLDocumentStore(db)

    store.put("employees", "e1", {"name": "Ana Pérez"})

    assert json.loads(db.rows[("employees", "e1")]) == {"name": "Ana Pérez", "id": "e1"}
    assert store.get("employees", "e1") == {"name": "Ana Pérez", "id": "e1"}
    assert store.list("employees") == [{"name": "Ana Pérez", "id": "e1"}]
    assert store.delete("employees", "e1") is True
    assert store.get("employees", "e1") is None
    assert store.delete("employees", "e1") is False


def test_subscribers_see_local_writes():
    store = MySQLDocumentStore(FakeDatabase())
    seen = []

    store.subscribe("employees", lambda docs: seen.append(len(docs)))
    store.put("employees", "e1", {})

    assert seen == [0, 1]


def test_driver_errors_become_persistence_unavailable():
    db = FakeDatabase()
    store = MySQLDocumentStore(db)
    db.fail = True

    with pytest.raises(PersistenceUnavailable):
        store.put("attendance", "a1", {})
    assert db.rollbacks == 1


def test_put_if_updates_only_when_expected_fields_match():
    db = FakeDatabase()
    store = MySQLDocumentStore(db)
    store.put("attendance", "a1", {"status": "pending_approval"})

    assert store.put_if("attendance", "a1", {"status": "confirmed"}, expected={"status": "pending_approval"}) is True
    assert store.put_if("attendance", "a1", {"status": "rejected"}, expected={"status": "pending_approval"}) is False
    assert store.put_if("attendance", "ghost", {"status": "rejected"}, expected={"status": "pending_approval"}) is False

    assert store.get("attendance", "a1") == {"status": "confirmed", "id": "a1"}
    assert store.get("attendance", "ghost") is None


def test_schema_splitter_ignores_database_statements():
    sql = _strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE a (id INT);\n\nCREATE TABLE b (id INT);\n"
    )

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (id INT)",
        "CREATE TABLE b (id INT)",
    ]
