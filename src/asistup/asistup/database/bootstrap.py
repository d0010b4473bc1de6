from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from ..core.constants import COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID
from ..settings.model import GlobalSettings
from .connection import DatabaseConnection
from .store import DocumentStore

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds plain DDL; no ';' appears inside literals
    for chunk in sql.split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def seed_default_settings(store: DocumentStore) -> bool:
    """Store the statutory defaults when no settings document exists yet."""
    if store.get(COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID) is not None:
        return False
    store.put(COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID, GlobalSettings().to_document())
    logger.info("Default global settings stored")
    return True
