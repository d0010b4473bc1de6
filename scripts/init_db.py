from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.asistup.asistup.database.bootstrap import apply_schema, list_tables, seed_default_settings
from src.asistup.asistup.database.connection import DBConfig, DatabaseConnection
from src.asistup.asistup.database.mysql_document_store import MySQLDocumentStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = DatabaseConnection.get_instance(DBConfig.from_mapping(dict(settings.DB_CONFIG)))

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db, schema_path=schema_path)
    seeded = seed_default_settings(MySQLDocumentStore(db))
    tables = list_tables(db)
    print(
        "OK: Applied schema.sql -> "
        f"{db.config.user}@{db.config.host}:{db.config.port}/{db.config.database} "
        f"(tables={len(tables)}, default settings {'stored' if seeded else 'already present'})"
    )


if __name__ == "__main__":
    main()
