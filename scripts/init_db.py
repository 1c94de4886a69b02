"""Create the database (if missing) and apply database/schema.sql.

Usage: APP_ENV=production python scripts/init_db.py
"""
from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from food_tokens.database.bootstrap import apply_schema, list_tables
from food_tokens.database.connection import DBConfig
from food_tokens.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_mapping(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        f"OK: Applied schema.sql -> {db_config.user}@{db_config.host}:{db_config.port}/{db_config.database} "
        f"(tables={len(tables)}: {', '.join(tables)})"
    )


if __name__ == "__main__":
    main()
