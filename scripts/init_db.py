from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from src.labor_payroll.labor_payroll.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(f"OK: schema.sql -> {db_config.get('host')}/{db_config.get('database')} ({', '.join(tables)})")


if __name__ == "__main__":
    main()
