"""Create the serverless functions' tables (invoices, activity logs, site attendance)."""

from __future__ import annotations

import importlib

from hr_portal.config import get_settings_module
from hr_portal.database.bootstrap import apply_schema, schema_statements


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(statements={len(schema_statements())})"
    )


if __name__ == "__main__":
    main()
