from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from user_admin.database.bootstrap import apply_seed_sql, ensure_demo_staffs
from user_admin.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    apply_seed_sql(conn)
    ensure_demo_staffs(conn)
    print(f"OK: Seeded database -> {conn.config.describe()}")


if __name__ == "__main__":
    main()
