"""Create the attendance tables, optionally loading the demo seed.

Usage: APP_ENV=development python scripts/init_db.py [--seed]
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.office_attendance.office_attendance.database.bootstrap import apply_schema, apply_seed_sql, list_tables


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    tables = ", ".join(sorted(list_tables(db_config)))
    print(f"[{settings_module}] {db_config.get('database')} on {db_config.get('host')}: {tables}")


if __name__ == "__main__":
    main()
