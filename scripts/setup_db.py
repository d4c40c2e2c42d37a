"""Prepare a record store for Worktime.

MySQL (default): create the database if needed, apply database/schema.sql and
optionally insert the demo records.

Local store (--local PATH): write the demo records into a JSON store file.
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module  # noqa: E402

from src.worktime.worktime.container import build_local_container  # noqa: E402
from src.worktime.worktime.database.bootstrap import apply_schema, list_tables, seed_demo_data  # noqa: E402
from src.worktime.worktime.storage.backends import JsonFileBackend  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the schema and demo data.")
    parser.add_argument("--seed", action="store_true", help="Also insert the demo records")
    parser.add_argument("--seed-only", action="store_true", help="Insert demo records, skip the schema")
    parser.add_argument(
        "--schema",
        default=str(REPO_ROOT / "database" / "schema.sql"),
        help="Schema file (default: database/schema.sql)",
    )
    parser.add_argument("--local", metavar="PATH", help="Seed a local JSON store instead of MySQL")
    return parser.parse_args()


def _setup_local(path: str) -> None:
    container = build_local_container(JsonFileBackend(path))
    users = container.users_repo.list_all()
    projects = container.projects_repo.list_all()
    entries = container.entries_repo.list_all()
    container.settings_repo.get()
    print(f"OK: Local store {path} (users={len(users)}, projects={len(projects)}, entries={len(entries)})")


def main() -> None:
    args = _parse_args()
    if args.local:
        _setup_local(args.local)
        return

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    if not args.seed_only:
        apply_schema(db_config, schema_path=args.schema)
        print(f"OK: Applied {Path(args.schema).name} -> {target} (tables={len(list_tables(db_config))})")
    if args.seed or args.seed_only:
        seed_demo_data(db_config)
        print(f"OK: Seeded demo data -> {target}")


if __name__ == "__main__":
    main()
