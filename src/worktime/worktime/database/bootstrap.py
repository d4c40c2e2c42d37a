from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import as_date
from ..settings.model import Settings
from ..storage.seed import DEMO_PROJECTS, DEMO_TIME_ENTRIES, DEMO_USERS
from .connection import DBConfig


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Splits on ';' outside of quoted strings.
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\":
            buf.append(ch)
            escape = True
            continue
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def seed_demo_data(db_config: dict) -> None:
    """Insert the demo users, projects, entries and default settings.

    Existing rows are left alone, so running it twice is harmless.
    """
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        for u in DEMO_USERS:
            cur.execute(
                """
                INSERT IGNORE INTO users
                    (id, first_name, last_name, email, password_hash, role,
                     hourly_rate, monthly_deductions, is_active, created_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    u["id"],
                    u["firstName"],
                    u["lastName"],
                    u["email"],
                    generate_password_hash(u["password"]),
                    u["role"],
                    u["hourlyRate"],
                    u["monthlyDeductions"],
                    1 if u["isActive"] else 0,
                    u["createdAt"].replace("T", " "),
                ),
            )
        for p in DEMO_PROJECTS:
            cur.execute(
                "INSERT IGNORE INTO projects (id, name, is_active, created_at) VALUES (%s,%s,%s,%s)",
                (p["id"], p["name"], 1 if p["isActive"] else 0, p["createdAt"].replace("T", " ")),
            )
        for e in DEMO_TIME_ENTRIES:
            cur.execute(
                """
                INSERT IGNORE INTO time_entries
                    (id, user_id, work_date, start_time, end_time, hours_worked,
                     project_id, description, created_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    e["id"],
                    e["userId"],
                    as_date(e["date"]),
                    e["startTime"],
                    e["endTime"],
                    e["hoursWorked"],
                    e["projectId"],
                    e["description"],
                    e["createdAt"].replace("T", " "),
                ),
            )
        s = Settings()
        cur.execute(
            """
            INSERT IGNORE INTO settings
                (id, company_name, tax_rate, social_insurance_rate, health_insurance_rate,
                 currency, working_hours_per_day, working_days_per_week)
            VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                s.settings_id,
                s.company_name,
                s.tax_rate,
                s.social_insurance_rate,
                s.health_insurance_rate,
                s.currency,
                s.working_hours_per_day,
                s.working_days_per_week,
            ),
        )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
