from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import TransientIOError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Cursor inside a transaction; commits on success, rolls back on error.

    Driver failures other than integrity violations surface as TransientIOError.
    IntegrityError is re-raised untouched so repositories can map it.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise TransientIOError(f"Database unavailable: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        _safe_rollback(conn)
        raise
    except mysql.connector.Error as e:
        _safe_rollback(conn)
        raise TransientIOError(f"Database error: {e}") from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed on a broken connection")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_float(value: Any) -> float:
    """DECIMAL columns come back as Decimal."""
    if value is None:
        return 0.0
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()


def as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value))


def build_update(table: str, key_column: str, columns: Dict[str, Any], key: Any):
    """UPDATE statement for the given column -> value mapping."""
    assignments = ", ".join(f"{col}=%s" for col in columns)
    sql = f"UPDATE {table} SET {assignments} WHERE {key_column}=%s"
    return sql, tuple(columns.values()) + (key,)
