from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errors as mysql_errors

from ..core.exceptions import StorageUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connection drops, lock wait timeouts and server restarts; everything else propagates.
TRANSIENT_ERRORS = (mysql_errors.InterfaceError, mysql_errors.OperationalError)


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("rollback failed on a broken connection", exc_info=True)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except TRANSIENT_ERRORS as e:
        raise StorageUnavailable() from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except TRANSIENT_ERRORS as e:
        _rollback(conn)
        raise StorageUnavailable() from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Shift start/end come back as time, timedelta (pure connector) or 'HH:MM[:SS]'."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + timedelta(seconds=int(value.total_seconds()) % 86400)).time()
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_duration(value: Any) -> Optional[timedelta]:
    """Break durations are stored as minutes (INT)."""
    if value is None:
        return None
    if isinstance(value, timedelta):
        return value
    return timedelta(minutes=int(value))
