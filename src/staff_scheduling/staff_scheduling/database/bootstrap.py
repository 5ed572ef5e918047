"""Apply database/schema.sql and database/seed.sql to the configured MySQL server.

The SQL files carry their own ``CREATE DATABASE``/``USE`` lines for manual
use; those are dropped here so the statements always run against the
database named in DB_CONFIG.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_DATABASE_DIRECTIVES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def split_statements(sql: str) -> Iterator[str]:
    """Split on ';' outside quoted literals. Line comments are skipped."""
    current: list[str] = []
    quote = None
    escaped = False

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif quote is not None:
                if ch == quote:
                    quote = None
            elif ch in ("'", '"'):
                quote = ch
            elif ch == ";":
                statement = "".join(current[:-1]).strip()
                current = []
                if statement:
                    yield statement

    statement = "".join(current).strip()
    if statement:
        yield statement


def _open(target: DBConfig, *, with_database: bool = True):
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        params["database"] = target.database
    return mysql.connector.connect(**params)


def run_sql_file(db_config: dict, path: str | Path) -> int:
    """Execute every statement in ``path``. Returns how many ran."""
    target = DBConfig.from_dict(db_config)
    sql = _DATABASE_DIRECTIVES.sub("", Path(path).read_text(encoding="utf-8"))

    conn = _open(target)
    count = 0
    try:
        cur = conn.cursor()
        for statement in split_statements(sql):
            cur.execute(statement)
            count += 1
        conn.commit()
    finally:
        conn.close()
    logger.debug("ran %d statements from %s", count, path)
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _open(target, with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    run_sql_file(db_config, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _open(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
