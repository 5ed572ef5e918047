from __future__ import annotations

from datetime import time, timedelta

import pytest
from mysql.connector import errors as mysql_errors

from staff_scheduling.core.exceptions import StorageUnavailable
from staff_scheduling.database.bootstrap import split_statements
from staff_scheduling.database.mysql_base import db_cursor, normalize_mysql_duration, normalize_mysql_time


class FakeCursor:
    def __init__(self, error=None):
        self._error = error
        self.closed = False

    def execute(self, sql, params=None):
        if self._error:
            raise self._error

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self._conn = conn
        self._error = error

    def connect(self):
        if self._error:
            raise self._error
        return self._conn


def test_split_statements_ignores_semicolons_in_literals():
    sql = """
    -- demo rows
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("it's; fine");
    SELECT 1
    """

    assert list(split_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        "INSERT INTO t VALUES (\"it's; fine\")",
        "SELECT 1",
    ]


def test_db_cursor_commits_and_closes():
    cur = FakeCursor()
    conn = FakeConnection(cur)

    with db_cursor(FakeFactory(conn)) as (_, c):
        c.execute("SELECT 1")

    assert conn.committed and conn.closed and cur.closed


def test_db_cursor_wraps_operational_errors():
    conn = FakeConnection(FakeCursor(error=mysql_errors.OperationalError("gone away")))

    with pytest.raises(StorageUnavailable):
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("SELECT 1")

    assert conn.rolled_back and not conn.committed and conn.closed


def test_db_cursor_wraps_connect_failures():
    with pytest.raises(StorageUnavailable):
        with db_cursor(FakeFactory(error=mysql_errors.InterfaceError("refused"))):
            pass


def test_db_cursor_lets_programming_errors_through():
    conn = FakeConnection(FakeCursor(error=mysql_errors.ProgrammingError("bad sql")))

    with pytest.raises(mysql_errors.ProgrammingError):
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("SELEC 1")
    assert conn.rolled_back


@pytest.mark.parametrize(
    "raw, expected",
    [
        (time(7, 30), time(7, 30)),
        (timedelta(hours=23, minutes=15), time(23, 15)),
        ("08:30:00", time(8, 30)),
        (None, None),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected


def test_break_minutes_become_durations():
    assert normalize_mysql_duration(45) == timedelta(minutes=45)
    assert normalize_mysql_duration(None) is None
