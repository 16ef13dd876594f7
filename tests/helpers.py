"""Shared builders for the unit tests: fake and in-memory connections."""

from __future__ import annotations

import sqlite3
from typing import Any
from unittest.mock import MagicMock

from nexsdb.db.connection import DBConnection
from nexsdb.listener import QueryListener

USERS_COLUMNS = [
    "name TEXT PRIMARY KEY",
    "coins INTEGER",
    "active INTEGER",
    "avatar BLOB",
    "token TEXT",
]


def sqlite_connector(config) -> sqlite3.Connection:
    """Fresh in-memory database per connect; qmark paramstyle like our SQL."""
    return sqlite3.connect(":memory:", check_same_thread=False, isolation_level=None)


def make_sqlite_connection(database: str = "shop") -> DBConnection:
    return DBConnection(
        "localhost", 3306, "root", "secret", database,
        connector=sqlite_connector, paramstyle="qmark",
    )


def make_fake_connection(database: str = "shop", rows: list[tuple] | None = None,
                         columns: tuple[str, ...] = ("name", "coins")):
    """DBConnection over a MagicMock driver; returns (holder, connector, raw, cursor)."""
    raw = MagicMock(name="raw_conn")
    raw.open = True
    cursor = raw.cursor.return_value
    cursor.fetchall.return_value = rows or []
    cursor.description = [(c, None, None, None, None, None, None) for c in columns]
    cursor.rowcount = 1
    connector = MagicMock(name="connector", return_value=raw)
    holder = DBConnection("localhost", 3306, "root", "secret", database, connector=connector)
    return holder, connector, raw, cursor


class RecordingListener(QueryListener):
    def __init__(self):
        self.events: list[tuple[str, Any]] = []

    def on_query_sent(self, record):
        self.events.append(("sent", record))

    def on_query_complete(self, record):
        self.events.append(("complete", record))

    def on_no_data_found(self):
        self.events.append(("no_data", None))

    def on_single_result(self, result):
        self.events.append(("single", result))

    def on_multiple_results(self, results):
        self.events.append(("multiple", list(results)))

    def names(self) -> list[str]:
        return [e[0] for e in self.events]
