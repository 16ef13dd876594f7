"""Prepared statement over a DB-API 2.0 connection.

SQL is written with ``?`` placeholders and parameters are bound by 1-based
position, independent of the driver. At execution time the text is
rewritten into the driver's paramstyle (PyMySQL uses ``%s``).
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from nexsdb.exceptions import QueryError

_UNBOUND = object()
_QUOTES = ("'", '"', "`")


def to_paramstyle(sql: str, paramstyle: str) -> str:
    """Rewrite ``?`` placeholders outside quoted literals."""
    if paramstyle == "qmark":
        return sql
    if paramstyle != "format":
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")

    out: list[str] = []
    quote: Optional[str] = None
    for ch in sql:
        if quote is not None:
            if ch == quote:
                quote = None
            out.append("%%" if ch == "%" else ch)
            continue
        if ch in _QUOTES:
            quote = ch
            out.append(ch)
        elif ch == "?":
            out.append("%s")
        elif ch == "%":
            out.append("%%")
        else:
            out.append(ch)
    return "".join(out)


def count_placeholders(sql: str) -> int:
    count = 0
    quote: Optional[str] = None
    for ch in sql:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == "?":
            count += 1
    return count


def rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    rows = cursor.fetchall()
    if not rows:
        return []
    if isinstance(rows[0], dict):
        return [dict(r) for r in rows]
    columns = [d[0] for d in cursor.description]
    return [dict(zip(columns, r)) for r in rows]


class PreparedStatement:
    """SQL text plus positional parameters, bound to one raw connection."""

    def __init__(self, sql: str, raw_conn: Any, paramstyle: str = "format", lock: Any = None):
        self.sql = sql
        self.raw = raw_conn
        self.paramstyle = paramstyle
        # Shared with the owning DBConnection so one handle runs one cursor at a time.
        self._lock = lock if lock is not None else threading.RLock()
        self._params: list[Any] = [_UNBOUND] * count_placeholders(sql)

    def __str__(self) -> str:
        return self.sql

    def __repr__(self) -> str:
        return f"PreparedStatement({self.sql!r}, params={len(self._params)})"

    # -- binding ---------------------------------------------------------------

    def set_object(self, index: int, value: Any) -> None:
        if not 1 <= index <= len(self._params):
            raise IndexError(
                f"Parameter index {index} out of range (statement has {len(self._params)})"
            )
        self._params[index - 1] = value

    def clear_parameters(self) -> None:
        self._params = [_UNBOUND] * len(self._params)

    @property
    def parameters(self) -> tuple[Any, ...]:
        missing = [i + 1 for i, p in enumerate(self._params) if p is _UNBOUND]
        if missing:
            raise QueryError(f"No value bound for parameter(s) {missing} in: {self.sql}")
        return tuple(self._params)

    def driver_sql(self) -> str:
        return to_paramstyle(self.sql, self.paramstyle)

    # -- execution -------------------------------------------------------------

    def _run(self, cursor: Any) -> None:
        params = self.parameters
        if params:
            cursor.execute(self.driver_sql(), params)
        else:
            # No parameters: the driver must not apply %-formatting.
            cursor.execute(self.sql)

    def execute(self) -> None:
        with self._lock:
            cursor = self.raw.cursor()
            try:
                self._run(cursor)
            finally:
                cursor.close()

    def execute_update(self) -> int:
        with self._lock:
            cursor = self.raw.cursor()
            try:
                self._run(cursor)
                return cursor.rowcount
            finally:
                cursor.close()

    def execute_query(self) -> list[dict[str, Any]]:
        with self._lock:
            cursor = self.raw.cursor()
            try:
                self._run(cursor)
                return rows_to_dicts(cursor)
            finally:
                cursor.close()
