"""
Query-execution facade.

DBManager turns (table, field, key) triples into parameterised statements,
runs them on the holder's live connection and returns typed values. Reads
are synchronous; writes are submitted to a thread pool and hand back a
``Future`` the caller may wait on or ignore.

Listener order for every statement: ``on_query_sent`` before the driver
call, ``on_query_complete`` strictly after it succeeded.
"""

from __future__ import annotations

import logging
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Optional, Sequence

from nexsdb.config import get_worker_count
from nexsdb.db import sql
from nexsdb.db.connection import DBConnection
from nexsdb.db.statement import PreparedStatement
from nexsdb.exceptions import (
    ConnectionNotFoundError,
    DatabaseCreationError,
    DifferentArgLengthError,
    NoDataFoundError,
    QueryError,
)
from nexsdb.listener import QueryListener
from nexsdb.models.column import ColumnType, bind_value, coerce
from nexsdb.models.query import QueryRecord

logger = logging.getLogger(__name__)


class DBManager:
    """Key-field get/set/exists/insert/create operations over one DBConnection."""

    def __init__(
        self,
        connection: DBConnection,
        listener: Optional[QueryListener] = None,
        executor: Optional[Executor] = None,
    ):
        if connection is None:
            raise ValueError("DBManager requires a DBConnection")
        self._connection = connection
        self._listener = listener
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=get_worker_count(), thread_name_prefix="nexsdb"
        )

    def __enter__(self) -> DBManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Wait for submitted statements, then stop the owned thread pool."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # -- properties ------------------------------------------------------------

    @property
    def connection(self) -> DBConnection:
        return self._connection

    @property
    def query_listener(self) -> Optional[QueryListener]:
        return self._listener

    @query_listener.setter
    def query_listener(self, listener: Optional[QueryListener]) -> None:
        self._listener = listener

    # -- statements ------------------------------------------------------------

    def _require_raw(self) -> Any:
        raw = self._connection.connection
        if raw is None:
            raise ConnectionNotFoundError(
                f"No live connection to {self._connection.url}; connect() failed or was never called"
            )
        return raw

    def prepare_statement(self, query: str) -> Optional[PreparedStatement]:
        """Build a statement on the live connection, or ``None`` if it is closed."""
        raw = self._require_raw()
        if not self._connection.is_connected:
            logger.error(f"Cannot prepare statement, the connection to {self._connection.url} is closed: {query}")
            return None
        return PreparedStatement(query, raw, self._connection.paramstyle, self._connection.lock)

    def execute_statement(self, query: str) -> bool:
        """Run plain (non-parameterised) SQL. Driver errors are logged, not raised."""
        raw = self._require_raw()
        try:
            with self._connection.lock:
                cursor = raw.cursor()
                try:
                    cursor.execute(query)
                finally:
                    cursor.close()
        except Exception:
            logger.exception(f"Statement failed: {query}")
            return False
        return True

    def _record(self, stmt: PreparedStatement) -> QueryRecord:
        return QueryRecord(str(stmt), self._connection.database)

    def _notify(self, callback: str, *args: Any) -> None:
        listener = self._listener
        if listener is not None:
            getattr(listener, callback)(*args)

    def _run(self, stmt: PreparedStatement, update: bool) -> QueryRecord:
        record = self._record(stmt)
        self._notify("on_query_sent", record)
        try:
            if update:
                count = stmt.execute_update()
                logger.debug(f"{count} row(s) affected by: {stmt}")
            else:
                stmt.execute()
        except Exception:
            logger.exception(f"Background statement failed: {stmt}")
            raise
        self._notify("on_query_complete", record)
        return record

    def execute(self, stmt: PreparedStatement) -> Future[QueryRecord]:
        return self._executor.submit(self._run, stmt, False)

    def execute_update(self, stmt: PreparedStatement) -> Future[QueryRecord]:
        return self._executor.submit(self._run, stmt, True)

    def execute_query(self, stmt: PreparedStatement) -> list[dict[str, Any]]:
        """Run a SELECT on the calling thread and return its rows as dicts."""
        record = self._record(stmt)
        self._notify("on_query_sent", record)
        try:
            rows = stmt.execute_query()
        except QueryError:
            raise
        except Exception as e:
            logger.error(f"Query failed: {stmt}: {e}")
            raise QueryError(f"Query failed: {stmt}") from e
        self._notify("on_query_complete", record)
        return rows

    def execute_query_async(self, stmt: PreparedStatement) -> Future[list[dict[str, Any]]]:
        return self._executor.submit(self.execute_query, stmt)

    # -- keyed reads -----------------------------------------------------------

    def _select(self, table: str, key_field: str, key: Any) -> list[dict[str, Any]]:
        query = sql.select_where(table, key_field)
        stmt = self.prepare_statement(query)
        if stmt is None:
            raise QueryError(f"Could not prepare: {query}")
        stmt.set_object(1, bind_value(key))
        return self.execute_query(stmt)

    def exists(self, table: str, field: str, value: Any) -> bool:
        return len(self._select(table, field, value)) > 0

    def exists_string(self, table: str, field: str, lookup: str) -> bool:
        return self.exists(table, field, lookup)

    def exists_int(self, table: str, field: str, lookup: int) -> bool:
        return self.exists(table, field, lookup)

    def exists_long(self, table: str, field: str, lookup: int) -> bool:
        return self.exists(table, field, lookup)

    def exists_blob(self, table: str, field: str, lookup: bytes) -> bool:
        return self.exists(table, field, lookup)

    def exists_uuid(self, table: str, field: str, lookup: uuid.UUID) -> bool:
        return self.exists(table, field, lookup)

    def get(
        self,
        table: str,
        select_field: str,
        key_field: str,
        key: Any,
        column_type: Optional[ColumnType] = None,
    ) -> Any:
        """Return ``select_field`` of the first row whose ``key_field`` equals ``key``.

        Raises NoDataFoundError when nothing matches.
        """
        sql.validate_identifier(select_field, "field name")
        rows = self._select(table, key_field, key)
        if not rows:
            self._notify("on_no_data_found")
            raise NoDataFoundError(table, key_field, key, select_field)
        row = rows[0]
        if select_field not in row:
            raise QueryError(f"Column {select_field} not found in table {table}")
        value = coerce(row[select_field], column_type)
        self._notify("on_single_result", value)
        return value

    def get_all(
        self,
        table: str,
        select_field: str,
        key_field: str,
        key: Any,
        column_type: Optional[ColumnType] = None,
    ) -> list[Any]:
        """Like ``get`` but returns the column from every matching row."""
        sql.validate_identifier(select_field, "field name")
        rows = self._select(table, key_field, key)
        if rows and select_field not in rows[0]:
            raise QueryError(f"Column {select_field} not found in table {table}")
        values = [coerce(r[select_field], column_type) for r in rows]
        self._notify("on_multiple_results", values)
        return values

    def get_string(self, table: str, select_field: str, key_field: str, key: Any) -> str:
        return self.get(table, select_field, key_field, key, ColumnType.STRING)

    def get_int(self, table: str, select_field: str, key_field: str, key: Any) -> int:
        return self.get(table, select_field, key_field, key, ColumnType.INT)

    def get_boolean(self, table: str, select_field: str, key_field: str, key: Any) -> bool:
        return self.get(table, select_field, key_field, key, ColumnType.BOOLEAN)

    def get_long(self, table: str, select_field: str, key_field: str, key: Any) -> int:
        return self.get(table, select_field, key_field, key, ColumnType.LONG)

    def get_blob(self, table: str, select_field: str, key_field: str, key: Any) -> bytes:
        return self.get(table, select_field, key_field, key, ColumnType.BLOB)

    def get_uuid(self, table: str, select_field: str, key_field: str, key: Any) -> uuid.UUID:
        return self.get(table, select_field, key_field, key, ColumnType.UUID)

    # -- writes ----------------------------------------------------------------

    def set(
        self, table: str, set_field: str, key_field: str, value: Any, key: Any
    ) -> Optional[Future[QueryRecord]]:
        """UPDATE one column where ``key_field`` matches; runs in the background."""
        stmt = self.prepare_statement(sql.update_where(table, set_field, key_field))
        if stmt is None:
            return None
        stmt.set_object(1, bind_value(value))
        stmt.set_object(2, bind_value(key))
        return self.execute_update(stmt)

    def set_string(self, table: str, set_field: str, key_field: str, value: str, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def set_int(self, table: str, set_field: str, key_field: str, value: int, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def set_boolean(self, table: str, set_field: str, key_field: str, value: bool, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def set_long(self, table: str, set_field: str, key_field: str, value: int, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def set_blob(self, table: str, set_field: str, key_field: str, value: bytes, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def set_uuid(self, table: str, set_field: str, key_field: str, value: uuid.UUID, key: Any):
        return self.set(table, set_field, key_field, value, key)

    def insert(
        self, table: str, fields: Sequence[str], values: Sequence[Any]
    ) -> Optional[Future[QueryRecord]]:
        if len(fields) != len(values):
            raise DifferentArgLengthError(
                f"Got {len(fields)} field(s) but {len(values)} value(s); they have to match"
            )
        stmt = self.prepare_statement(sql.insert_into(table, fields))
        if stmt is None:
            return None
        for i, value in enumerate(values, start=1):
            stmt.set_object(i, bind_value(value))
        return self.execute(stmt)

    # -- schema ----------------------------------------------------------------

    def create_database(self, name: str) -> bool:
        if not self._connection.is_root:
            raise DatabaseCreationError(
                f"Database {name} can't be created because the connection points to "
                f"'{self._connection.database}'. Switch to root first."
            )
        return self.execute_statement(sql.create_database(name))

    def create_table(self, name: str, columns: Sequence[str]) -> bool:
        stmt = self.prepare_statement(sql.create_table(name, columns))
        if stmt is None:
            return False
        try:
            stmt.execute_update()
        except Exception:
            logger.exception(f"Creating table {name} failed: {stmt}")
            return False
        return True
