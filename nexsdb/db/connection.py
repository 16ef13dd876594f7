"""Connection holder: owns one live MySQL connection and its credentials."""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Callable, Optional

import pymysql

from nexsdb.config import ConnectionConfig
from nexsdb.redact import redact_text

logger = logging.getLogger(__name__)

Connector = Callable[[ConnectionConfig], Any]


def pymysql_connector(config: ConnectionConfig) -> pymysql.connections.Connection:
    """Open a PyMySQL connection; an empty database means no schema selected."""
    return pymysql.connect(
        host=config.host,
        port=config.port,
        user=config.username,
        password=config.password,
        database=config.database or None,
        charset="utf8mb4",
        autocommit=True,
    )


class DBConnection:
    """
    Holder for a single live driver connection.

    Any change to host, port, database or credentials re-establishes the
    connection with the full updated tuple. A failed (re)connect is logged
    and reported by ``connect()`` returning ``False``; the previous handle,
    if any, stays in place and the failure surfaces on next use.

    The replaced handle is not closed on reconnect. Callers that switch
    targets often should ``close()`` first.

    PyMySQL connections must not be used by two threads at once.
    ``lock`` serialises every cursor on the handle together with
    reconnect and close; statements built by DBManager hold it while they
    run.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        database: str = "",
        *,
        connector: Optional[Connector] = None,
        paramstyle: str = "format",
    ):
        self._config = ConnectionConfig(host, port, database, username, password)
        self._connector: Connector = connector or pymysql_connector
        self.paramstyle = paramstyle
        self._conn: Optional[Any] = None
        self._lock = threading.RLock()
        self.connect(host, port, database, username, password)

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs: Any) -> DBConnection:
        return cls(
            config.host, config.port, config.username, config.password,
            config.database, **kwargs,
        )

    # -- context manager -------------------------------------------------------

    def __enter__(self) -> DBConnection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "connected" if self.is_connected else "disconnected"
        return f"<DBConnection {self.url} user={self.username} {state}>"

    # -- connection lifecycle --------------------------------------------------

    def connect(self, host: str, port: int, database: str, username: str, password: str) -> bool:
        """(Re)establish the driver connection. Never raises on driver errors."""
        self._config = ConnectionConfig(host, port, database, username, password)
        logger.info("Attempting to initialize a connection to the database.")

        try:
            with self._lock:
                if self._conn is not None and _is_open(self._conn):
                    logger.warning(
                        "The connection has already been set. Note that switching "
                        "connections might cause unexpected errors!"
                    )
                self._conn = self._connector(self._config)
        except Exception as e:
            extra = [(re.compile(re.escape(password)), "[REDACTED]")] if password else None
            message = redact_text(str(e), extra)
            logger.error(
                f"A connection couldn't be established to {self._config.url} "
                f"as {username}: {message}",
                exc_info=True,
            )
            return False

        logger.info(
            f"Successfully established a connection towards the database. "
            f"Host: {host} | Port: {port} | Database: {database} | Username: {username}"
        )
        return True

    def close(self) -> None:
        with self._lock:
            conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except Exception as e:
            logger.warning(f"Closing the connection to {self.url} failed: {e}")

    def connect_to_root(self) -> bool:
        c = self._config
        return self.connect(c.host, c.port, "", c.username, c.password)

    def switch_database(self, new_database: str) -> bool:
        c = self._config
        return self.connect(c.host, c.port, new_database, c.username, c.password)

    def switch_host(self, new_host: str) -> bool:
        c = self._config
        return self.connect(new_host, c.port, c.database, c.username, c.password)

    def switch_port(self, new_port: int) -> bool:
        c = self._config
        return self.connect(c.host, new_port, c.database, c.username, c.password)

    def switch_user(self, new_username: str, new_password: str) -> bool:
        c = self._config
        return self.connect(c.host, c.port, c.database, new_username, new_password)

    # -- accessors -------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def connection(self) -> Optional[Any]:
        return self._conn

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and _is_open(self._conn)

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def database(self) -> str:
        return self._config.database

    @property
    def username(self) -> str:
        return self._config.username

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def is_root(self) -> bool:
        return self._config.is_root


def _is_open(conn: Any) -> bool:
    # PyMySQL exposes ``open``; other DB-API drivers are assumed open.
    return bool(getattr(conn, "open", True))
