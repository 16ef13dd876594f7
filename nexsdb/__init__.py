"""nexsdb: a convenience layer over a MySQL driver."""

from nexsdb.config import ConnectionConfig, get_connection_config
from nexsdb.db.connection import DBConnection
from nexsdb.db.statement import PreparedStatement
from nexsdb.exceptions import (
    ColumnTypeError,
    ConnectionNotFoundError,
    DatabaseCreationError,
    DifferentArgLengthError,
    InvalidIdentifierError,
    NexsDBError,
    NoDataFoundError,
    QueryError,
)
from nexsdb.listener import LoggingQueryListener, QueryListener
from nexsdb.manager import DBManager
from nexsdb.models import ColumnType, QueryRecord

__version__ = "1.0.0"

__all__ = [
    "ConnectionConfig", "get_connection_config",
    "DBConnection", "PreparedStatement", "DBManager",
    "QueryListener", "LoggingQueryListener",
    "ColumnType", "QueryRecord",
    "NexsDBError", "ConnectionNotFoundError", "NoDataFoundError",
    "DatabaseCreationError", "DifferentArgLengthError",
    "InvalidIdentifierError", "QueryError", "ColumnTypeError",
]
