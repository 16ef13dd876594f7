"""Driver layer: connection holder, prepared statements and SQL templates."""

from nexsdb.db.connection import DBConnection, pymysql_connector
from nexsdb.db.statement import PreparedStatement

__all__ = ["DBConnection", "PreparedStatement", "pymysql_connector"]
