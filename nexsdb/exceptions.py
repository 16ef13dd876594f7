"""Error kinds raised by the connection holder and the query facade."""


class NexsDBError(Exception):
    """Base class for every error raised by nexsdb."""


class ConnectionNotFoundError(NexsDBError):
    """A statement was requested but the holder has no live connection."""


class NoDataFoundError(NexsDBError):
    """A keyed lookup matched zero rows."""

    def __init__(self, table: str, key_field: str, key: object, select_field: str):
        self.table = table
        self.key_field = key_field
        self.key = key
        self.select_field = select_field
        super().__init__(
            f"No results were found while looking up {key!r} in field {key_field} "
            f"of table {table} (requested column {select_field})"
        )


class DatabaseCreationError(NexsDBError):
    """CREATE DATABASE attempted while a specific database is selected."""


class DifferentArgLengthError(NexsDBError):
    """Insert called with a different number of fields and values."""


class InvalidIdentifierError(NexsDBError, ValueError):
    """A table, database or column name failed the identifier allow-list."""


class QueryError(NexsDBError):
    """The driver failed while running a statement whose result was awaited."""


class ColumnTypeError(NexsDBError, TypeError):
    """A column value could not be converted to the requested type."""
