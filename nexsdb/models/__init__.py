"""Value types shared by the connection holder, the facade and listeners."""

from nexsdb.models.column import ColumnType, bind_value, coerce
from nexsdb.models.query import QueryRecord

__all__ = [
    "ColumnType", "bind_value", "coerce",
    "QueryRecord",
]
