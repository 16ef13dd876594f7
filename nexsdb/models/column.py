"""Column types a keyed lookup can coerce its result into."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Optional

from nexsdb.exceptions import ColumnTypeError


_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


class ColumnType(str, Enum):
    STRING = "string"
    INT = "int"
    BOOLEAN = "boolean"
    LONG = "long"
    BLOB = "blob"
    UUID = "uuid"

    def coerce(self, value: Any) -> Any:
        """Convert a raw driver value; ``None`` (SQL NULL) passes through."""
        if value is None:
            return None
        try:
            return _COERCERS[self](value)
        except (TypeError, ValueError) as e:
            raise ColumnTypeError(
                f"Cannot convert {type(value).__name__} value {value!r} to {self.value}"
            ) from e


def _to_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("fractional value")
        return int(value)
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    return int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    # MySQL BIT(1) columns arrive as a single byte.
    if isinstance(value, (bytes, bytearray)):
        return any(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError("not a boolean")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, int):
        raise TypeError("integers are not blobs")
    return bytes(value)


def _to_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) == 16:
            return uuid.UUID(bytes=bytes(value))
        return uuid.UUID(bytes(value).decode("ascii"))
    return uuid.UUID(str(value))


_COERCERS = {
    ColumnType.STRING: _to_str,
    ColumnType.INT: _to_int,
    ColumnType.BOOLEAN: _to_bool,
    ColumnType.LONG: _to_int,
    ColumnType.BLOB: _to_bytes,
    ColumnType.UUID: _to_uuid,
}


def coerce(value: Any, column_type: Optional[ColumnType]) -> Any:
    """Module-level shortcut: no column type means the raw driver value."""
    if column_type is None:
        return value
    return column_type.coerce(value)


def bind_value(value: Any) -> Any:
    """Prepare a Python value for positional binding; UUIDs go as text."""
    if isinstance(value, uuid.UUID):
        return str(value)
    return value
