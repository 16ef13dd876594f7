"""SQL text builders for the key-field CRUD operations.

Identifiers (database, table and column names) are interpolated into the
text; values never are, they are always bound as ``?`` parameters. Every
identifier passes ``validate_identifier`` before it reaches a template.

The shapes below are part of the public contract and are matched exactly
by callers and tests, including the unquoted table name in UPDATE.
"""

from __future__ import annotations

import re
from typing import Sequence

from nexsdb.exceptions import InvalidIdentifierError

MAX_IDENTIFIER_LENGTH = 64

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_COLUMN_DEF_HEAD = re.compile(r"\s*([A-Za-z_$][A-Za-z0-9_$]*)")
_FORBIDDEN_IN_DDL = (";", "`", "--", "/*", "#")


def validate_identifier(name: str, kind: str = "identifier") -> str:
    if not isinstance(name, str) or not _IDENTIFIER.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid {kind}: {name!r}")
    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            f"Invalid {kind}: {name!r} is longer than {MAX_IDENTIFIER_LENGTH} characters"
        )
    return name


def validate_column_definition(definition: str) -> str:
    """Column definitions are DDL fragments such as ``coins INT DEFAULT 0``.

    The leading column name must be a valid identifier and the fragment may
    not open a new statement or a comment.
    """
    if not isinstance(definition, str):
        raise InvalidIdentifierError(f"Invalid column definition: {definition!r}")
    for token in _FORBIDDEN_IN_DDL:
        if token in definition:
            raise InvalidIdentifierError(
                f"Invalid column definition {definition!r}: contains {token!r}"
            )
    head = _COLUMN_DEF_HEAD.match(definition)
    if head is None:
        raise InvalidIdentifierError(f"Invalid column definition: {definition!r}")
    validate_identifier(head.group(1), "column name")
    return definition.strip()


# -- statement templates ------------------------------------------------------

def select_where(table: str, key_field: str) -> str:
    validate_identifier(table, "table name")
    validate_identifier(key_field, "field name")
    return f"SELECT * FROM `{table}` WHERE {key_field} = ?"


def update_where(table: str, set_field: str, key_field: str) -> str:
    validate_identifier(table, "table name")
    validate_identifier(set_field, "field name")
    validate_identifier(key_field, "field name")
    return f"UPDATE {table} SET {set_field} = ? WHERE {key_field} = ?"


def create_database(name: str) -> str:
    validate_identifier(name, "database name")
    return f"CREATE DATABASE IF NOT EXISTS `{name}`"


def create_table(name: str, columns: Sequence[str]) -> str:
    validate_identifier(name, "table name")
    if not columns:
        raise ValueError("create_table needs at least one column definition")
    body = ", ".join(validate_column_definition(c) for c in columns)
    return f"CREATE TABLE IF NOT EXISTS `{name}` ({body})"


def insert_into(table: str, fields: Sequence[str]) -> str:
    validate_identifier(table, "table name")
    if not fields:
        raise ValueError("insert needs at least one field")
    names = ", ".join(validate_identifier(f, "field name") for f in fields)
    placeholders = ", ".join("?" for _ in fields)
    return f"INSERT INTO `{table}` ({names}) VALUE ({placeholders})"
