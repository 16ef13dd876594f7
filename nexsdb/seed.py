"""Bootstrap a database from a YAML description of tables and rows.

Document shape::

    database: shop                # optional
    tables:
      users:
        columns: ["name VARCHAR(32) PRIMARY KEY", "coins INT"]
        rows:
          - {name: Alice, coins: 10}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from nexsdb.exceptions import ConnectionNotFoundError
from nexsdb.manager import DBManager

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    database: str = ""
    tables: int = 0
    rows: int = 0
    failed_tables: list[str] = field(default_factory=list)


def load_seed(path: Path | str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Seed file {path} must contain a mapping at the top level")
    tables = data.get("tables") or {}
    if not isinstance(tables, dict):
        raise ValueError(f"'tables' in {path} must be a mapping of table name to definition")
    return data


def apply_seed(manager: DBManager, seed: dict[str, Any]) -> SeedReport:
    """Create the database (from root), then each table, then insert its rows.

    Inserts are awaited so the report only counts rows the driver accepted.
    Raises ConnectionNotFoundError if the switch to root or to the seeded
    database fails, before any table is touched.
    """
    conn = manager.connection
    report = SeedReport(database=conn.database)

    database = seed.get("database")
    if database:
        if not conn.is_root and not conn.connect_to_root():
            raise ConnectionNotFoundError(f"Could not connect to {conn.url} to create database {database}")
        if manager.create_database(database):
            logger.info(f"Database {database} ready")
        if not conn.switch_database(database):
            raise ConnectionNotFoundError(f"Could not switch to database {database} at {conn.url}")
        report.database = database

    for name, table_def in (seed.get("tables") or {}).items():
        columns = (table_def or {}).get("columns") or []
        if not manager.create_table(name, columns):
            report.failed_tables.append(name)
            continue
        report.tables += 1

        for row in (table_def or {}).get("rows") or []:
            fields = list(row.keys())
            future = manager.insert(name, fields, [row[f] for f in fields])
            if future is None:
                continue
            try:
                future.result()
            except Exception as e:
                logger.warning(f"  Skipping row {row!r} in {name}: {e}")
                continue
            report.rows += 1

    return report
