#!/usr/bin/env python3
"""Initialize a MySQL database and optionally seed it from a YAML file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nexsdb.config import get_connection_config
from nexsdb.db.connection import DBConnection
from nexsdb.exceptions import ConnectionNotFoundError
from nexsdb.manager import DBManager
from nexsdb.seed import apply_seed, load_seed


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--seed", type=str, help="YAML file with database/table/row definitions")
    parser.add_argument("--database", type=str, help="Create this database (overrides the seed file)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = get_connection_config()
    seed = load_seed(Path(args.seed)) if args.seed else {}
    if args.database:
        seed["database"] = args.database

    conn = DBConnection.from_config(config)
    if not conn.is_connected:
        print(f"Could not connect to {config.url}")
        sys.exit(1)

    try:
        with DBManager(conn) as manager:
            report = apply_seed(manager, seed)
    except ConnectionNotFoundError as e:
        print(e)
        sys.exit(1)
    finally:
        conn.close()

    print(f"Database: {report.database or '(root)'}")
    print(f"  Tables created: {report.tables}")
    print(f"  Rows inserted:  {report.rows}")
    for name in report.failed_tables:
        print(f"  Failed table:   {name}")
    print("Done.")


if __name__ == "__main__":
    main()
