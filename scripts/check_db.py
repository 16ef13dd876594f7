"""Quick check of a table: does a key exist, and what is stored under it."""
import argparse
import logging
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nexsdb import DBConnection, DBManager, LoggingQueryListener, NoDataFoundError
from nexsdb.config import get_connection_config

parser = argparse.ArgumentParser(description="Probe one keyed row")
parser.add_argument("table")
parser.add_argument("key_field")
parser.add_argument("key")
parser.add_argument("--field", action="append", default=[], help="Column to print (repeatable)")
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

config = get_connection_config()
print(f"=== {config.url} as {config.username} ===")
conn = DBConnection.from_config(config)
if not conn.is_connected:
    sys.exit(1)

with DBManager(conn, listener=LoggingQueryListener()) as db:
    found = db.exists(args.table, args.key_field, args.key)
    print(f"{args.table}.{args.key_field} = {args.key!r}: {'found' if found else 'missing'}")
    for field in args.field:
        try:
            print(f"  {field}: {db.get(args.table, field, args.key_field, args.key)!r}")
        except NoDataFoundError:
            print(f"  {field}: N/A")
conn.close()
