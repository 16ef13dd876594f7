"""Unit tests for YAML seeding."""

from __future__ import annotations

import tempfile
import unittest
from concurrent.futures import Future
from pathlib import Path
from unittest.mock import MagicMock

from nexsdb.exceptions import ConnectionNotFoundError
from nexsdb.manager import DBManager
from nexsdb.models import QueryRecord
from nexsdb.seed import apply_seed, load_seed

from helpers import make_fake_connection

SEED_YAML = """
database: shop
tables:
  users:
    columns:
      - name VARCHAR(32) PRIMARY KEY
      - coins INT
    rows:
      - {name: Alice, coins: 10}
      - {name: Bob, coins: 3}
  empty:
    columns: ["id INT"]
"""


def _done(result=None, error=None) -> Future:
    f: Future = Future()
    if error is not None:
        f.set_exception(error)
    else:
        f.set_result(result or QueryRecord())
    return f


def _fake_manager(is_root: bool = True) -> MagicMock:
    manager = MagicMock(spec=DBManager)
    manager.connection.is_root = is_root
    manager.connection.database = "" if is_root else "other"
    manager.connection.connect_to_root.return_value = True
    manager.connection.switch_database.return_value = True
    manager.create_database.return_value = True
    manager.create_table.return_value = True
    manager.insert.side_effect = lambda *a, **kw: _done()
    return manager


class TestLoadSeed(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        tmp.write(text)
        tmp.close()
        return Path(tmp.name)

    def test_load(self):
        seed = load_seed(self._write(SEED_YAML))
        self.assertEqual(seed["database"], "shop")
        self.assertEqual(seed["tables"]["users"]["rows"][0], {"name": "Alice", "coins": 10})

    def test_empty_file(self):
        self.assertEqual(load_seed(self._write("")), {})

    def test_rejects_non_mapping(self):
        with self.assertRaises(ValueError):
            load_seed(self._write("- a\n- b\n"))
        with self.assertRaises(ValueError):
            load_seed(self._write("tables: [users]\n"))


class TestApplySeed(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        tmp.write(SEED_YAML)
        tmp.close()
        self.seed = load_seed(tmp.name)

    def test_full_seed(self):
        manager = _fake_manager()
        report = apply_seed(manager, self.seed)
        manager.create_database.assert_called_once_with("shop")
        manager.connection.switch_database.assert_called_once_with("shop")
        self.assertEqual(report.database, "shop")
        self.assertEqual(report.tables, 2)
        self.assertEqual(report.rows, 2)
        manager.insert.assert_any_call("users", ["name", "coins"], ["Alice", 10])

    def test_switches_to_root_first(self):
        manager = _fake_manager(is_root=False)
        apply_seed(manager, self.seed)
        manager.connection.connect_to_root.assert_called_once()

    def test_failed_table_skips_rows(self):
        manager = _fake_manager()
        manager.create_table.side_effect = lambda name, cols: name != "users"
        report = apply_seed(manager, self.seed)
        self.assertEqual(report.failed_tables, ["users"])
        self.assertEqual(report.tables, 1)
        manager.insert.assert_not_called()

    def test_failed_rows_not_counted(self):
        manager = _fake_manager()
        manager.insert.side_effect = lambda *a, **kw: _done(error=RuntimeError("dup"))
        with self.assertLogs("nexsdb.seed", level="WARNING"):
            report = apply_seed(manager, self.seed)
        self.assertEqual(report.rows, 0)

    def test_failed_switch_to_database_stops_before_tables(self):
        manager = _fake_manager()
        manager.connection.switch_database.return_value = False
        with self.assertRaises(ConnectionNotFoundError):
            apply_seed(manager, self.seed)
        manager.create_table.assert_not_called()
        manager.insert.assert_not_called()

    def test_failed_switch_to_root_stops_before_create(self):
        manager = _fake_manager(is_root=False)
        manager.connection.connect_to_root.return_value = False
        with self.assertRaises(ConnectionNotFoundError):
            apply_seed(manager, self.seed)
        manager.create_database.assert_not_called()
        manager.create_table.assert_not_called()

    def test_failed_reconnect_on_real_holder_writes_nothing(self):
        holder, connector, raw, cursor = make_fake_connection(database="")
        connector.side_effect = OSError("Unknown database")
        with DBManager(holder) as manager, self.assertLogs("nexsdb.db.connection", level="ERROR"):
            with self.assertRaises(ConnectionNotFoundError):
                apply_seed(manager, self.seed)
        executed = [c.args[0] for c in cursor.execute.call_args_list]
        self.assertEqual(executed, ["CREATE DATABASE IF NOT EXISTS `shop`"])

    def test_without_database_keeps_current(self):
        manager = _fake_manager(is_root=False)
        report = apply_seed(manager, {"tables": {"t": {"columns": ["id INT"]}}})
        manager.create_database.assert_not_called()
        manager.connection.switch_database.assert_not_called()
        self.assertEqual(report.database, "other")


if __name__ == "__main__":
    unittest.main()
