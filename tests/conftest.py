"""Gate tests that need a real MySQL server behind --live-mysql."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    config.addinivalue_line("markers", "live_mysql: requires the MySQL server described by NEXSDB_* variables")


def pytest_addoption(parser):
    parser.addoption("--live-mysql", action="store_true", default=False, help="Run live_mysql tests")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--live-mysql"):
        return
    skip_live = pytest.mark.skip(reason="Need --live-mysql option to run")
    for item in items:
        if "live_mysql" in item.keywords:
            item.add_marker(skip_live)
