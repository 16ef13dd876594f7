"""
Central configuration loader.
Reads connection settings from environment variables (via .env).
NEVER prints secret values.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")

URL_SCHEME = "mysql://"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


# ---------------------------------------------------------------------------
# Connection target
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ConnectionConfig:
    """The five values a live connection is opened with.

    ``database == ""`` is the root context: no schema is selected and new
    databases may be created through the connection.
    """

    host: str
    port: int
    database: str
    username: str
    password: str = field(default="", repr=False)

    @property
    def url(self) -> str:
        return f"{URL_SCHEME}{self.host}:{self.port}/{self.database}"

    @property
    def is_root(self) -> bool:
        return self.database == ""

    def with_changes(self, **changes: Any) -> ConnectionConfig:
        return dataclasses.replace(self, **changes)


def get_connection_config() -> ConnectionConfig:
    port = _get("NEXSDB_PORT", default=str(DEFAULT_PORT))
    try:
        port_num = int(port)  # type: ignore[arg-type]
    except ValueError:
        raise EnvironmentError(f"NEXSDB_PORT must be an integer, got {port!r}") from None
    return ConnectionConfig(
        host=_get("NEXSDB_HOST", default=DEFAULT_HOST),  # type: ignore[arg-type]
        port=port_num,
        database=_get("NEXSDB_DATABASE", default=""),  # type: ignore[arg-type]
        username=_get("NEXSDB_USER", required=True),  # type: ignore[arg-type]
        password=_get("NEXSDB_PASSWORD", default=""),  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Background execution
# ---------------------------------------------------------------------------
def get_worker_count() -> Optional[int]:
    """Size of the facade's thread pool; ``None`` keeps the executor default."""
    raw = _get("NEXSDB_WORKERS")
    if not raw:
        return None
    try:
        workers = int(raw)
    except ValueError:
        raise EnvironmentError(f"NEXSDB_WORKERS must be an integer, got {raw!r}") from None
    if workers < 1:
        raise EnvironmentError("NEXSDB_WORKERS must be at least 1")
    return workers


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_repo_root() -> Path:
    return _REPO_ROOT
