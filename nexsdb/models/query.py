"""Query record: descriptor of one statement handed to the driver."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class QueryRecord:
    """Immutable observability artifact created fresh for every statement.

    It is not a handle to in-flight work; listeners receive it after the
    fact and may keep or discard it.
    """

    query: str = ""
    database: str = ""
    identifier: uuid.UUID = field(default_factory=uuid.uuid4)

    def to_dict(self) -> dict[str, str]:
        return {
            "query": self.query,
            "database": self.database,
            "identifier": str(self.identifier),
        }
