"""Query listener: optional observer attached to a DBManager."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from nexsdb.models.query import QueryRecord


class QueryListener:
    """
    Every callback is a no-op; subclass and override the ones you need.

    Callbacks run on whichever thread executed the statement (the caller's
    thread for synchronous reads, a pool worker for submitted work).
    """

    def on_query_sent(self, record: QueryRecord) -> None:
        pass

    def on_query_complete(self, record: QueryRecord) -> None:
        pass

    def on_no_data_found(self) -> None:
        pass

    def on_single_result(self, result: Any) -> None:
        pass

    def on_multiple_results(self, results: Sequence[Any]) -> None:
        pass


class LoggingQueryListener(QueryListener):
    """Writes every callback to a logger at DEBUG (or the given level)."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def on_query_sent(self, record: QueryRecord) -> None:
        self.logger.log(self.level, f"[{record.identifier}] sent to '{record.database}': {record.query}")

    def on_query_complete(self, record: QueryRecord) -> None:
        self.logger.log(self.level, f"[{record.identifier}] completed on '{record.database}': {record.query}")

    def on_no_data_found(self) -> None:
        self.logger.log(self.level, "Lookup returned no rows")

    def on_single_result(self, result: Any) -> None:
        self.logger.log(self.level, f"Lookup returned {type(result).__name__}")

    def on_multiple_results(self, results: Sequence[Any]) -> None:
        self.logger.log(self.level, f"Lookup returned {len(results)} value(s)")
