"""Execution exceptions: datastore connection, query and transport failures.

The underlying datastore message is kept verbatim in ``reason`` so an
operator sees the raw diagnostic.
"""

from typing import Optional

from .base import OutcomesLookupError


class ExecutionError(OutcomesLookupError):
    """Base class for errors raised while talking to the datastore."""

    pass


class ConnectionFailed(ExecutionError):
    """Raised when the datastore cannot be opened."""

    def __init__(self, dsn: str, reason: str):
        super().__init__(
            f"Cannot connect to datastore: {dsn}",
            details={"dsn": dsn, "reason": reason},
        )
        self.dsn = dsn
        self.reason = reason


class QueryRejected(ExecutionError):
    """Raised when the datastore refuses to run the query."""

    def __init__(self, query: str, reason: str):
        super().__init__(f"Query rejected by datastore: {reason}")
        self.query = query
        self.reason = reason


class StreamFailed(ExecutionError):
    """Raised when fetching rows fails after the query was accepted."""

    def __init__(self, reason: str, rows_read: Optional[int] = None):
        super().__init__("Row stream failed", details={"reason": reason, "rows_read": rows_read})
        self.reason = reason
        self.rows_read = rows_read


class StreamConsumed(ExecutionError):
    """Raised when a row stream is iterated a second time."""

    def __init__(self):
        super().__init__("Row stream already consumed; run the query again to re-read it")
